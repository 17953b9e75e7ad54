"""Allow ``python -m petersburg_paradox``."""

from .cli import main

raise SystemExit(main())
