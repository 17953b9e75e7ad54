"""Command-line entry point for :mod:`petersburg_paradox`.

With no arguments the program runs the reference experiment (500 sample
means of 1,000,000 games each), prints decile progress, and then prints the
final report.

Example
-------
petersburg-paradox --num-samples 200 --num-trials 100000 --seed 42
"""

import argparse
import logging
from pathlib import Path
import sys
from typing import Optional, Sequence

from pydantic import ValidationError

from .config import Config, ConfigurationError, build_config
from .config.utils import format_validation_issues
from .monte_carlo import MonteCarloEngine
from .progress_monitor import DecileProgressReporter
from .reporting import export_sample_means

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="petersburg-paradox",
        description="Monte Carlo estimate of the St. Petersburg paradox sample-mean distribution.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML configuration file (optional; command-line options take precedence)",
    )
    parser.add_argument(
        "--num-samples",
        type=int,
        default=None,
        help="Number of sample means to draw (default: 500)",
    )
    parser.add_argument(
        "--num-trials",
        type=int,
        default=None,
        help="Number of games averaged per sample (default: 1,000,000)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed (default: OS entropy)")
    parser.add_argument(
        "--method",
        choices=["vectorized", "iterative"],
        default=None,
        help="Flip-count draw strategy (default: vectorized)",
    )
    parser.add_argument(
        "--progress-bar", action="store_true", help="Show a tqdm progress bar over samples"
    )
    parser.add_argument("--quiet", action="store_true", help="Suppress decile progress lines")
    parser.add_argument(
        "--export-csv",
        type=Path,
        default=None,
        help="Write the sample means to this CSV file (optional)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Package log level (default: WARNING)",
    )
    return parser


def _collect_overrides(args: argparse.Namespace) -> dict:
    overrides = {}
    if args.num_samples is not None:
        overrides["simulation.num_samples"] = args.num_samples
    if args.num_trials is not None:
        overrides["simulation.num_trials"] = args.num_trials
    if args.seed is not None:
        overrides["simulation.seed"] = args.seed
    if args.method is not None:
        overrides["simulation.method"] = args.method
    if args.progress_bar:
        overrides["simulation.progress_bar"] = True
    if args.log_level is not None:
        overrides["logging.level"] = args.log_level
    return overrides


def load_run_config(args: argparse.Namespace) -> Config:
    """Resolve the run configuration from a YAML file and CLI options.

    Raises:
        ConfigurationError: If the file is missing or any value is invalid.
    """
    try:
        base = Config.from_yaml(args.config) if args.config is not None else Config()
    except FileNotFoundError as e:
        raise ConfigurationError([str(e)]) from e
    except ValidationError as e:
        raise ConfigurationError(format_validation_issues(e.errors())) from e
    return build_config(base, **_collect_overrides(args))


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the simulation from the command line.

    Args:
        argv: Argument list; defaults to ``sys.argv[1:]``.

    Returns:
        Process exit code: 0 on success, 2 on a configuration error.
    """
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    try:
        config = load_run_config(args)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    config.setup_logging()
    config.validate_run()

    reporter = None
    if not args.quiet:
        print("Calculating payoffs: ")
        reporter = DecileProgressReporter(stream=sys.stdout)

    engine = MonteCarloEngine(config.simulation)
    results = engine.run(progress_callback=reporter)

    print(results.summary())

    out_csv: Optional[Path] = args.export_csv
    if out_csv is None and config.output.export_sample_means:
        out_csv = config.output.sample_means_path
    if out_csv is not None:
        export_sample_means(results.sample_means, out_csv)
        if not args.quiet:
            print(f"\nWrote {results.num_samples} sample means to {out_csv}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
