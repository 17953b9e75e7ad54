"""Lightweight decile progress reporting for sample-set simulations.

The engine reports progress through a plain callback so the simulation loop
never performs I/O itself. :class:`DecileProgressReporter` is the console
implementation: it prints ``"<p> percent done."`` once per decile of samples
processed.
"""

from dataclasses import dataclass, field
from datetime import timedelta
import logging
import sys
from typing import FrozenSet, List, Optional, TextIO

from .config.constants import PROGRESS_DECILES

logger = logging.getLogger(__name__)


def decile_checkpoints(total: int, n_reports: int = PROGRESS_DECILES) -> FrozenSet[int]:
    """Completed-sample counts at which progress should be reported.

    Returns ``ceil(k * total / n_reports)`` for ``k = 1..n_reports``. When
    ``total < n_reports`` several deciles collapse onto the same count, so
    fewer than ``n_reports`` checkpoints are returned.

    Reports follow completion, so a full run announces 10 through 100
    percent. Nothing is reported before a decile starts, so 0 percent is
    never printed.

    Args:
        total: Total number of samples in the run.
        n_reports: Number of evenly spaced reports wanted.

    Returns:
        Set of completed counts, always containing ``total``.
    """
    if total < 1:
        raise ValueError(f"total must be positive, got {total}")
    return frozenset(-(-k * total // n_reports) for k in range(1, n_reports + 1))


@dataclass
class ProgressReport:
    """One emitted progress report.

    Attributes:
        completed: Samples completed when the report was emitted.
        total: Total samples planned.
        percent: Integer percent complete (truncated).
        elapsed_time: Seconds since the run started.
    """

    completed: int
    total: int
    percent: int
    elapsed_time: float

    @property
    def estimated_time_remaining(self) -> float:
        """Linear ETA in seconds based on the rate so far."""
        if self.completed == 0:
            return 0.0
        return self.elapsed_time / self.completed * (self.total - self.completed)


@dataclass
class DecileProgressReporter:
    """Console progress reporter for :meth:`MonteCarloEngine.run`.

    Instances are callables with the engine's progress-callback signature
    ``(completed, total, elapsed_seconds)``.

    Attributes:
        stream: Text stream to print to (``sys.stdout`` when ``None``).
        show_console: Print reports; when ``False`` they are only recorded.
        reports: Every report emitted so far.
    """

    stream: Optional[TextIO] = None
    show_console: bool = True
    reports: List[ProgressReport] = field(default_factory=list)

    def __call__(self, completed: int, total: int, elapsed_time: float) -> None:
        percent = 100 * completed // total
        report = ProgressReport(completed, total, percent, elapsed_time)
        self.reports.append(report)

        if self.show_console:
            print(f"{percent} percent done.", file=self.stream or sys.stdout)

        logger.debug(
            "Progress %d/%d (%d%%) elapsed=%s eta=%s",
            completed,
            total,
            percent,
            timedelta(seconds=int(elapsed_time)),
            timedelta(seconds=int(report.estimated_time_remaining)),
        )
