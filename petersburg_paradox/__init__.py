"""St. Petersburg Paradox Monte Carlo simulator"""

from ._version import __version__

# Use lazy imports so that importing the package (e.g. for __version__)
# does not pull in numpy, pandas and scipy.

__all__ = [
    "__version__",
    "Config",
    "ConfigurationError",
    "DecileProgressReporter",
    "MomentStatistics",
    "MonteCarloEngine",
    "PetersburgGame",
    "SimulationConfig",
    "SimulationResults",
    "calculate_moment_statistics",
    "format_report",
    "payoff",
    "truncating_median",
]


def __getattr__(name):
    """Lazy import modules on first attribute access."""
    if name in ("Config", "ConfigurationError", "SimulationConfig"):
        from .config import Config, ConfigurationError, SimulationConfig

        return locals()[name]
    elif name in ("PetersburgGame", "payoff"):
        from .game import PetersburgGame, payoff

        return locals()[name]
    elif name in ("MomentStatistics", "calculate_moment_statistics", "truncating_median"):
        from .summary_statistics import (
            MomentStatistics,
            calculate_moment_statistics,
            truncating_median,
        )

        return locals()[name]
    elif name in ("MonteCarloEngine", "SimulationResults"):
        from .monte_carlo import MonteCarloEngine, SimulationResults

        return locals()[name]
    elif name == "DecileProgressReporter":
        from .progress_monitor import DecileProgressReporter

        return DecileProgressReporter
    elif name == "format_report":
        from .reporting import format_report

        return format_report
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
