"""Text report and export helpers for simulation results.

This is the thin presentation layer over :class:`MomentStatistics`. It never
changes a computed value; it only formats or writes it.
"""

import logging
from pathlib import Path
from typing import Sequence, Union

import numpy as np
import pandas as pd

from .summary_statistics import MomentStatistics

logger = logging.getLogger(__name__)


def _fmt(value: float) -> str:
    """Format a statistic with six significant digits (``inf``/``nan`` kept)."""
    return f"{value:g}"


def format_report(statistics: MomentStatistics, num_trials: int) -> str:
    """Render the final labeled report.

    Args:
        statistics: Aggregated statistics of the sample set.
        num_trials: Number of games averaged into each sample mean.

    Returns:
        Multi-line report, one labeled statistic per line.
    """
    lines = [
        f"Through {statistics.num_samples} samples of {num_trials} trials each, "
        "the sample means had the following properties: ",
        f"Mean: {_fmt(statistics.mean)}",
        f"Median: {_fmt(statistics.median)}",
        f"Standard Deviation: {_fmt(statistics.std)}",
        f"Range: {_fmt(statistics.minimum)} to {_fmt(statistics.maximum)}",
        f"Skewness: {_fmt(statistics.skewness)}",
        f"Excess Kurtosis: {_fmt(statistics.excess_kurtosis)}",
    ]
    return "\n".join(lines)


def summary_table(statistics: MomentStatistics, num_trials: int) -> pd.DataFrame:
    """Tabular form of the report with the run size attached.

    Args:
        statistics: Aggregated statistics of the sample set.
        num_trials: Number of games averaged into each sample mean.

    Returns:
        ``metric``/``value`` DataFrame.
    """
    table = statistics.to_dataframe()
    run_size = pd.DataFrame([{"metric": "num_trials", "value": num_trials}])
    return pd.concat([run_size, table], ignore_index=True)


def export_sample_means(
    sample_means: Union[Sequence[float], np.ndarray],
    path: Union[str, Path],
) -> Path:
    """Write sample means to CSV in sample-index order.

    Args:
        sample_means: The sample set.
        path: Destination ``.csv`` file; parent directories are created.

    Returns:
        The path written.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    df = pd.DataFrame({"sample_mean": np.asarray(sample_means, dtype=np.float64)})
    df.index.name = "sample"
    df.to_csv(path)
    logger.info("Exported %d sample means to %s", len(df), path)
    return path
