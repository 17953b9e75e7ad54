"""Moment statistics over a set of sample means.

This module turns the fully materialized sample set produced by the game
simulator into a :class:`MomentStatistics` record: mean, unbiased variance,
standard deviation, skewness, excess kurtosis, median, and range.

The formulas follow a two-pass scheme. The first pass computes the mean;
the second accumulates the second, third, and fourth powers of the
deviations from it. Two conventions are deliberate and must be kept:

* Skewness normalizes the third central moment by the *population* second
  moment ``(sum d**2 / n) ** 1.5``, while the reported variance and standard
  deviation use the unbiased ``n - 1`` denominator.
* The median is the element at index ``n // 2`` of the sorted sample set.
  For even ``n`` this is the upper-middle element, not the average of the
  two middle elements.

A sample set with zero spread makes skewness and kurtosis ``0/0``. The
result is ``nan``, reported through :class:`DataQualityWarning`.
"""

from dataclasses import asdict, dataclass
import logging
import math
from typing import Dict, Sequence, Tuple, Union
import warnings

import numpy as np
import pandas as pd

from ._warnings import DataQualityWarning
from .config.constants import EXCESS_KURTOSIS_OFFSET

logger = logging.getLogger(__name__)

SampleSet = Union[Sequence[float], np.ndarray]


@dataclass(frozen=True)
class MomentStatistics:
    """Descriptive statistics of one sample set.

    Attributes:
        num_samples: Number of sample means aggregated.
        mean: Arithmetic mean of the sample means.
        variance: Unbiased sample variance (``n - 1`` denominator).
        std: Square root of ``variance``.
        skewness: Third central moment over the population second moment
            raised to 3/2.
        excess_kurtosis: ``n * sum(d**4) / sum(d**2)**2 - 3``.
        median: Element at index ``n // 2`` of the sorted sample set.
        minimum: Smallest sample mean.
        maximum: Largest sample mean.
    """

    num_samples: int
    mean: float
    variance: float
    std: float
    skewness: float
    excess_kurtosis: float
    median: float
    minimum: float
    maximum: float

    @property
    def range(self) -> Tuple[float, float]:
        """``(minimum, maximum)`` of the sample set."""
        return (self.minimum, self.maximum)

    @property
    def kurtosis(self) -> float:
        """Raw (non-excess) kurtosis."""
        return self.excess_kurtosis + EXCESS_KURTOSIS_OFFSET

    def to_dict(self) -> Dict[str, float]:
        """Convert to a plain dictionary keyed by field name."""
        return asdict(self)

    def to_dataframe(self) -> pd.DataFrame:
        """Convert to a two-column ``metric``/``value`` DataFrame.

        Returns:
            DataFrame with one row per statistic.
        """
        rows = [{"metric": name, "value": value} for name, value in self.to_dict().items()]
        return pd.DataFrame(rows)


def truncating_median(values: SampleSet) -> float:
    """Return the element at index ``n // 2`` of the sorted values.

    For odd ``n`` this is the ordinary median. For even ``n`` it is the
    upper of the two middle elements; no averaging is done.

    Args:
        values: Non-empty sequence of numbers. Not modified.

    Returns:
        The selected element.

    Raises:
        ValueError: If ``values`` is empty.
    """
    data = np.sort(np.asarray(values, dtype=np.float64))
    if data.size == 0:
        raise ValueError("Cannot take the median of an empty sample set")
    return float(data[data.size // 2])


def exact_sum(values) -> float:
    """Sum floats exactly, falling back to IEEE summation.

    :func:`math.fsum` is used while every value is finite. Non-finite input,
    or finite input whose total exceeds the float64 range, is summed with
    :func:`numpy.sum` so the result propagates as ``inf`` or ``nan``.
    """
    data = np.asarray(values, dtype=np.float64)
    if np.all(np.isfinite(data)):
        try:
            return math.fsum(data.tolist())
        except OverflowError:
            logger.debug("Exact sum of %d values overflowed; using IEEE summation", data.size)
    with np.errstate(over="ignore", invalid="ignore"):
        return float(np.sum(data))


def calculate_moment_statistics(sample_means: SampleSet) -> MomentStatistics:
    """Compute :class:`MomentStatistics` for a complete sample set.

    Args:
        sample_means: One-dimensional sequence of sample means, at least two
            long. The input is never modified; sorting works on a copy.

    Returns:
        The computed statistics.

    Raises:
        ValueError: If the input is not one-dimensional or has fewer than
            two elements (the unbiased variance divides by ``n - 1``).
    """
    data = np.asarray(sample_means, dtype=np.float64)
    if data.ndim != 1:
        raise ValueError(f"sample_means must be one-dimensional, got shape {data.shape}")
    n = data.size
    if n < 2:
        raise ValueError(
            f"At least 2 sample means are required for the unbiased variance, got {n}"
        )

    finite_input = bool(np.all(np.isfinite(data)))
    if not finite_input:
        warnings.warn(
            "Sample set contains non-finite values; moments will not be finite",
            DataQualityWarning,
            stacklevel=2,
        )

    with np.errstate(over="ignore", divide="ignore", invalid="ignore"):
        # First pass
        mean = exact_sum(data) / n

        # Second pass
        deviations = data - mean
        squared = deviations * deviations
        sum_d2 = np.float64(exact_sum(squared))
        sum_d3 = np.float64(exact_sum(squared * deviations))
        sum_d4 = np.float64(exact_sum(squared * squared))

        variance = sum_d2 / (n - 1)
        population_m2 = sum_d2 / n
        skewness = (sum_d3 / n) / population_m2**1.5
        raw_kurtosis = n * sum_d4 / (sum_d2 * sum_d2)

    if sum_d2 == 0:
        warnings.warn(
            "Sample set has zero spread; skewness and kurtosis are undefined (nan)",
            DataQualityWarning,
            stacklevel=2,
        )
    elif finite_input and not np.all(np.isfinite([mean, sum_d2, sum_d3, sum_d4])):
        warnings.warn(
            "Moment sums overflowed the float64 range; some statistics are not finite",
            DataQualityWarning,
            stacklevel=2,
        )

    sorted_data = np.sort(data)

    return MomentStatistics(
        num_samples=n,
        mean=float(mean),
        variance=float(variance),
        std=float(np.sqrt(variance)),
        skewness=float(skewness),
        excess_kurtosis=float(raw_kurtosis - EXCESS_KURTOSIS_OFFSET),
        median=float(sorted_data[n // 2]),
        minimum=float(sorted_data[0]),
        maximum=float(sorted_data[-1]),
    )
