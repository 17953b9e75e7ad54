"""Closed-form reference quantities for the St. Petersburg game.

These helpers describe what a fair coin *should* produce so simulated
flip counts and payoffs can be read against it. They are descriptive only;
no hypothesis test is performed.
"""

from typing import Sequence, Union

import numpy as np
import pandas as pd
from scipy import stats

from .config.constants import FAIR_COIN_P

# Number of flips up to and including the first heads; support n >= 1.
FLIP_COUNT_DISTRIBUTION = stats.geom(FAIR_COIN_P)


def flip_count_pmf(n: Union[int, np.ndarray]) -> Union[float, np.ndarray]:
    """Probability that a game ends on flip ``n`` (``0.5**n`` for ``n >= 1``).

    Args:
        n: Flip count(s).

    Returns:
        Probability mass, ``0`` for ``n < 1``.
    """
    result = FLIP_COUNT_DISTRIBUTION.pmf(n)
    if np.ndim(result) == 0:
        return float(result)
    return result


def truncated_expected_payoff(max_flips: int) -> float:
    """Expected payoff of the game if it were stopped after ``max_flips`` flips.

    Each possible ending ``n`` contributes ``2**n * 0.5**n = 1``, so the
    truncated expectation equals ``max_flips`` and grows without bound as
    the cap is lifted.

    Args:
        max_flips: Largest flip count allowed to pay out.

    Returns:
        ``sum(2**n * P(n) for n in 1..max_flips)``.
    """
    if max_flips < 0:
        raise ValueError(f"max_flips must be non-negative, got {max_flips}")
    n = np.arange(1, max_flips + 1)
    return float(np.sum(np.ldexp(1.0, n) * FLIP_COUNT_DISTRIBUTION.pmf(n)))


def flip_count_table(flip_counts: Union[Sequence[int], np.ndarray], max_flips: int = 10) -> pd.DataFrame:
    """Compare observed flip-count frequencies with the geometric law.

    Args:
        flip_counts: Flip counts of individual games.
        max_flips: Largest flip count to tabulate; longer games are counted
            only in the total.

    Returns:
        DataFrame indexed by ``flips`` with columns ``observed`` (count),
        ``observed_frequency``, ``expected_frequency`` and ``difference``.

    Raises:
        ValueError: If ``flip_counts`` is empty.
    """
    counts = np.asarray(flip_counts, dtype=np.int64)
    if counts.size == 0:
        raise ValueError("flip_counts must not be empty")

    flips = np.arange(1, max_flips + 1)
    observed = np.bincount(counts[counts <= max_flips], minlength=max_flips + 1)[1:]
    observed_frequency = observed / counts.size
    expected_frequency = FLIP_COUNT_DISTRIBUTION.pmf(flips)

    return pd.DataFrame(
        {
            "observed": observed,
            "observed_frequency": observed_frequency,
            "expected_frequency": expected_frequency,
            "difference": observed_frequency - expected_frequency,
        },
        index=pd.Index(flips, name="flips"),
    )
