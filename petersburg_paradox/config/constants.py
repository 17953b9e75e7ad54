"""Module-level constants for the St. Petersburg game and its statistics.

Centralizes the literal values shared by the simulator, the aggregator,
and the command-line program.
"""

DEFAULT_NUM_SAMPLES: int = 500
"""Number of independent sample means drawn in the reference run."""

DEFAULT_NUM_TRIALS: int = 1_000_000
"""Number of games averaged into each sample mean in the reference run."""

DEFAULT_CHUNK_SIZE: int = 1_000_000
"""Largest number of trials drawn into memory at once by the vectorized path."""

HEADS: int = 0
"""Outcome of a fair ``{0, 1}`` draw that ends a game."""

FAIR_COIN_P: float = 0.5
"""Probability of heads on each flip."""

PROGRESS_DECILES: int = 10
"""Number of progress reports emitted over a full run."""

EXCESS_KURTOSIS_OFFSET: float = 3.0
"""Kurtosis of the normal distribution, subtracted to give excess kurtosis."""
