"""Simulation execution configuration.

Contains the configuration class that controls how many samples and trials
a run plays, how the pseudorandom generator is seeded, and which draw
strategy the game simulator uses.
"""

import logging
from typing import Literal, Optional

from pydantic import BaseModel, Field, model_validator

from .constants import DEFAULT_CHUNK_SIZE, DEFAULT_NUM_SAMPLES, DEFAULT_NUM_TRIALS

logger = logging.getLogger(__name__)


class SimulationConfig(BaseModel):
    """Simulation execution parameters.

    Controls the size of the Monte Carlo experiment. Every sample mean
    averages ``num_trials`` independent games, and ``num_samples`` such
    means form the sample set handed to the statistics aggregator.

    Attributes:
        num_samples: Number of independent sample means to draw. At least
            two are required because the reported variance divides by
            ``num_samples - 1``.
        num_trials: Number of games averaged into each sample mean. At
            least one is required; zero would make the mean ``0/0``.
        seed: Seed for the pseudorandom generator. ``None`` draws fresh
            entropy from the operating system.
        method: ``"vectorized"`` draws flip counts in bulk from the
            geometric law; ``"iterative"`` flips one coin at a time.
        chunk_size: Maximum number of trials held in memory at once.
        progress_bar: Show a ``tqdm`` progress bar over samples.

    Examples:
        Reference run::

            sim = SimulationConfig()  # 500 samples x 1,000,000 trials

        Quick reproducible run::

            sim = SimulationConfig(num_samples=50, num_trials=10_000, seed=42)
    """

    num_samples: int = Field(
        default=DEFAULT_NUM_SAMPLES, ge=2, description="Number of sample means to draw"
    )
    num_trials: int = Field(
        default=DEFAULT_NUM_TRIALS, ge=1, description="Number of games averaged per sample"
    )
    seed: Optional[int] = Field(
        default=None, ge=0, description="Random seed for reproducibility (None=OS entropy)"
    )
    method: Literal["vectorized", "iterative"] = Field(
        default="vectorized", description="Flip-count draw strategy"
    )
    chunk_size: int = Field(
        default=DEFAULT_CHUNK_SIZE, gt=0, description="Maximum trials drawn into memory at once"
    )
    progress_bar: bool = Field(default=False, description="Show a tqdm progress bar")

    @model_validator(mode="after")
    def log_iterative_budget(self):
        """Log a notice when the iterative strategy is asked for a large run.

        Returns:
            The validated configuration, unchanged.
        """
        total_trials = self.num_samples * self.num_trials
        if self.method == "iterative" and total_trials > 10_000_000:
            logger.info(
                "Iterative draws requested for %d trials; expect a long run "
                "(method='vectorized' draws the same distribution in bulk)",
                total_trials,
            )
        return self

    @property
    def total_trials(self) -> int:
        """Total number of games played by a full run."""
        return self.num_samples * self.num_trials
