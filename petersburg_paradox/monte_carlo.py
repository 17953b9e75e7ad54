"""Monte Carlo engine for the St. Petersburg paradox.

Composes the game simulator and the statistics aggregator: draws a complete
sample set of ``num_samples`` sample means, each averaging ``num_trials``
games, and then computes :class:`MomentStatistics` over it.

Execution is single-threaded and sequential. The only mutable resource is
the simulator's pseudorandom generator, advanced draw by draw.
"""

from dataclasses import dataclass
import logging
import threading
import time
from typing import Callable, Optional

import numpy as np
import pandas as pd
from tqdm import tqdm

from .config.simulation import SimulationConfig
from .game import PetersburgGame
from .progress_monitor import decile_checkpoints
from .reporting import format_report
from .summary_statistics import MomentStatistics, calculate_moment_statistics

logger = logging.getLogger(__name__)


@dataclass
class SimulationResults:
    """Results of one Monte Carlo run.

    Attributes:
        sample_means: Sample means in sample-index order.
        statistics: Moment statistics, or ``None`` if a cancelled run
            finished fewer than two samples.
        num_trials: Games averaged into each sample mean.
        execution_time: Wall-clock seconds for the run.
        config: Simulation configuration used.
        cancelled: Whether the run stopped early on a cancel request.
    """

    sample_means: np.ndarray
    statistics: Optional[MomentStatistics]
    num_trials: int
    execution_time: float
    config: SimulationConfig
    cancelled: bool = False

    @property
    def num_samples(self) -> int:
        """Number of sample means actually drawn."""
        return len(self.sample_means)

    def summary(self) -> str:
        """Generate the final text report."""
        if self.statistics is None:
            return (
                f"Run cancelled after {self.num_samples} of {self.config.num_samples} samples; "
                "at least 2 are needed for statistics."
            )
        return format_report(self.statistics, self.num_trials)

    def to_dataframe(self) -> pd.DataFrame:
        """Sample means as a DataFrame indexed by sample number."""
        df = pd.DataFrame({"sample_mean": self.sample_means})
        df.index.name = "sample"
        return df


class MonteCarloEngine:
    """Sequential Monte Carlo engine over the St. Petersburg game.

    Examples:
        Reproducible small run::

            config = SimulationConfig(num_samples=100, num_trials=10_000, seed=42)
            results = MonteCarloEngine(config).run()
            print(results.summary())

        With a console progress reporter::

            results = engine.run(progress_callback=DecileProgressReporter())

    Attributes:
        config: Simulation configuration.
        game: Game simulator owning the generator used for every draw.
    """

    def __init__(
        self,
        config: Optional[SimulationConfig] = None,
        game: Optional[PetersburgGame] = None,
    ):
        """Initialize Monte Carlo engine.

        Args:
            config: Simulation configuration (defaults to the reference run).
            game: Game simulator to use; built from ``config`` when omitted.
        """
        self.config = config or SimulationConfig()
        self.game = game or PetersburgGame.from_config(self.config)

    def run(
        self,
        progress_callback: Optional[Callable[[int, int, float], None]] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> SimulationResults:
        """Execute the simulation and aggregate the sample set.

        Args:
            progress_callback: Optional callback invoked with
                ``(completed, total, elapsed_seconds)`` once per decile of
                samples processed. It never touches the generator, so
                results do not depend on it.
            cancel_event: Optional :class:`threading.Event`. When set, the
                engine stops before the next sample and returns partial
                results.

        Returns:
            SimulationResults with the sample set and its statistics.
        """
        start_time = time.time()
        n_samples = self.config.num_samples
        n_trials = self.config.num_trials

        logger.info(
            "Running %d samples of %d trials (method=%s, seed=%s)",
            n_samples,
            n_trials,
            self.game.method,
            self.game.seed,
        )

        checkpoints = decile_checkpoints(n_samples)
        progress_bar = None
        if self.config.progress_bar:
            progress_bar = tqdm(total=n_samples, desc="Sampling", unit="sample")

        def on_sample(completed: int, total: int, elapsed: float) -> None:
            if progress_bar is not None:
                progress_bar.update(1)
            if progress_callback is not None and completed in checkpoints:
                progress_callback(completed, total, elapsed)

        try:
            sample_means = self.game.play_samples(
                n_samples, n_trials, progress_callback=on_sample, cancel_event=cancel_event
            )
        finally:
            if progress_bar is not None:
                progress_bar.close()

        completed = sample_means.size
        cancelled = completed < n_samples

        statistics: Optional[MomentStatistics] = None
        if completed >= 2:
            statistics = calculate_moment_statistics(sample_means)
        else:
            logger.warning(
                "Only %d sample(s) completed; statistics need at least 2", completed
            )

        execution_time = time.time() - start_time
        logger.info("Completed %d samples in %.2fs", completed, execution_time)

        return SimulationResults(
            sample_means=sample_means,
            statistics=statistics,
            num_trials=n_trials,
            execution_time=execution_time,
            config=self.config,
            cancelled=cancelled,
        )
