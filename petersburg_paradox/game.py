"""St. Petersburg coin-flip game simulator.

A single game flips a fair coin until it lands heads. If heads arrives on
flip ``n`` (the first flip counts), the game pays ``2**n``. The number of
flips follows the geometric law ``P(n) = 0.5**n`` on ``n >= 1`` and is never
capped: the divergent right tail of the payoff is the whole point of the
paradox.

The simulator owns exactly one pseudorandom generator. It is seeded once,
either from an explicit seed or from operating-system entropy, and then
reused for every flip of every trial of every sample.

Examples:
    One game::

        game = PetersburgGame(seed=42)
        payoff = game.play_trial()   # 2.0, 4.0, 8.0, ...

    One sample mean::

        mean = game.play_sample(num_trials=1_000_000)
"""

import logging
import threading
import time
from typing import Callable, Literal, Optional

import numpy as np

from .config.constants import DEFAULT_CHUNK_SIZE, FAIR_COIN_P, HEADS
from .config.simulation import SimulationConfig
from .summary_statistics import exact_sum

logger = logging.getLogger(__name__)

DrawMethod = Literal["vectorized", "iterative"]
_METHODS = ("vectorized", "iterative")


def payoff(flip_count):
    """Payoff for a game that ended on flip ``flip_count``.

    Computes ``2**n`` in double precision with :func:`numpy.ldexp`, which is
    exact for every representable power of two. Flip counts beyond the
    float64 exponent range yield ``inf`` instead of raising.

    Args:
        flip_count: Number of flips (scalar or integer array), each ``>= 1``.

    Returns:
        ``float`` for scalar input, float64 ``ndarray`` for array input.
    """
    with np.errstate(over="ignore"):
        result = np.ldexp(1.0, flip_count)
    if np.ndim(result) == 0:
        return float(result)
    return result


class PetersburgGame:
    """Game simulator owning a single seeded pseudorandom generator.

    Attributes:
        seed: Seed used to build the generator (``None`` = OS entropy).
        method: ``"iterative"`` flips one coin at a time until heads;
            ``"vectorized"`` draws whole batches of flip counts from the
            equivalent geometric distribution.
        chunk_size: Maximum number of trials drawn into memory at once.
        rng: The :class:`numpy.random.Generator` shared by all draws.
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        method: DrawMethod = "vectorized",
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ):
        """Initialize the game simulator.

        Args:
            seed: Optional seed for reproducibility.
            method: Flip-count draw strategy.
            chunk_size: Maximum trials per in-memory batch.

        Raises:
            ValueError: If ``method`` is unknown or ``chunk_size`` is not positive.
        """
        if method not in _METHODS:
            raise ValueError(f"Unknown draw method: {method}. Choose from: {list(_METHODS)}")
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")

        self.seed = seed
        self.method = method
        self.chunk_size = chunk_size
        self.rng = np.random.default_rng(seed)
        logger.debug(f"Initialized {self.__class__.__name__} with seed={seed}, method={method}")

    @classmethod
    def from_config(cls, config: SimulationConfig) -> "PetersburgGame":
        """Build a simulator from a :class:`SimulationConfig`."""
        return cls(seed=config.seed, method=config.method, chunk_size=config.chunk_size)

    def reset(self, seed: Optional[int] = None) -> None:
        """Rebuild the random number generator.

        Args:
            seed: Optional new seed to use; otherwise the current seed is reused.
        """
        if seed is not None:
            self.seed = seed
        self.rng = np.random.default_rng(self.seed)
        logger.debug(f"Reset RNG with seed={self.seed}")

    def flip_count(self) -> int:
        """Play one game flip by flip and return the number of flips.

        Draws uniformly from ``{0, 1}`` until the heads outcome appears.
        There is no iteration cap.
        """
        n = 1
        while self.rng.integers(0, 2) != HEADS:
            n += 1
        return n

    def play_trial(self) -> float:
        """Play one game and return its payoff ``2**n``."""
        return payoff(self.flip_count())

    def flip_counts(self, num_trials: int) -> np.ndarray:
        """Play ``num_trials`` games and return each game's flip count.

        Args:
            num_trials: Number of games to play.

        Returns:
            int64 array of flip counts, each ``>= 1``.
        """
        if num_trials < 0:
            raise ValueError(f"num_trials must be non-negative, got {num_trials}")

        if self.method == "iterative":
            return np.fromiter(
                (self.flip_count() for _ in range(num_trials)),
                dtype=np.int64,
                count=num_trials,
            )
        # Number of fair flips up to and including the first heads.
        return self.rng.geometric(FAIR_COIN_P, size=num_trials).astype(np.int64, copy=False)

    def play_sample(self, num_trials: int) -> float:
        """Average the payoffs of ``num_trials`` independent games.

        Payoffs are summed exactly with :func:`.exact_sum` so that a single
        huge payoff does not swallow the many small ones. Trials are drawn
        in chunks of at most ``chunk_size``. A total beyond the float64
        range makes the mean ``inf``.

        Args:
            num_trials: Number of games to average.

        Returns:
            The sample mean payoff (always ``>= 2.0``).

        Raises:
            ValueError: If ``num_trials < 1`` (the mean would be ``0/0``).
        """
        if num_trials < 1:
            raise ValueError(
                f"num_trials must be positive, got {num_trials}. "
                "A sample mean over zero games is undefined."
            )

        chunk_totals = []
        remaining = num_trials
        while remaining > 0:
            batch = min(remaining, self.chunk_size)
            chunk_totals.append(exact_sum(payoff(self.flip_counts(batch))))
            remaining -= batch

        return exact_sum(chunk_totals) / num_trials

    def play_samples(
        self,
        num_samples: int,
        num_trials: int,
        progress_callback: Optional[Callable[[int, int, float], None]] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> np.ndarray:
        """Draw a full sample set of ``num_samples`` sample means.

        Args:
            num_samples: Number of sample means to draw.
            num_trials: Number of games per sample mean.
            progress_callback: Optional callable invoked with
                ``(completed, num_samples, elapsed_seconds)`` after every
                sample.
            cancel_event: Optional :class:`threading.Event` checked before
                each sample. Once set, no further samples are drawn.

        Returns:
            float64 array in sample-index order. Shorter than
            ``num_samples`` only when ``cancel_event`` was set.
        """
        if num_samples < 1:
            raise ValueError(f"num_samples must be positive, got {num_samples}")

        start_time = time.time()
        sample_means = np.empty(num_samples, dtype=np.float64)
        completed = 0
        for i in range(num_samples):
            if cancel_event is not None and cancel_event.is_set():
                logger.info("Cancellation requested at sample %d/%d", i, num_samples)
                break
            sample_means[i] = self.play_sample(num_trials)
            completed = i + 1
            if progress_callback is not None:
                progress_callback(completed, num_samples, time.time() - start_time)
        return sample_means[:completed]
