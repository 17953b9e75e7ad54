"""Configuration management using Pydantic v2 models.

The configuration is hierarchical: ``simulation`` controls the size and
seeding of the experiment, ``output`` controls the optional export of
sample means, and ``logging`` controls the package logger.

Sub-modules:
    constants: Game and statistics constants (defaults, heads outcome, offsets).
    core: Master Config class and the fail-fast ``build_config`` helper.
    exceptions: ``ConfigurationError`` raised for unusable settings.
    reporting: Output and logging configs.
    simulation: Simulation execution config.

Examples:
    Reference run::

        from petersburg_paradox.config import Config

        config = Config()

    Loading from file::

        config = Config.from_yaml(Path("run.yaml"))

    Startup validation::

        config = build_config(**{"simulation.num_trials": 0})  # ConfigurationError
"""

from .constants import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_NUM_SAMPLES,
    DEFAULT_NUM_TRIALS,
    EXCESS_KURTOSIS_OFFSET,
    FAIR_COIN_P,
    HEADS,
    PROGRESS_DECILES,
)
from .core import Config, build_config
from .exceptions import ConfigurationError
from .reporting import LoggingConfig, OutputConfig
from .simulation import SimulationConfig

__all__ = [
    # Constants
    "DEFAULT_CHUNK_SIZE",
    "DEFAULT_NUM_SAMPLES",
    "DEFAULT_NUM_TRIALS",
    "EXCESS_KURTOSIS_OFFSET",
    "FAIR_COIN_P",
    "HEADS",
    "PROGRESS_DECILES",
    # Core
    "Config",
    "build_config",
    "ConfigurationError",
    # Sections
    "LoggingConfig",
    "OutputConfig",
    "SimulationConfig",
]
