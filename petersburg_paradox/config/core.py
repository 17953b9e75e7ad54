"""Master configuration class composing all sub-configurations.

Contains the top-level ``Config`` class that aggregates the simulation,
output, and logging sections into a single validated object with YAML
loading, saving, override, and logging-setup capabilities.
"""

import logging
from pathlib import Path
import sys
from typing import Any, Dict, List, Optional
import warnings

from pydantic import BaseModel, Field, ValidationError
import yaml

from .._warnings import ConfigurationWarning
from .constants import PROGRESS_DECILES
from .exceptions import ConfigurationError
from .reporting import LoggingConfig, OutputConfig
from .simulation import SimulationConfig
from .utils import deep_merge, format_validation_issues

PACKAGE_LOGGER = "petersburg_paradox"


class Config(BaseModel):
    """Complete configuration for a St. Petersburg paradox run.

    All sections have defaults, so ``Config()`` with no arguments describes
    the reference experiment: 500 sample means of 1,000,000 games each.

    Examples:
        Minimal usage::

            config = Config()

        Override specific parameters::

            config = Config(simulation=SimulationConfig(num_samples=100, seed=7))

        From a YAML file::

            config = Config.from_yaml(Path("run.yaml"))

        Dot-notation overrides::

            config = Config().with_overrides(**{"simulation.num_trials": 10_000})
    """

    simulation: SimulationConfig = Field(default_factory=SimulationConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    overrides: Dict[str, Any] = Field(default_factory=dict, description="Runtime overrides")

    # ------------------------------------------------------------------ #
    #  Factory methods
    # ------------------------------------------------------------------ #

    @classmethod
    def from_yaml(cls, path: Path) -> "Config":
        """Load configuration from YAML file.

        Args:
            path: Path to YAML configuration file.

        Returns:
            Config object with validated parameters.

        Raises:
            FileNotFoundError: If config file doesn't exist.
            ValidationError: If configuration is invalid.
        """
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        # Remove private anchors if present
        data = {k: v for k, v in data.items() if not k.startswith("_")}

        return cls(**data)

    @classmethod
    def from_dict(cls, data: dict, base_config: Optional["Config"] = None) -> "Config":
        """Create config from dictionary, optionally overriding base config.

        Args:
            data: Dictionary with configuration parameters.
            base_config: Optional base configuration to override.

        Returns:
            Config object with validated parameters.
        """
        if base_config is None:
            return cls(**data)

        merged = deep_merge(base_config.model_dump(), data)
        return cls(**merged)

    def with_overrides(self, **overrides: Any) -> "Config":
        """Create a new config with runtime overrides applied.

        Keys may be section names holding a dict, or dot-notation paths
        such as ``"simulation.num_samples"``.

        Args:
            **overrides: Override values.

        Returns:
            New Config instance; ``self`` is left untouched.

        Raises:
            ValueError: If a dot-notation path names an unknown section or field.
        """
        data = self.model_dump()

        for key, value in overrides.items():
            if "." in key:
                parts = key.split(".")
                self._validate_override_path(key, parts)
                current = data
                for part in parts[:-1]:
                    current = current.setdefault(part, {})
                current[parts[-1]] = value
            elif isinstance(value, dict) and isinstance(data.get(key), dict):
                data[key] = deep_merge(data[key], value)
            else:
                data[key] = value

        data["overrides"] = {**self.overrides, **overrides}
        return Config(**data)

    def _validate_override_path(self, key: str, parts: list) -> None:
        """Validate that a dot-notation path refers to valid config fields.

        Raises:
            ValueError: If any segment of the path is not a recognised field.
        """
        section = parts[0]
        fields = type(self).model_fields
        if section not in fields:
            valid = ", ".join(sorted(fields.keys()))
            raise ValueError(
                f"Invalid config path '{key}': '{section}' is not a valid "
                f"config section. Valid sections: {valid}"
            )

        annotation = fields[section].annotation
        if (
            len(parts) >= 2
            and annotation is not None
            and hasattr(annotation, "model_fields")
            and parts[1] not in annotation.model_fields
        ):
            valid = ", ".join(sorted(annotation.model_fields.keys()))
            raise ValueError(
                f"Invalid config path '{key}': '{parts[1]}' is not a valid "
                f"field in '{section}'. Valid fields: {valid}"
            )

    # ------------------------------------------------------------------ #
    #  Validation
    # ------------------------------------------------------------------ #

    def validate_run(self) -> List[str]:
        """Check for legal but degraded settings.

        Each issue found is also emitted as a :class:`ConfigurationWarning`.

        Returns:
            List of non-fatal issues (empty when the run is well-formed).
        """
        issues = []
        sim = self.simulation

        if sim.num_samples < PROGRESS_DECILES:
            issues.append(
                f"num_samples={sim.num_samples} is below {PROGRESS_DECILES}; "
                "progress reports will not fall on every decile"
            )
        if sim.num_samples < 30:
            issues.append(
                f"num_samples={sim.num_samples} gives very noisy skewness and kurtosis"
            )
        if sim.chunk_size > sim.num_trials and sim.method == "vectorized":
            logging.getLogger(__name__).debug(
                "chunk_size %d exceeds num_trials %d; each sample is one chunk",
                sim.chunk_size,
                sim.num_trials,
            )

        for issue in issues:
            warnings.warn(issue, ConfigurationWarning, stacklevel=2)
        return issues

    # ------------------------------------------------------------------ #
    #  Serialization
    # ------------------------------------------------------------------ #

    def to_yaml(self, path: Path) -> None:
        """Save configuration to YAML file.

        Args:
            path: Path where to save the configuration.
        """
        path.parent.mkdir(parents=True, exist_ok=True)
        data = self.model_dump(exclude={"overrides"})
        with open(path, "w", encoding="utf-8") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    # ------------------------------------------------------------------ #
    #  Logging / paths
    # ------------------------------------------------------------------ #

    def setup_logging(self) -> None:
        """Configure the package logger based on settings.

        Sets up handlers for console (stderr) and/or file output. The root
        logger is never touched.
        """
        logger = logging.getLogger(PACKAGE_LOGGER)
        logger.handlers.clear()

        if not self.logging.enabled:
            logger.addHandler(logging.NullHandler())
            logger.propagate = False
            return

        logger.setLevel(getattr(logging, self.logging.level))
        formatter = logging.Formatter(self.logging.format)

        if self.logging.console_output:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setFormatter(formatter)
            logger.addHandler(console_handler)

        if self.logging.log_file:
            log_path = self.output.output_path / self.logging.log_file
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_path)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    def validate_paths(self) -> None:
        """Create the output directory if it doesn't exist."""
        self.output.output_path.mkdir(parents=True, exist_ok=True)


def build_config(
    base: Optional[Config] = None,
    **overrides: Any,
) -> Config:
    """Build a run configuration, failing fast on invalid settings.

    Wraps pydantic's ``ValidationError`` into :class:`ConfigurationError`
    so startup code sees one exception type with a readable issue list.

    Args:
        base: Configuration to start from (defaults to ``Config()``).
        **overrides: Dot-notation or section overrides, as accepted by
            :meth:`Config.with_overrides`.

    Returns:
        Validated configuration.

    Raises:
        ConfigurationError: If any value is out of range, e.g. ``num_trials=0``
            or ``num_samples=1``.
    """
    try:
        config = base if base is not None else Config()
        if overrides:
            config = config.with_overrides(**overrides)
    except ValidationError as e:
        raise ConfigurationError(format_validation_issues(e.errors())) from e
    except ValueError as e:
        raise ConfigurationError([str(e)]) from e
    return config
