"""Output and logging configuration.

Contains configuration classes that control where sample means are
exported and how the package logger is set up.
"""

from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator


class OutputConfig(BaseModel):
    """Output configuration.

    Only aggregated sample means are ever written; raw per-trial payoffs
    are never retained.
    """

    output_directory: str = Field(default="outputs", description="Directory for saving results")
    export_sample_means: bool = Field(
        default=False, description="Write the sample means to CSV after a run"
    )
    sample_means_file: str = Field(
        default="sample_means.csv", description="File name for exported sample means"
    )

    @field_validator("sample_means_file")
    @classmethod
    def validate_sample_means_file(cls, v: str) -> str:
        """Validate the export file name.

        Args:
            v: File name to validate.

        Returns:
            The validated file name.

        Raises:
            ValueError: If the name does not end in ``.csv``.
        """
        if not v.lower().endswith(".csv"):
            raise ValueError(f"Sample means file must be a .csv file, got {v!r}")
        return v

    @property
    def output_path(self) -> Path:
        """Get output directory as Path object."""
        return Path(self.output_directory)

    @property
    def sample_means_path(self) -> Path:
        """Full path of the sample-means export."""
        return self.output_path / self.sample_means_file


class LoggingConfig(BaseModel):
    """Logging configuration.

    Controls logging behavior including level, output destinations,
    and message formatting.
    """

    enabled: bool = Field(default=True, description="Enable logging")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING", description="Logging level"
    )
    log_file: Optional[str] = Field(
        default=None, description="Log file path (None=no file logging)"
    )
    console_output: bool = Field(default=True, description="Log to console")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log message format",
    )
