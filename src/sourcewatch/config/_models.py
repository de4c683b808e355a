"""Configuration models.

This module provides the Pydantic models for sourcewatch configuration:
- LoggingConfig: log level, format and destination
- BackoffConfig: reconnect delay schedule
- MonitorConfig: supervisor tuning
- ClientConfig: demonstration TCP client endpoint
- Config: the root container
"""

from enum import StrEnum
from pathlib import Path
from typing import Any, ClassVar, Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from sourcewatch.exceptions import ConfigValidationError
from sourcewatch.monitor import GRACE_DELAY, ExponentialBackoff


class LogLevel(StrEnum):
    """Log level threshold values.

    Values are ordered from most verbose (debug) to least verbose (error).
    """

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LogFormat(StrEnum):
    """Log output format values."""

    JSON = "json"
    TEXT = "text"


class LoggingConfig(BaseModel):
    """Logging configuration section.

    Attributes:
        level: Log level threshold.
        format: Log output format.
        file: Path to log file (empty writes to stderr).
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.TEXT
    file: str = ""


class BackoffConfig(BaseModel):
    """Reconnect backoff configuration section.

    Attributes:
        base: Delay in seconds before the first reconnect attempt.
        multiplier: Growth factor between consecutive delays.
        max_delay: Cap on any single delay, or None for no cap.
        jitter: Fraction of each delay to randomize.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    base: float = Field(default=0.02, gt=0)
    multiplier: float = Field(default=2.0, ge=1)
    max_delay: float | None = Field(default=None, gt=0)
    jitter: float = Field(default=0.0, ge=0, le=1)

    def build(self) -> ExponentialBackoff:
        """Build the backoff definition described by this section."""
        return ExponentialBackoff(
            base=self.base,
            multiplier=self.multiplier,
            max_delay=self.max_delay,
            jitter=self.jitter,
        )


class MonitorConfig(BaseModel):
    """Supervisor configuration section.

    Attributes:
        grace_delay: Seconds to wait after a stream failure before reconnecting.
        channel_capacity: Buffer size of each broadcast subscription.
        backoff: Reconnect backoff schedule.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    grace_delay: float = Field(default=GRACE_DELAY, ge=0)
    channel_capacity: int = Field(default=16, ge=1)
    backoff: BackoffConfig = Field(default_factory=BackoffConfig)


class ClientConfig(BaseModel):
    """Demonstration TCP client configuration section.

    Attributes:
        host: Host to connect to.
        port: TCP port to connect to.
        max_frame_bytes: Longest accepted line, excluding the delimiter.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    host: str = "localhost"
    port: int = Field(default=8080, ge=1, le=65535)
    max_frame_bytes: int = Field(default=65536, ge=1)


class Config(BaseModel):
    """Root configuration container."""

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    monitor: MonitorConfig = Field(default_factory=MonitorConfig)
    client: ClientConfig = Field(default_factory=ClientConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:  # pyright: ignore[reportExplicitAny]
        """Create configuration from a dictionary.

        Args:
            data: Nested dictionary of configuration values.

        Returns:
            The validated configuration.

        Raises:
            ConfigValidationError: If any value fails validation.
        """
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            error = e.errors()[0]
            key = ".".join(str(part) for part in error["loc"])
            msg = f"Invalid configuration value for '{key}': {error['msg']}"
            raise ConfigValidationError(
                msg,
                key=key,
                value=error.get("input"),
                expected=error["msg"],
            ) from e

    @classmethod
    def from_file(cls, path: Path) -> Self:
        """Create configuration from a TOML file.

        Args:
            path: Path to the TOML file.

        Returns:
            The validated configuration.

        Raises:
            FileNotFoundError: If the file does not exist.
            ConfigLoadError: If the file is not valid TOML.
            ConfigValidationError: If any value fails validation.
        """
        # Deferred import to avoid circular dependency
        from ._loader import read_toml_file  # noqa: PLC0415

        return cls.from_dict(read_toml_file(path))
