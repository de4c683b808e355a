"""Sourcewatch exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pathlib import Path


class SourcewatchError(Exception):
    """Base exception for sourcewatch errors."""


class ConfigError(SourcewatchError):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when configuration cannot be loaded or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column


class ConfigValidationError(ConfigError):
    """Raised when configuration fails validation."""

    def __init__(
        self,
        message: str,
        *,
        key: str,
        value: Any,  # pyright: ignore[reportAny,reportExplicitAny]
        expected: str,
    ) -> None:
        """Initialize with error message and validation context."""
        super().__init__(message)
        self.key: str = key
        self.value: Any = value  # pyright: ignore[reportExplicitAny]
        self.expected: str = expected


class BackoffConfigError(ConfigError, ValueError):
    """Raised when a backoff definition cannot drive reconnection.

    A backoff definition must yield at least one delay and must be
    re-iterable, so that each successful connection can start a fresh
    cursor from the first delay.
    """


# =============================================================================
# Source Exceptions
# =============================================================================


class SourceError(SourcewatchError):
    """Base exception for errors raised by bundled sources."""


class SourceDrainedError(SourceError):
    """Raised when a source instance reaches the end of its input."""


# =============================================================================
# Channel Exceptions
# =============================================================================


class NoSubscribersError(SourcewatchError):
    """Raised when an item is broadcast while nobody is subscribed.

    Attributes:
        item: The item that could not be delivered.
    """

    def __init__(self, message: str, *, item: object = None) -> None:
        """Initialize with error message and the undelivered item.

        Args:
            message: Human-readable error message.
            item: The item that could not be delivered.
        """
        super().__init__(message)
        self.item: object = item
