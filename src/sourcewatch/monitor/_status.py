"""Liveness status tracking for a supervised source.

This module provides the tracker for the two-valued liveness flag,
which logs outages. Only the first failure of an outage is logged at warning
level; repeated failures while already down are logged at info level.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, final

import pendulum
import structlog

from ._models import Status

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger


def _get_timestamp() -> str:
    """Get current timestamp in ISO 8601 format."""
    return pendulum.now("UTC").to_iso8601_string()


@final
class StatusTracker:
    """Tracks whether the supervised source is up or down.

    Starts in the UP state. Mutated only by the supervisor loop.

    Attributes:
        changed_at: ISO 8601 timestamp of the last transition, if any.
        outages: Number of UP to DOWN transitions observed.
    """

    __slots__ = ("_logger", "_status", "changed_at", "outages")

    def __init__(self, logger: FilteringBoundLogger | None = None) -> None:
        """Initialize the tracker in the UP state.

        Args:
            logger: Logger for outage messages. Uses the monitor logger if None.
        """
        self._logger: FilteringBoundLogger = logger or structlog.get_logger(
            "sourcewatch.monitor"
        )
        self._status = Status.UP
        self.changed_at: str | None = None
        self.outages = 0

    @property
    def status(self) -> Status:
        """Return the current liveness status."""
        return self._status

    def mark_up(self) -> None:
        """Transition to UP. Does nothing if already up."""
        if self._status is Status.UP:
            return
        self._status = Status.UP
        self.changed_at = _get_timestamp()

    def mark_down(self, reason: str) -> None:
        """Transition to DOWN and log the reason.

        Args:
            reason: Human-readable description of the failure.
        """
        if self._status is Status.UP:
            self._status = Status.DOWN
            self.changed_at = _get_timestamp()
            self.outages += 1
            self._logger.warning(reason, status=self._status.value)
        else:
            self._logger.info(reason, status=self._status.value)
