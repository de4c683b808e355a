"""Supervisor loop that keeps a failure-prone source connected.

This module provides the Supervisor class, which alternates between a
connecting phase and a streaming phase:

- Connecting: call ``establish``. On failure, mark the source down and
  sleep for the next backoff delay. On success, mark it up, start a
  fresh backoff cursor and begin streaming.
- Streaming: call ``poll`` repeatedly and broadcast each event. On
  failure, discard the instance, sleep for the grace delay and go back
  to connecting.

Backoff escalates across consecutive connection failures and restarts
from the first delay after every successful connection.
"""

from __future__ import annotations

import contextlib
from typing import TYPE_CHECKING, Generic, NoReturn, TypeVar, final

import anyio
import anyio.abc
import structlog

from sourcewatch.exceptions import NoSubscribersError

from ._backoff import RepeatLast, validate_backoff
from ._status import StatusTracker

if TYPE_CHECKING:
    from collections.abc import Iterable

    from structlog.typing import FilteringBoundLogger

    from ._cancel import CancellationToken
    from ._channel import Broadcast
    from ._models import Status
    from ._protocol import Source

InstanceT = TypeVar("InstanceT")
EventT = TypeVar("EventT")

GRACE_DELAY = 0.1
"""Seconds to wait after a stream failure before reconnecting."""


async def _release(instance: object) -> None:
    """Close an instance if it holds async resources."""
    if isinstance(instance, anyio.abc.AsyncResource):
        await anyio.aclose_forcefully(instance)


@final
class Supervisor(Generic[InstanceT, EventT]):
    """Supervises exactly one source instance at a time.

    Source errors never escape the loop; they are logged and answered
    with reconnection. The loop only stops when it is cancelled.
    """

    __slots__ = (
        "_backoff",
        "_channel",
        "_grace_delay",
        "_logger",
        "_source",
        "_tracker",
    )

    def __init__(
        self,
        source: Source[InstanceT, EventT],
        channel: Broadcast[EventT],
        backoff: Iterable[float],
        *,
        grace_delay: float = GRACE_DELAY,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        """Initialize the supervisor.

        Args:
            source: The capability used to establish and poll instances.
            channel: Channel every event is broadcast on.
            backoff: Re-iterable delay definition for reconnect attempts.
            grace_delay: Seconds to wait after a stream failure.
            logger: Logger for lifecycle messages. Uses the monitor logger if None.

        Raises:
            BackoffConfigError: If the backoff definition is empty or one-shot.
            ValueError: If grace_delay is negative.
        """
        if grace_delay < 0:
            msg = f"Grace delay must be non-negative, got {grace_delay}"
            raise ValueError(msg)

        self._source = source
        self._channel = channel
        self._backoff = validate_backoff(backoff)
        self._grace_delay = grace_delay
        self._logger: FilteringBoundLogger = logger or structlog.get_logger(
            "sourcewatch.monitor"
        )
        self._tracker = StatusTracker(self._logger)

    @property
    def status(self) -> Status:
        """Return the liveness of the supervised source."""
        return self._tracker.status

    @property
    def tracker(self) -> StatusTracker:
        """Return the status tracker, including outage history."""
        return self._tracker

    async def run_forever(self) -> NoReturn:
        """Keep the source connected and broadcast its events, forever."""
        cursor = RepeatLast(self._backoff)

        while True:
            try:
                instance = await self._source.establish()
            except Exception as e:  # noqa: BLE001
                self._tracker.mark_down(f"Failed to establish source: {e!r}")
                delay = cursor.next_delay()
                self._logger.debug("Backing off before reconnecting", delay=delay)
                await anyio.sleep(delay)
                continue

            self._tracker.mark_up()
            self._logger.info("Source established")
            cursor = RepeatLast(self._backoff)

            try:
                await self._stream(instance)
            finally:
                await _release(instance)

            await anyio.sleep(self._grace_delay)

    async def _stream(self, instance: InstanceT) -> None:
        """Poll an instance and broadcast its events until it fails."""
        while True:
            try:
                event = await self._source.poll(instance)
            except Exception as e:  # noqa: BLE001
                self._logger.warning("Failed to receive next event", error=repr(e))
                return

            # A closed or unheard channel is not a source failure
            with contextlib.suppress(
                NoSubscribersError, anyio.ClosedResourceError
            ):
                _ = self._channel.send(event)

    async def run_until_cancelled(self, token: CancellationToken) -> None:
        """Run the supervisor loop until the token fires.

        In-flight work is abandoned as soon as the token fires, and the
        current instance, if any, is released.

        Args:
            token: The cancellation signal to race the loop against.

        Raises:
            ExceptionGroup: If the loop fails with a non-source error.
        """
        if token.is_cancelled:
            return

        async with anyio.create_task_group() as tg:

            async def cancel_on_signal() -> None:
                await token.wait()
                tg.cancel_scope.cancel()

            tg.start_soon(cancel_on_signal)
            await self.run_forever()


async def monitor_forever(
    source: Source[InstanceT, EventT],
    channel: Broadcast[EventT],
    backoff: Iterable[float],
    *,
    grace_delay: float = GRACE_DELAY,
    logger: FilteringBoundLogger | None = None,
) -> NoReturn:
    """Supervise a source without a cancellation signal.

    See ``Supervisor`` for the arguments.
    """
    supervisor = Supervisor(
        source, channel, backoff, grace_delay=grace_delay, logger=logger
    )
    await supervisor.run_forever()


async def monitor_until_cancelled(  # noqa: PLR0913
    source: Source[InstanceT, EventT],
    channel: Broadcast[EventT],
    token: CancellationToken,
    backoff: Iterable[float],
    *,
    grace_delay: float = GRACE_DELAY,
    logger: FilteringBoundLogger | None = None,
) -> None:
    """Supervise a source until the token fires.

    See ``Supervisor`` for the arguments.
    """
    supervisor = Supervisor(
        source, channel, backoff, grace_delay=grace_delay, logger=logger
    )
    await supervisor.run_until_cancelled(token)
