"""Cooperative cancellation signal."""

from typing import final

import anyio


@final
class CancellationToken:
    """An idempotent, externally triggerable stop signal.

    Must be created inside a running event loop.
    """

    __slots__ = ("_event",)

    def __init__(self) -> None:
        self._event = anyio.Event()

    @property
    def is_cancelled(self) -> bool:
        """Return True once ``cancel`` has been called."""
        return self._event.is_set()

    def cancel(self) -> None:
        """Fire the signal. Calling it again has no effect."""
        self._event.set()

    async def wait(self) -> None:
        """Block until the signal fires."""
        await self._event.wait()
