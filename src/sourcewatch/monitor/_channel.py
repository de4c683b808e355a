"""Broadcast distribution channel for supervised events.

This module fans events out to any number of independent subscribers
using anyio memory object streams. Each subscriber owns a bounded
buffer; a subscriber that falls behind misses items instead of slowing
down the publisher or the other subscribers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Generic, Self, TypeVar, final

import anyio

from sourcewatch.exceptions import NoSubscribersError

if TYPE_CHECKING:
    from types import TracebackType

    from anyio.streams.memory import (
        MemoryObjectReceiveStream,
        MemoryObjectSendStream,
    )

T = TypeVar("T")


@final
class Subscription(Generic[T]):
    """Receiving end of a broadcast channel.

    Supports ``await receive()``, ``async for`` and ``async with``.
    Iteration ends once the channel is closed and the buffer is drained.

    Attributes:
        missed: Number of items dropped because this buffer was full.
    """

    __slots__ = ("_receive_stream", "missed")

    def __init__(self, receive_stream: MemoryObjectReceiveStream[T]) -> None:
        self._receive_stream = receive_stream
        self.missed = 0

    async def receive(self) -> T:
        """Receive the next item.

        Raises:
            anyio.EndOfStream: If the channel is closed and drained.
        """
        return await self._receive_stream.receive()

    def receive_nowait(self) -> T:
        """Receive the next buffered item without blocking.

        Raises:
            anyio.WouldBlock: If no item is buffered.
            anyio.EndOfStream: If the channel is closed and drained.
        """
        return self._receive_stream.receive_nowait()

    async def aclose(self) -> None:
        """Unsubscribe. The channel prunes this subscription on its next send."""
        await self._receive_stream.aclose()

    def __aiter__(self) -> Self:
        return self

    async def __anext__(self) -> T:
        try:
            return await self._receive_stream.receive()
        except anyio.EndOfStream:
            raise StopAsyncIteration from None

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()


@final
class Broadcast(Generic[T]):
    """Multi-subscriber broadcast channel with bounded, lossy buffers.

    Sending never blocks. Every live subscriber receives every item in
    send order unless its buffer is full, in which case that subscriber
    alone misses the item.
    """

    __slots__ = ("_capacity", "_closed", "_subscribers")

    def __init__(self, capacity: int = 16) -> None:
        """Initialize the channel.

        Args:
            capacity: Buffer size of each subscription.

        Raises:
            ValueError: If capacity is less than one.
        """
        if capacity < 1:
            msg = f"Broadcast capacity must be at least 1, got {capacity}"
            raise ValueError(msg)
        self._capacity = capacity
        self._closed = False
        self._subscribers: list[tuple[MemoryObjectSendStream[T], Subscription[T]]] = []

    @property
    def capacity(self) -> int:
        """Return the buffer size of each subscription."""
        return self._capacity

    @property
    def subscriber_count(self) -> int:
        """Return the number of registered subscriptions."""
        return len(self._subscribers)

    def subscribe(self) -> Subscription[T]:
        """Register a new subscriber.

        The subscriber only sees items sent after this call.

        Raises:
            anyio.ClosedResourceError: If the channel has been closed.
        """
        if self._closed:
            raise anyio.ClosedResourceError
        send_stream, receive_stream = anyio.create_memory_object_stream[T](
            max_buffer_size=self._capacity
        )
        subscription = Subscription(receive_stream)
        self._subscribers.append((send_stream, subscription))
        return subscription

    def send(self, item: T) -> int:
        """Deliver an item to every live subscriber without blocking.

        Args:
            item: The item to broadcast.

        Returns:
            The number of subscribers whose buffer accepted the item.

        Raises:
            NoSubscribersError: If there are no live subscribers.
            anyio.ClosedResourceError: If the channel has been closed.
        """
        if self._closed:
            raise anyio.ClosedResourceError

        delivered = 0
        for entry in list(self._subscribers):
            send_stream, subscription = entry
            try:
                send_stream.send_nowait(item)
            except anyio.WouldBlock:
                subscription.missed += 1
            except anyio.BrokenResourceError:
                # Receiver closed; prune it
                self._subscribers.remove(entry)
                send_stream.close()
            else:
                delivered += 1

        if not self._subscribers:
            msg = "No active subscribers"
            raise NoSubscribersError(msg, item=item)
        return delivered

    def close(self) -> None:
        """Close the channel. Subscribers drain their buffers, then stop."""
        if self._closed:
            return
        self._closed = True
        for send_stream, _ in self._subscribers:
            send_stream.close()
        self._subscribers.clear()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()
