"""Async runner for the demonstration TCP client."""

from __future__ import annotations

import signal
from typing import TYPE_CHECKING

import anyio

from sourcewatch.client import ConsoleSink, TcpLineSource
from sourcewatch.monitor import Broadcast, CancellationToken, monitor_until_cancelled

if TYPE_CHECKING:
    from rich.console import Console
    from structlog.typing import FilteringBoundLogger

    from sourcewatch.config import Config


async def cancel_on_signals(token: CancellationToken) -> None:
    """Fire the token on the first SIGINT or SIGTERM."""
    with anyio.open_signal_receiver(signal.SIGINT, signal.SIGTERM) as signals:
        async for _ in signals:
            token.cancel()
            break


async def run_tcp_client(
    config: Config,
    logger: FilteringBoundLogger,
    *,
    token: CancellationToken | None = None,
    console: Console | None = None,
    handle_signals: bool = True,
) -> None:
    """Supervise a TCP line stream and print every line until cancelled.

    Args:
        config: Loaded configuration.
        logger: Logger for supervisor lifecycle messages.
        token: Cancellation signal. A new one is created if None.
        console: Console events are printed to.
        handle_signals: Whether SIGINT and SIGTERM fire the token.
    """
    token = token or CancellationToken()
    source = TcpLineSource(
        config.client.host,
        config.client.port,
        max_frame_bytes=config.client.max_frame_bytes,
    )
    sink = ConsoleSink(source.address, console)
    channel: Broadcast[str] = Broadcast(config.monitor.channel_capacity)

    logger.info("Starting client", address=source.address)

    with channel:
        async with channel.subscribe() as subscription, anyio.create_task_group() as tg:
            if handle_signals:
                tg.start_soon(cancel_on_signals, token)
            tg.start_soon(sink.drain, subscription)

            await monitor_until_cancelled(
                source,
                channel,
                token,
                config.monitor.backoff.build(),
                grace_delay=config.monitor.grace_delay,
                logger=logger,
            )
            tg.cancel_scope.cancel()

    logger.info("Client stopped", address=source.address)
