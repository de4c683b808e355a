"""Console output for broadcast events."""

from __future__ import annotations

from typing import TYPE_CHECKING, final

from rich.console import Console
from rich.style import Style
from rich.text import Text

if TYPE_CHECKING:
    from sourcewatch.monitor import Subscription


@final
class ConsoleSink:
    """Prints events to stdout, one per line, as ``[prefix] event``.

    When the subscription has missed events since the last print, a dim
    notice is printed first.
    """

    __slots__ = ("_console", "_prefix", "_reported_missed")

    def __init__(self, prefix: str, console: Console | None = None) -> None:
        """Initialize the sink.

        Args:
            prefix: Label printed before every event.
            console: Rich Console instance for output. If None, creates a new one.
        """
        self._console = console or Console()
        self._prefix = prefix
        self._reported_missed = 0

    def write(self, event: str, *, missed: int = 0) -> None:
        """Print a single event.

        Args:
            event: The event text.
            missed: Total events the subscriber has missed so far.
        """
        if missed > self._reported_missed:
            notice = Text(
                f"[{self._prefix}] missed {missed - self._reported_missed} event(s)",
                style=Style(color="yellow", dim=True),
            )
            self._console.print(notice)
            self._reported_missed = missed

        text = Text()
        _ = text.append(f"[{self._prefix}]", style=Style(color="blue", bold=True))
        _ = text.append(" ")
        _ = text.append(event)
        self._console.print(text)

    async def drain(self, subscription: Subscription[str]) -> None:
        """Print every event received on a subscription until it ends."""
        async for event in subscription:
            self.write(event, missed=subscription.missed)
