import io

import pytest
from rich.console import Console

from sourcewatch.client import ConsoleSink
from sourcewatch.monitor import Broadcast

pytestmark = pytest.mark.anyio


def make_console() -> tuple[Console, io.StringIO]:
    buffer = io.StringIO()
    return Console(file=buffer, width=120, color_system=None), buffer


class TestConsoleSink:
    def test_write_prefixes_event(self) -> None:
        console, buffer = make_console()
        sink = ConsoleSink("localhost:8080", console)

        sink.write("hello [bold]world[/bold]")

        assert buffer.getvalue() == "[localhost:8080] hello [bold]world[/bold]\n"

    def test_write_reports_newly_missed_events_once(self) -> None:
        console, buffer = make_console()
        sink = ConsoleSink("src", console)

        sink.write("a", missed=3)
        sink.write("b", missed=3)

        assert buffer.getvalue().splitlines() == [
            "[src] missed 3 event(s)",
            "[src] a",
            "[src] b",
        ]

    async def test_drain_prints_until_channel_closes(self) -> None:
        console, buffer = make_console()
        sink = ConsoleSink("src", console)
        channel = Broadcast[str](4)
        subscription = channel.subscribe()
        for line in ("one", "two"):
            _ = channel.send(line)
        channel.close()

        await sink.drain(subscription)
        await subscription.aclose()

        assert buffer.getvalue().splitlines() == ["[src] one", "[src] two"]
