from __future__ import annotations

import io
from functools import partial
from pathlib import Path
from typing import TYPE_CHECKING

import anyio
import anyio.abc
import pytest
from rich.console import Console

from sourcewatch.cli import app, run_tcp_client
from sourcewatch.config import Config, LogLevel
from sourcewatch.monitor import CancellationToken
from sourcewatch.utils import create_logger

if TYPE_CHECKING:
    from pytest_mock import MockerFixture


class TestTcpCommand:
    def test_flags_override_config(self, mocker: MockerFixture) -> None:
        run = mocker.patch("sourcewatch.cli._app.anyio.run")
        command, bound, _ = app.parse_args(
            ["tcp", "--host", "example.com", "--port", "9000", "--log-level", "error"]
        )

        command(*bound.args, **bound.kwargs)

        run.assert_called_once()
        runner, config, _logger = run.call_args.args
        assert runner is run_tcp_client
        assert config.client.host == "example.com"
        assert config.client.port == 9000
        assert config.logging.level is LogLevel.ERROR

    def test_missing_config_file_exits(
        self, mocker: MockerFixture, capsys: pytest.CaptureFixture[str], tmp_path: Path
    ) -> None:
        run = mocker.patch("sourcewatch.cli._app.anyio.run")
        command, bound, _ = app.parse_args(
            ["tcp", "--config", str(tmp_path / "missing.toml")]
        )

        with pytest.raises(SystemExit) as exc_info:
            command(*bound.args, **bound.kwargs)

        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err
        run.assert_not_called()


class TestRunTcpClient:
    @pytest.mark.anyio
    async def test_prints_received_lines_until_cancelled(self) -> None:
        async def handle(client: anyio.abc.SocketStream) -> None:
            async with client:
                await client.send(b"first\nsecond\n")
                await anyio.sleep_forever()

        buffer = io.StringIO()
        console = Console(file=buffer, width=120, color_system=None)
        token = CancellationToken()
        listener = await anyio.create_tcp_listener(local_host="127.0.0.1")
        port = listener.extra(anyio.abc.SocketAttribute.local_port)
        config = Config.from_dict({"client": {"host": "127.0.0.1", "port": port}})

        async with listener, anyio.create_task_group() as server_tg:
            server_tg.start_soon(listener.serve, handle)

            with anyio.fail_after(5):
                async with anyio.create_task_group() as client_tg:
                    client_tg.start_soon(
                        partial(
                            run_tcp_client,
                            config,
                            create_logger(level="error"),
                            token=token,
                            console=console,
                            handle_signals=False,
                        )
                    )
                    while "second" not in buffer.getvalue():
                        await anyio.sleep(0.01)
                    token.cancel()

            server_tg.cancel_scope.cancel()

        assert buffer.getvalue().splitlines() == [
            f"[127.0.0.1:{port}] first",
            f"[127.0.0.1:{port}] second",
        ]
