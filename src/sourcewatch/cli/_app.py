"""The command-line interface for sourcewatch."""
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing

import sys
from pathlib import Path
from typing import Annotated, Any

import anyio
from cyclopts import App, Parameter

from sourcewatch.config import LogFormat, LogLevel, load_config, set_nested_key
from sourcewatch.exceptions import ConfigError
from sourcewatch.utils import create_logger

from ._runner import run_tcp_client

app = App(
    name="sourcewatch",
    help="Supervise a failure-prone data source and republish its events.",
    help_on_error=True,
)


@app.command(name="tcp")
def tcp(  # noqa: PLR0913
    *,
    host: Annotated[
        str | None,
        Parameter(help="Host to connect to."),
    ] = None,
    port: Annotated[
        int | None,
        Parameter(help="TCP port to connect to."),
    ] = None,
    config: Annotated[
        Path | None,
        Parameter(name="--config", help="Path to a TOML config file."),
    ] = None,
    log_level: Annotated[
        LogLevel | None,
        Parameter(help="Log level."),
    ] = None,
    log_format: Annotated[
        LogFormat | None,
        Parameter(help="Log output format."),
    ] = None,
    log_file: Annotated[
        str | None,
        Parameter(help="Append logs to this file instead of stderr."),
    ] = None,
) -> None:
    """Print every line received from a TCP endpoint, reconnecting as needed.

    Runs until interrupted with Ctrl-C or SIGTERM.
    """
    overrides: dict[str, Any] = {}  # pyright: ignore[reportExplicitAny]
    for key, value in (
        ("client.host", host),
        ("client.port", port),
        ("logging.level", log_level),
        ("logging.format", log_format),
        ("logging.file", log_file),
    ):
        if value is not None:
            set_nested_key(overrides, key, value)

    try:
        loaded = load_config(config, overrides=overrides)
    except (ConfigError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)  # noqa: T201
        sys.exit(1)

    logger = create_logger(
        level=loaded.logging.level.value,
        log_format=loaded.logging.format.value,  # type: ignore[arg-type]
        log_file=loaded.logging.file,
    )

    anyio.run(run_tcp_client, loaded, logger)


def main() -> None:
    """Default entrypoint for the `sourcewatch` CLI."""
    app()


if __name__ == "__main__":
    main()
