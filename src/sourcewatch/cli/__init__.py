"""The sourcewatch command-line interface."""

from ._app import app, main
from ._runner import run_tcp_client

__all__ = ["app", "main", "run_tcp_client"]
