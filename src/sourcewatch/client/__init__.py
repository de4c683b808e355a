"""Demonstration client: supervise a TCP line stream and print it."""

from ._sink import ConsoleSink
from ._tcp import DELIMITER, TcpLineSource

__all__ = ["DELIMITER", "ConsoleSink", "TcpLineSource"]
