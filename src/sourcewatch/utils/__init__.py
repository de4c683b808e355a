"""Utilities used across sourcewatch."""

from ._logging import LogFormatType, create_logger

__all__ = ["LogFormatType", "create_logger"]
