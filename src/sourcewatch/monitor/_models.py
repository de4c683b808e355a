"""Data models for the monitor system."""

from enum import StrEnum


class Status(StrEnum):
    """Liveness of the supervised source.

    - UP: The last connection attempt succeeded
    - DOWN: The last connection attempt failed
    """

    UP = "up"
    DOWN = "down"
