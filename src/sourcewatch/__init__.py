"""Supervise failure-prone data sources and republish their events."""

from sourcewatch.monitor import (
    Broadcast,
    CancellationToken,
    ExponentialBackoff,
    Source,
    Status,
    Supervisor,
    monitor_forever,
    monitor_until_cancelled,
)

__version__ = "0.1.0"

__all__ = [
    "Broadcast",
    "CancellationToken",
    "ExponentialBackoff",
    "Source",
    "Status",
    "Supervisor",
    "__version__",
    "monitor_forever",
    "monitor_until_cancelled",
]
