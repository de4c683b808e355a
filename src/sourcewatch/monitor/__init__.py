"""Monitor package for supervising failure-prone data sources.

This package keeps a single source instance connected, republishes its
events to any number of subscribers and masks transient failures behind
automatic reconnection with escalating backoff.

Key Components:
    - Source: Protocol a caller implements to establish and poll a source
    - Broadcast: Lossy multi-subscriber channel events are published on
    - ExponentialBackoff: Re-iterable reconnect delay definition
    - RepeatLast: Backoff cursor that repeats its last delay forever
    - StatusTracker: Up/down liveness flag with outage logging
    - CancellationToken: Idempotent stop signal
    - Supervisor: The reconnect and polling loop

A CancellationToken must be created inside a running event loop, for
example within the coroutine passed to ``anyio.run``. Broadcast channels
and backoff definitions can be built anywhere.

Example:
    >>> from sourcewatch.monitor import Broadcast, CancellationToken
    >>> from sourcewatch.monitor import ExponentialBackoff, monitor_until_cancelled
    >>> channel = Broadcast[str](capacity=16)
    >>> token = CancellationToken()
    >>> await monitor_until_cancelled(source, channel, token, ExponentialBackoff())
"""

from ._backoff import ExponentialBackoff, RepeatLast, validate_backoff
from ._cancel import CancellationToken
from ._channel import Broadcast, Subscription
from ._models import Status
from ._protocol import Source
from ._status import StatusTracker
from ._supervisor import (
    GRACE_DELAY,
    Supervisor,
    monitor_forever,
    monitor_until_cancelled,
)

__all__ = [
    "GRACE_DELAY",
    "Broadcast",
    "CancellationToken",
    "ExponentialBackoff",
    "RepeatLast",
    "Source",
    "Status",
    "StatusTracker",
    "Subscription",
    "Supervisor",
    "monitor_forever",
    "monitor_until_cancelled",
    "validate_backoff",
]
