"""Protocol definitions for the monitor system.

This module defines the capability a caller supplies to have a data
source supervised:
- Source: establishes instances and polls them for events
"""

from typing import Protocol, TypeVar, runtime_checkable

InstanceT = TypeVar("InstanceT")
EventT_co = TypeVar("EventT_co", covariant=True)


@runtime_checkable
class Source(Protocol[InstanceT, EventT_co]):
    """Protocol for a failure-prone, pollable data source.

    The supervisor never polls before a successful ``establish`` and
    never polls an instance again once ``establish`` or ``poll`` has
    raised. An instance is owned exclusively by the supervisor; if it is
    an ``anyio.abc.AsyncResource`` it is closed when discarded.

    Any exception raised by either method is treated as a transient
    failure and triggers reconnection.
    """

    async def establish(self) -> InstanceT:
        """Create a ready-to-poll source instance.

        Raises:
            Exception: If the instance cannot be created for any reason.
        """
        ...

    async def poll(self, instance: InstanceT) -> EventT_co:
        """Produce the next event from an established instance.

        Args:
            instance: An instance returned by ``establish``.

        Raises:
            Exception: If the instance is no longer usable.
        """
        ...
