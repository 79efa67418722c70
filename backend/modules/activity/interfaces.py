"""
Activity module interfaces.
"""

from typing import Protocol, runtime_checkable

from .models import Activity


@runtime_checkable
class IActivityStore(Protocol):
    """Append-only persistence port for activity records."""

    async def append(self, activity: Activity) -> Activity:
        ...

    async def recent(self, limit: int) -> list[Activity]:
        """Newest first, at most `limit` records."""
        ...


@runtime_checkable
class IActivityBroadcaster(Protocol):
    """
    Push channel for new activity records.

    publish() must not block on subscribers and must not raise when
    nobody is listening. Returns the number of subscribers reached.
    """

    def publish(self, topic: str, activity: Activity) -> int:
        ...
