"""
Activity store implementations.

- InMemoryActivityStore: process-local, used in development and tests
- SupabaseActivityStore: the `activities` table

Both only ever insert; there is no update or delete path.
"""

import asyncio
from datetime import timedelta
from typing import Any

from shared.repository import BaseRepository

from .models import Activity, ActivityAction


class InMemoryActivityStore:
    """
    Activity store backed by a list.

    Creation times are made strictly increasing so newest-first ordering
    has no ties.
    """

    def __init__(self) -> None:
        self._activities: list[Activity] = []

    async def append(self, activity: Activity) -> Activity:
        await asyncio.sleep(0)
        if self._activities:
            floor = self._activities[-1].created_at + timedelta(microseconds=1)
            if activity.created_at < floor:
                activity = activity.model_copy(update={"created_at": floor})
        self._activities.append(activity)
        return activity

    async def recent(self, limit: int) -> list[Activity]:
        await asyncio.sleep(0)
        if limit <= 0:
            return []
        return list(reversed(self._activities[-limit:]))


class SupabaseActivityStore(BaseRepository[Activity]):
    """Activity store backed by the Supabase `activities` table."""

    TABLE = "activities"

    async def append(self, activity: Activity) -> Activity:
        result = (
            self._db.table(self.TABLE)
            .insert(activity.model_dump(mode="json"))
            .execute()
        )
        return self._map_to_activity(result.data[0])

    async def recent(self, limit: int) -> list[Activity]:
        result = (
            self._db.table(self.TABLE)
            .select("*")
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [self._map_to_activity(row) for row in result.data]

    def _map_to_activity(self, data: dict[str, Any]) -> Activity:
        """Map database row to Activity model."""
        return Activity(
            id=str(data["id"]),
            user_id=str(data["user_id"]),
            user_name=data["user_name"],
            action=ActivityAction(data["action"]),
            recipe_id=str(data["recipe_id"]),
            recipe_title=data["recipe_title"],
            created_at=self._parse_timestamp(data["created_at"]),
        )
