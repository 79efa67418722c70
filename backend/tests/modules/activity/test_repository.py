"""Tests for modules/activity/repository.py."""

import uuid
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from modules.activity.interfaces import IActivityStore
from modules.activity.models import Activity, ActivityAction
from modules.activity.repository import InMemoryActivityStore, SupabaseActivityStore


FIXED = datetime(2024, 1, 1, tzinfo=timezone.utc)


def activity(created_at: datetime = FIXED, title: str = "Soup") -> Activity:
    return Activity(
        id=str(uuid.uuid4()),
        user_id="alice",
        user_name="Alice Smith",
        action=ActivityAction.UPDATED,
        recipe_id="r1",
        recipe_title=title,
        created_at=created_at,
    )


class TestInMemoryActivityStore:
    def test_satisfies_protocol(self):
        assert isinstance(InMemoryActivityStore(), IActivityStore)

    @pytest.mark.asyncio
    async def test_recent_newest_first_and_limited(self):
        store = InMemoryActivityStore()
        for i in range(5):
            await store.append(activity(title=f"t{i}"))

        recent = await store.recent(3)

        assert [a.recipe_title for a in recent] == ["t4", "t3", "t2"]

    @pytest.mark.asyncio
    async def test_creation_times_strictly_increase(self):
        """Records appended with the same timestamp still sort without ties."""
        store = InMemoryActivityStore()
        for _ in range(4):
            await store.append(activity())

        times = [a.created_at for a in await store.recent(10)]
        assert all(newer > older for newer, older in zip(times, times[1:]))

    @pytest.mark.asyncio
    async def test_non_positive_limit(self):
        store = InMemoryActivityStore()
        await store.append(activity())
        assert await store.recent(0) == []


class TestSupabaseActivityStore:
    @pytest.mark.asyncio
    async def test_append(self):
        db = MagicMock()
        record = activity()
        db.table.return_value.insert.return_value.execute.return_value.data = [
            record.model_dump(mode="json")
        ]
        store = SupabaseActivityStore(db)

        stored = await store.append(record)

        db.table.assert_called_with("activities")
        row = db.table.return_value.insert.call_args.args[0]
        assert row["action"] == "updated"
        assert stored == record

    @pytest.mark.asyncio
    async def test_recent(self):
        db = MagicMock()
        chain = db.table.return_value.select.return_value.order.return_value.limit.return_value
        chain.execute.return_value.data = [activity().model_dump(mode="json")]
        store = SupabaseActivityStore(db)

        result = await store.recent(7)

        db.table.return_value.select.return_value.order.assert_called_with("created_at", desc=True)
        db.table.return_value.select.return_value.order.return_value.limit.assert_called_with(7)
        assert len(result) == 1
