"""
Comment store implementations.

- InMemoryCommentStore: process-local, used in development and tests
- SupabaseCommentStore: the `comments` table
"""

import asyncio
from typing import Any

from shared.repository import BaseRepository

from .models import Comment


class InMemoryCommentStore:
    """Comment store backed by a list kept in insertion order."""

    def __init__(self) -> None:
        self._comments: list[Comment] = []

    async def insert(self, comment: Comment) -> Comment:
        await asyncio.sleep(0)
        self._comments.append(comment)
        return comment

    async def list_for_recipe(self, recipe_id: str) -> list[Comment]:
        await asyncio.sleep(0)
        return [c for c in reversed(self._comments) if c.recipe_id == recipe_id]


class SupabaseCommentStore(BaseRepository[Comment]):
    """Comment store backed by the Supabase `comments` table."""

    TABLE = "comments"

    async def insert(self, comment: Comment) -> Comment:
        result = (
            self._db.table(self.TABLE)
            .insert(comment.model_dump(mode="json"))
            .execute()
        )
        return self._map_to_comment(result.data[0])

    async def list_for_recipe(self, recipe_id: str) -> list[Comment]:
        result = (
            self._db.table(self.TABLE)
            .select("*")
            .eq("recipe_id", recipe_id)
            .order("created_at", desc=True)
            .execute()
        )
        return [self._map_to_comment(row) for row in result.data]

    def _map_to_comment(self, data: dict[str, Any]) -> Comment:
        """Map database row to Comment model."""
        return Comment(
            id=str(data["id"]),
            recipe_id=str(data["recipe_id"]),
            user_id=str(data["user_id"]),
            comment=data["comment"],
            created_at=self._parse_timestamp(data["created_at"]),
        )
