"""
Recipe store implementations.

- InMemoryRecipeStore: process-local, used in development and tests
- SupabaseRecipeStore: the `recipes` table

Note: These stores do NOT perform authorization checks.
The service layer is responsible for verifying ownership.
"""

import asyncio
from typing import Any, Optional

from shared.repository import BaseRepository

from .models import Difficulty, Recipe


class InMemoryRecipeStore:
    """
    Recipe store backed by a dict.

    Every call yields to the event loop once, so concurrent requests
    interleave between reads and writes as they would against a real
    database.
    """

    def __init__(self) -> None:
        self._recipes: dict[str, Recipe] = {}

    async def insert(self, recipe: Recipe) -> Recipe:
        await asyncio.sleep(0)
        self._recipes[recipe.id] = recipe.model_copy(deep=True)
        return recipe.model_copy(deep=True)

    async def get(self, recipe_id: str) -> Optional[Recipe]:
        await asyncio.sleep(0)
        recipe = self._recipes.get(recipe_id)
        return recipe.model_copy(deep=True) if recipe else None

    async def update(self, recipe: Recipe) -> Recipe:
        return await self.insert(recipe)

    async def delete(self, recipe_id: str) -> bool:
        await asyncio.sleep(0)
        return self._recipes.pop(recipe_id, None) is not None

    async def list_active(self, owner_id: Optional[str] = None) -> list[Recipe]:
        await asyncio.sleep(0)
        recipes = [
            r for r in self._recipes.values()
            if not r.is_trashed and (owner_id is None or r.owner_id == owner_id)
        ]
        recipes.sort(key=lambda r: r.created_at, reverse=True)
        return [r.model_copy(deep=True) for r in recipes]

    async def list_trashed(self, owner_id: Optional[str] = None) -> list[Recipe]:
        await asyncio.sleep(0)
        recipes = [
            r for r in self._recipes.values()
            if r.is_trashed and (owner_id is None or r.owner_id == owner_id)
        ]
        recipes.sort(key=lambda r: r.deleted_at, reverse=True)
        return [r.model_copy(deep=True) for r in recipes]


class SupabaseRecipeStore(BaseRepository[Recipe]):
    """Recipe store backed by the Supabase `recipes` table."""

    TABLE = "recipes"

    async def insert(self, recipe: Recipe) -> Recipe:
        result = self._db.table(self.TABLE).insert(self._to_row(recipe)).execute()
        return self._map_to_recipe(result.data[0])

    async def get(self, recipe_id: str) -> Optional[Recipe]:
        result = self._db.table(self.TABLE).select("*").eq("id", recipe_id).execute()
        if not result.data:
            return None
        return self._map_to_recipe(result.data[0])

    async def update(self, recipe: Recipe) -> Recipe:
        row = self._to_row(recipe)
        row.pop("id")
        row.pop("owner_id")
        row.pop("created_at")
        result = self._db.table(self.TABLE).update(row).eq("id", recipe.id).execute()
        return self._map_to_recipe(result.data[0])

    async def delete(self, recipe_id: str) -> bool:
        result = self._db.table(self.TABLE).delete().eq("id", recipe_id).execute()
        return bool(result.data)

    async def list_active(self, owner_id: Optional[str] = None) -> list[Recipe]:
        query = self._db.table(self.TABLE).select("*").is_("deleted_at", "null")
        if owner_id is not None:
            query = query.eq("owner_id", owner_id)
        result = query.order("created_at", desc=True).execute()
        return [self._map_to_recipe(row) for row in result.data]

    async def list_trashed(self, owner_id: Optional[str] = None) -> list[Recipe]:
        query = self._db.table(self.TABLE).select("*").not_.is_("deleted_at", "null")
        if owner_id is not None:
            query = query.eq("owner_id", owner_id)
        result = query.order("deleted_at", desc=True).execute()
        return [self._map_to_recipe(row) for row in result.data]

    # -------------------------------------------------------------------------
    # Private mapping methods
    # -------------------------------------------------------------------------

    def _to_row(self, recipe: Recipe) -> dict[str, Any]:
        return recipe.model_dump(mode="json")

    def _map_to_recipe(self, data: dict[str, Any]) -> Recipe:
        """Map database row to Recipe model."""
        return Recipe(
            id=str(data["id"]),
            owner_id=str(data["owner_id"]),
            title=data["title"],
            description=data["description"],
            category=data.get("category") or "Uncategorised",
            difficulty=Difficulty(data.get("difficulty") or Difficulty.MEDIUM.value),
            rating=data.get("rating") or 0,
            cooking_time=data.get("cooking_time") or 0,
            prep_time=data.get("prep_time") or 0,
            servings=data.get("servings") or 0,
            image_url=data.get("image_url") or "",
            notes=data.get("notes") or "",
            ingredients=data.get("ingredients") or [],
            instructions=data.get("instructions") or [],
            dietary=data.get("dietary") or [],
            tags=data.get("tags") or [],
            deleted_at=self._parse_timestamp(data.get("deleted_at")),
            created_at=self._parse_timestamp(data["created_at"]),
            updated_at=self._parse_timestamp(data["updated_at"]),
        )
