"""
Per-owner duplicate title detection.

This is a read-before-write check. Two concurrent creates with the same
title can both pass it before either is stored; nothing at the storage
layer prevents that.
"""

from typing import Optional

from .interfaces import IRecipeStore
from .models import Recipe
from .normalization import normalize_title


class DuplicateChecker:
    """Finds an owner's active recipe whose title collides with a new one."""

    def __init__(self, store: IRecipeStore):
        self._store = store

    async def find_collision(
        self,
        owner_id: str,
        title: str,
        exclude_id: Optional[str] = None,
    ) -> Optional[Recipe]:
        """
        Return the colliding recipe, or None.

        Titles match after trimming and lowercasing. Trashed recipes and
        other owners' recipes never collide. `exclude_id` skips the
        recipe being edited.
        """
        wanted = normalize_title(title)
        for recipe in await self._store.list_active(owner_id):
            if recipe.id == exclude_id:
                continue
            if normalize_title(recipe.title) == wanted:
                return recipe
        return None
