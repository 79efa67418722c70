"""
Comments module interfaces.
"""

from typing import Protocol, runtime_checkable

from .models import Comment


@runtime_checkable
class ICommentStore(Protocol):
    """Persistence port for recipe comments."""

    async def insert(self, comment: Comment) -> Comment:
        ...

    async def list_for_recipe(self, recipe_id: str) -> list[Comment]:
        """Comments on one recipe, newest first."""
        ...
