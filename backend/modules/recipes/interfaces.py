"""
Recipes module interfaces.

IRecipeStore is the persistence port; IAssetUploader is the boundary to
whatever stores image bytes. The lifecycle service only sees these.
"""

from typing import Optional, Protocol, runtime_checkable

from .models import ImageUpload, Recipe


@runtime_checkable
class IRecipeStore(Protocol):
    """
    Persistence port for recipe documents.

    Single-document writes are atomic; nothing spans documents. No
    uniqueness constraint is expected on titles.
    """

    async def insert(self, recipe: Recipe) -> Recipe:
        ...

    async def get(self, recipe_id: str) -> Optional[Recipe]:
        ...

    async def update(self, recipe: Recipe) -> Recipe:
        """Replace the stored document with the same id."""
        ...

    async def delete(self, recipe_id: str) -> bool:
        """Permanently remove a document. Returns False if it was absent."""
        ...

    async def list_active(self, owner_id: Optional[str] = None) -> list[Recipe]:
        """Non-trashed recipes, newest first, optionally for one owner."""
        ...

    async def list_trashed(self, owner_id: Optional[str] = None) -> list[Recipe]:
        """Trashed recipes, most recently trashed first."""
        ...


@runtime_checkable
class IAssetUploader(Protocol):
    """Stores image bytes elsewhere and returns a reference URL."""

    async def upload(self, image: ImageUpload) -> str:
        ...
