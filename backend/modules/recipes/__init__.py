"""
Recipes module.

Recipe storage, input normalization, per-owner duplicate detection and
the lifecycle service (create, update, trash, restore, purge).

The service is not re-exported here; import it from
modules.recipes.service.
"""

from .interfaces import IAssetUploader, IRecipeStore
from .models import Difficulty, ImageUpload, Recipe, RecipeInput
from .exceptions import (
    DuplicateTitleError,
    RecipeAccessDeniedError,
    RecipeNotFoundError,
    RecipeValidationError,
)

__all__ = [
    "IAssetUploader",
    "IRecipeStore",
    "Difficulty",
    "ImageUpload",
    "Recipe",
    "RecipeInput",
    "DuplicateTitleError",
    "RecipeAccessDeniedError",
    "RecipeNotFoundError",
    "RecipeValidationError",
]
