"""
Recipe module data models.

Recipe is the stored document. RecipeInput is the permissive request
body: every field is optional and loosely typed so that the
normalization step, not request parsing, decides on defaults.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, Field


class Difficulty(str, Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


Number = Union[int, float]


class Recipe(BaseModel):
    """A stored recipe document."""

    id: str
    owner_id: str = Field(..., description="Creator; never changes")
    title: str
    description: str
    category: str = "Uncategorised"
    difficulty: Difficulty = Difficulty.MEDIUM
    rating: Number = 0
    cooking_time: Number = 0
    prep_time: Number = 0
    servings: Number = 0
    image_url: str = ""
    notes: str = ""
    ingredients: list[str] = Field(default_factory=list)
    instructions: list[str] = Field(default_factory=list)
    dietary: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    deleted_at: Optional[datetime] = Field(None, description="Set while in the trash")
    created_at: datetime
    updated_at: datetime

    @property
    def is_trashed(self) -> bool:
        return self.deleted_at is not None


class RecipeInput(BaseModel):
    """Create/update request body. Unknown keys are ignored."""

    model_config = {"extra": "ignore"}

    title: Optional[Any] = None
    description: Optional[Any] = None
    category: Optional[Any] = None
    difficulty: Optional[Any] = None
    rating: Optional[Any] = None
    cooking_time: Optional[Any] = None
    prep_time: Optional[Any] = None
    servings: Optional[Any] = None
    image_url: Optional[Any] = None
    notes: Optional[Any] = None
    ingredients: Optional[Any] = None
    instructions: Optional[Any] = None
    dietary: Optional[Any] = None
    tags: Optional[Any] = None


class ImageUpload(BaseModel):
    """Image bytes handed to the asset uploader."""

    filename: str
    content_type: str
    data: bytes


class BulkRequest(BaseModel):
    ids: list[str] = Field(default_factory=list)


class BulkResult(BaseModel):
    """Outcome of a best-effort batch; skipped ids are not reported."""

    succeeded: int
    ids: list[str]


class RecipeResponse(BaseModel):
    message: Optional[str] = None
    recipe: Recipe


class RecipeListResponse(BaseModel):
    recipes: list[Recipe]
    count: int


class BulkResponse(BaseModel):
    message: str
    succeeded: int
    ids: list[str]


class ImageUploadResponse(BaseModel):
    image_url: str
