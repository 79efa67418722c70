"""
Comments module data models.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field


class Comment(BaseModel):
    """A stored comment. The author is referenced by id only."""

    id: str
    recipe_id: str
    user_id: str
    comment: str
    created_at: datetime


class CommentView(BaseModel):
    """A comment with its author's current display name."""

    id: str
    recipe_id: str
    user_id: str
    author_name: str
    comment: str
    created_at: datetime


class CommentRequest(BaseModel):
    """Create body; both fields are checked by the service."""

    model_config = {"extra": "ignore"}

    recipe_id: Optional[Any] = None
    comment: Optional[Any] = None


class CommentResponse(BaseModel):
    message: str
    comment: CommentView


class CommentListResponse(BaseModel):
    comments: list[CommentView] = Field(default_factory=list)
