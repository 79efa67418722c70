"""
Activity module data models.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class ActivityAction(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"


class Activity(BaseModel):
    """
    One audit record.

    Actor name and recipe title are copied in at write time, so the record
    stays readable after the user renames themselves or the recipe is
    purged. Records are never changed or removed.
    """

    id: str
    user_id: str
    user_name: str
    action: ActivityAction
    recipe_id: str
    recipe_title: str
    created_at: datetime

    model_config = {"frozen": True}


class ActivityListResponse(BaseModel):
    activities: list[Activity] = Field(default_factory=list)
