"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from enum import Enum
from pydantic import BaseModel, Field


class Role(str, Enum):
    """Roles known to the authorization gate."""

    USER = "user"
    ADMIN = "admin"


class AuthenticatedUser(BaseModel):
    """
    Represents an authenticated caller.

    Populated from verified token claims and made available to route
    handlers via dependency injection. Tokens are stateless, so this
    carries only what the token carries.
    """

    id: str = Field(..., description="User ID")
    role: Role = Field(default=Role.USER, description="User role")

    model_config = {
        "frozen": True,  # Make immutable for safety
        "extra": "ignore",
    }

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
