"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field, field_validator

from shared.models import Role


def normalize_email(value: str) -> str:
    """Emails are unique after trimming and lowercasing."""
    return value.strip().lower()


class User(BaseModel):
    """
    Stored credential record.

    Holds secrets (password hash, OTP challenge) and must never be
    returned from an endpoint as-is; use UserProfile or PublicProfile.
    """

    id: str
    email: str
    first_name: str
    last_name: str
    password_hash: str
    role: Role = Role.USER
    active: bool = True
    otp: Optional[str] = None
    otp_expires_at: Optional[datetime] = None
    created_at: datetime

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class UserProfile(BaseModel):
    """User profile without secrets, returned to the account owner."""

    id: str
    email: str
    first_name: str
    last_name: str
    role: Role
    active: bool
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserProfile":
        return cls(
            id=user.id,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            role=user.role,
            active=user.active,
            created_at=user.created_at,
        )


class PublicProfile(BaseModel):
    """Narrow public view of a user, used by unrelated features."""

    id: str
    display_name: str


class TokenClaims(BaseModel):
    """Decoded session token payload."""

    sub: str = Field(..., description="Subject (user ID)")
    role: Role = Field(default=Role.USER, description="User role")
    exp: int = Field(..., description="Expiration timestamp")
    iat: int = Field(..., description="Issued at timestamp")
    jti: Optional[str] = Field(None, description="Token ID")


# -------------------------------------------------------------------------
# Request / response bodies
# -------------------------------------------------------------------------


class _EmailBody(BaseModel):
    email: EmailStr

    @field_validator("email", mode="before")
    @classmethod
    def _normalize_email(cls, value):
        if isinstance(value, str):
            return normalize_email(value)
        return value


class _ProfileFields(_EmailBody):
    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)

    @field_validator("first_name", "last_name", mode="before")
    @classmethod
    def _strip_names(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value


class RegisterRequest(_ProfileFields):
    password: str = Field(..., min_length=1)
    confirm_password: str = Field(..., min_length=1)


class LoginRequest(_EmailBody):
    password: str = Field(..., min_length=1)


class OtpRequest(_EmailBody):
    pass


class OtpVerifyRequest(_EmailBody):
    otp: str = Field(..., min_length=1)


class ProfileUpdateRequest(_ProfileFields):
    pass


class PasswordChangeRequest(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    token: str
    message: Optional[str] = None


class MessageResponse(BaseModel):
    message: str


class PublicProfileResponse(BaseModel):
    user: PublicProfile
