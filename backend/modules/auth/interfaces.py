"""
Authentication module interfaces.

Other modules should depend on these protocols, not the concrete
implementations. This enables testing with in-memory stores and swapping
the persistence engine.
"""

from typing import Protocol, Optional, runtime_checkable

from shared.models import AuthenticatedUser

from .models import User, UserProfile, PublicProfile


@runtime_checkable
class ICredentialStore(Protocol):
    """
    Persistence port for user credentials.

    Emails passed in are already normalized (trimmed, lowercased).
    """

    async def get_by_id(self, user_id: str) -> Optional[User]:
        ...

    async def get_by_email(self, email: str) -> Optional[User]:
        ...

    async def insert(self, user: User) -> User:
        ...

    async def update(self, user: User) -> User:
        """Replace the stored record with the same id."""
        ...


@runtime_checkable
class IOtpSender(Protocol):
    """Delivery channel for one-time passcodes (email, SMS, ...)."""

    async def send(self, email: str, otp: str) -> None:
        ...


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication operations.

    This protocol defines the contract that the auth module exposes
    to the API layer and to other modules.
    """

    async def validate_token(self, token: Optional[str]) -> AuthenticatedUser:
        """
        Validate a session token and return the caller's identity.

        Raises:
            MissingTokenError: If no token is given
            InvalidTokenError: If the token is malformed, tampered or expired
        """
        ...

    async def get_user_by_id(self, user_id: str) -> Optional[UserProfile]:
        """
        Get a user's profile by their ID.

        Returns:
            UserProfile if found, None otherwise
        """
        ...

    async def get_public_profile(self, user_id: str) -> Optional[PublicProfile]:
        """
        Get the public (display name only) view of a user.

        Returns:
            PublicProfile if found, None otherwise
        """
        ...
