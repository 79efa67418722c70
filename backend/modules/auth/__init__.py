"""
Authentication module.

Handles credentials, session tokens, OTP sign-in and profile maintenance.

Public API:
- IAuthService: Interface used by the authorization gate
- ICredentialStore: Credential storage port
- User, UserProfile, PublicProfile: User views
- Auth exceptions: InvalidTokenError, ExpiredTokenError, etc.
"""

from .interfaces import IAuthService, ICredentialStore, IOtpSender
from .models import PublicProfile, TokenClaims, User, UserProfile
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    InvalidCredentialsError,
    InsufficientPermissionsError,
    UserNotFoundError,
)

__all__ = [
    # Interfaces
    "IAuthService",
    "ICredentialStore",
    "IOtpSender",
    # Models
    "PublicProfile",
    "TokenClaims",
    "User",
    "UserProfile",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "InvalidCredentialsError",
    "InsufficientPermissionsError",
    "UserNotFoundError",
]
