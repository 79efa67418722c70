"""
Shared infrastructure for the Cookbook backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory
- exceptions: Base exception classes
- models: Authenticated caller and roles
- repository: Base class for Supabase-backed stores

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .exceptions import (
    CookbookError,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    PayloadTooLargeError,
    RateLimitExceededError,
    ServerError,
    ServiceUnavailableError,
)
from .models import AuthenticatedUser, Role

__all__ = [
    "Settings",
    "get_settings",
    "CookbookError",
    "NotFoundError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "ConflictError",
    "PayloadTooLargeError",
    "RateLimitExceededError",
    "ServerError",
    "ServiceUnavailableError",
    "AuthenticatedUser",
    "Role",
]
