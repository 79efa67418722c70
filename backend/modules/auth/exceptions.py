"""
Authentication module exceptions.

These exceptions are raised by the auth module and can be caught
by API error handlers to return appropriate HTTP responses.

Every token problem (missing, malformed, tampered, expired) is reported
with the same UNAUTHORIZED code; only the message differs.
"""

from typing import Optional

from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    ServerError,
    ValidationError,
)


class InvalidTokenError(AuthenticationError):
    """Raised when a session token is invalid, malformed or tampered with."""

    def __init__(self, message: str = "Not authorized - Invalid or expired token"):
        super().__init__(message)


class ExpiredTokenError(InvalidTokenError):
    """Raised when a session token has expired."""

    def __init__(self, message: str = "Not authorized - Invalid or expired token"):
        super().__init__(message)


class MissingTokenError(AuthenticationError):
    """Raised when no bearer token is provided."""

    def __init__(self, message: str = "Not authorized - No token provided"):
        super().__init__(message)


class InvalidCredentialsError(AuthenticationError):
    """Raised on a failed login. Does not reveal which part was wrong."""

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message, code="AUTH_ERROR")


class InvalidOtpError(AuthenticationError):
    """Raised when a one-time passcode does not match or has expired."""

    def __init__(self):
        super().__init__("Invalid or expired OTP", code="AUTH_ERROR")


class InactiveAccountError(AuthorizationError):
    """Raised when a deactivated account tries to sign in."""

    def __init__(self):
        super().__init__("Account is inactive")


class InsufficientPermissionsError(AuthorizationError):
    """Raised when user lacks required permissions."""

    def __init__(self, required_role: str, user_role: Optional[str]):
        super().__init__(
            f"Insufficient permissions. Required: {required_role}, has: {user_role}",
            details={"required_role": required_role, "user_role": user_role},
        )


class UserNotFoundError(NotFoundError):
    """Raised when a user record does not exist."""

    def __init__(self, user_id: Optional[str] = None):
        super().__init__(
            "User not found",
            details={"user_id": user_id} if user_id else None,
        )


class EmailAlreadyExistsError(ValidationError):
    """Raised when registering or switching to an email already in use."""

    def __init__(self):
        super().__init__("Email already exists")


class PasswordPolicyError(ValidationError):
    """Raised when a password does not meet the policy."""

    def __init__(self, errors: list[str]):
        super().__init__("Password does not meet requirements", details=errors)


class AuthNotConfiguredError(ServerError):
    """Raised when a token must be issued but no signing secret is configured."""

    def __init__(self):
        super().__init__(
            "Server configuration error",
            details="JWT secret is missing",
        )
