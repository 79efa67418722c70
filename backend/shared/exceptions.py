"""
Base exception classes for the Cookbook backend.

Each module defines its own exceptions that inherit from these bases.
The API layer turns any CookbookError into the standard error body:

    {"error": {"code": "...", "message": "...", "details": ...}}
"""

from typing import Optional, Any


class CookbookError(Exception):
    """
    Base exception for all Cookbook errors.

    All custom exceptions should inherit from this class.
    """

    status_code: int = 500
    default_code: str = "SERVER_ERROR"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Any] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        error: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            error["details"] = self.details
        return {"error": error}


class ValidationError(CookbookError):
    """Input validation failed."""

    status_code = 400
    default_code = "VALIDATION_ERROR"


class AuthenticationError(CookbookError):
    """Authentication failed (invalid or missing credentials)."""

    status_code = 401
    default_code = "UNAUTHORIZED"


class AuthorizationError(CookbookError):
    """Authorization failed (insufficient permissions)."""

    status_code = 403
    default_code = "FORBIDDEN"


class NotFoundError(CookbookError):
    """Resource not found, or not in the state the operation expects."""

    status_code = 404
    default_code = "NOT_FOUND"


class ConflictError(CookbookError):
    """Request conflicts with existing data."""

    status_code = 409
    default_code = "CONFLICT"


class PayloadTooLargeError(CookbookError):
    """Request body exceeds the allowed size."""

    status_code = 413
    default_code = "PAYLOAD_TOO_LARGE"


class RateLimitExceededError(CookbookError):
    """Too many requests from one client within the window."""

    status_code = 429
    default_code = "RATE_LIMIT_EXCEEDED"

    def __init__(self, retry_after: int, max_requests: int, window_seconds: int):
        super().__init__(
            "Too many requests from this IP, please try again later.",
            details=f"Maximum {max_requests} requests per {window_seconds // 60} minutes allowed",
        )
        self.retry_after = retry_after


class ServerError(CookbookError):
    """Unexpected or configuration failure. Detail is hidden outside development."""

    status_code = 500
    default_code = "SERVER_ERROR"


class ServiceUnavailableError(CookbookError):
    """A dependency of the request is switched off or unreachable."""

    status_code = 503
    default_code = "SERVICE_UNAVAILABLE"
