"""
Rate-limit dependency for the authentication routes.

All auth routes share one window per client IP, so a burst against
login also counts against register and the OTP routes.
"""

from fastapi import Depends, Request

from shared.config import get_settings
from modules.auth.rate_limit import SlidingWindowRateLimiter

from ..dependencies import get_auth_rate_limiter


def client_identity(request: Request) -> str:
    """Network identity used as the rate-limit key."""
    return request.client.host if request.client else "unknown"


async def auth_rate_limit(
    request: Request,
    limiter: SlidingWindowRateLimiter = Depends(get_auth_rate_limiter),
) -> None:
    """Raise RateLimitExceededError once the client's window is full."""
    if not get_settings().rate_limiting_active:
        return
    limiter.hit(f"auth:{client_identity(request)}")
