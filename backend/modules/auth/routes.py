"""
Authentication API endpoints.

Credential routes (register, login, OTP) share the per-IP rate limit;
identity routes require a bearer token.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_auth_service
from api.middleware.auth import get_admin_user, get_current_user, get_user_or_admin
from api.middleware.rate_limit import auth_rate_limit
from shared.models import AuthenticatedUser

from .exceptions import UserNotFoundError
from .models import (
    LoginRequest,
    MessageResponse,
    OtpRequest,
    OtpVerifyRequest,
    PublicProfileResponse,
    RegisterRequest,
    TokenResponse,
    UserProfile,
)
from .service import AuthService

router = APIRouter()

rate_limited = [Depends(auth_rate_limit)]


@router.post("/register", response_model=TokenResponse, status_code=201, dependencies=rate_limited)
async def register(
    request: RegisterRequest,
    service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    """
    Create an account and sign it in.

    Returns a session token for the new user.
    """
    token = await service.register(request)
    return TokenResponse(message="Registered successfully", token=token)


@router.post(
    "/login",
    response_model=TokenResponse,
    response_model_exclude_none=True,
    dependencies=rate_limited,
)
async def login(
    request: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    """Exchange email and password for a session token."""
    return TokenResponse(token=await service.login(request))


@router.post("/request-otp", response_model=MessageResponse, dependencies=rate_limited)
async def request_otp(
    request: OtpRequest,
    service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    """
    Send a one-time passcode to the account's email.

    The code is valid for a few minutes and replaces any earlier code.
    """
    await service.request_otp(request.email)
    return MessageResponse(message="OTP sent successfully")


@router.post(
    "/verify-otp",
    response_model=TokenResponse,
    response_model_exclude_none=True,
    dependencies=rate_limited,
)
async def verify_otp(
    request: OtpVerifyRequest,
    service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    """Exchange a valid one-time passcode for a session token."""
    return TokenResponse(token=await service.verify_otp(request.email, request.otp))


@router.get("/me", response_model=UserProfile)
async def me(
    user: AuthenticatedUser = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
) -> UserProfile:
    """Profile of the signed-in user, without secrets."""
    profile = await service.get_user_by_id(user.id)
    if profile is None:
        raise UserNotFoundError(user.id)
    return profile


@router.get("/admin/me", response_model=UserProfile)
async def admin_me(
    user: AuthenticatedUser = Depends(get_admin_user),
    service: AuthService = Depends(get_auth_service),
) -> UserProfile:
    """Same as /me, restricted to admins."""
    profile = await service.get_user_by_id(user.id)
    if profile is None:
        raise UserNotFoundError(user.id)
    return profile


@router.get("/public/{user_id}", response_model=PublicProfileResponse)
async def public_profile(
    user_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
) -> PublicProfileResponse:
    """Another user's public profile (id and display name)."""
    profile = await service.get_public_profile(user_id)
    if profile is None:
        raise UserNotFoundError(user_id)
    return PublicProfileResponse(user=profile)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    user: AuthenticatedUser = Depends(get_user_or_admin),
    service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    """
    Sign out.

    Tokens are not revoked server-side; the client discards its copy.
    """
    await service.logout(user)
    return MessageResponse(message="Logged out successfully")
