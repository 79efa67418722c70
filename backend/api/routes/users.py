"""
User-related endpoints.

Provides endpoints for profile and password maintenance.
"""

from fastapi import APIRouter, Depends

from modules.auth.models import (
    MessageResponse,
    PasswordChangeRequest,
    ProfileUpdateRequest,
    UserProfile,
)
from modules.auth.service import AuthService
from shared.models import AuthenticatedUser

from ..dependencies import get_auth_service
from ..middleware.auth import get_current_user

router = APIRouter()


@router.put("/profile", response_model=UserProfile)
async def update_profile(
    request: ProfileUpdateRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
) -> UserProfile:
    """
    Change the current user's name and email.

    The email must not belong to another account. Activity records
    written earlier keep the old display name.
    """
    return await service.update_profile(user.id, request)


@router.put("/password", response_model=MessageResponse)
async def change_password(
    request: PasswordChangeRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    """Change the current user's password after checking the old one."""
    await service.change_password(user.id, request)
    return MessageResponse(message="Password updated successfully")
