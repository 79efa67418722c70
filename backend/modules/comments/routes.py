"""
Recipe comment endpoints.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_comment_service
from api.middleware.auth import get_user_or_admin
from shared.models import AuthenticatedUser

from .models import CommentListResponse, CommentRequest, CommentResponse
from .service import CommentService

router = APIRouter()


@router.post("", response_model=CommentResponse, status_code=201)
async def add_comment(
    request: CommentRequest,
    user: AuthenticatedUser = Depends(get_user_or_admin),
    service: CommentService = Depends(get_comment_service),
) -> CommentResponse:
    """Comment on an active recipe."""
    comment = await service.add(user, request)
    return CommentResponse(message="Comment added", comment=comment)


@router.get("/{recipe_id}", response_model=CommentListResponse)
async def list_comments(
    recipe_id: str,
    service: CommentService = Depends(get_comment_service),
) -> CommentListResponse:
    """Comments on a recipe, newest first. No authentication required."""
    return CommentListResponse(comments=await service.list_for_recipe(recipe_id))
