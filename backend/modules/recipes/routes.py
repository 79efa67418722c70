"""
Recipe API endpoints.

Static paths (/mine, /trash, /admin/..., /bulk-..., /images) are
registered before /{recipe_id} so they are not captured by it.
"""

from fastapi import APIRouter, Depends, File, UploadFile

from api.dependencies import get_recipe_service
from api.middleware.auth import get_admin_user, get_user_or_admin
from modules.auth.models import MessageResponse
from shared.models import AuthenticatedUser

from .models import (
    BulkRequest,
    BulkResponse,
    ImageUpload,
    ImageUploadResponse,
    RecipeInput,
    RecipeListResponse,
    RecipeResponse,
)
from .service import RecipeService

router = APIRouter()


def _listing(recipes) -> RecipeListResponse:
    return RecipeListResponse(recipes=recipes, count=len(recipes))


# -------------------------------------------------------------------------
# Collection routes
# -------------------------------------------------------------------------


@router.post("", response_model=RecipeResponse, status_code=201)
async def create_recipe(
    request: RecipeInput,
    user: AuthenticatedUser = Depends(get_user_or_admin),
    service: RecipeService = Depends(get_recipe_service),
) -> RecipeResponse:
    """
    Create a recipe owned by the caller.

    Returns 409 DUPLICATE_TITLE if the caller already has an active
    recipe with the same title (case-insensitive).
    """
    recipe = await service.create(user, request)
    return RecipeResponse(message="Recipe saved", recipe=recipe)


@router.get("", response_model=RecipeListResponse)
async def list_recipes(
    service: RecipeService = Depends(get_recipe_service),
) -> RecipeListResponse:
    """All active recipes, newest first. No authentication required."""
    return _listing(await service.list_active())


@router.get("/mine", response_model=RecipeListResponse)
async def list_my_recipes(
    user: AuthenticatedUser = Depends(get_user_or_admin),
    service: RecipeService = Depends(get_recipe_service),
) -> RecipeListResponse:
    """The caller's active recipes, newest first."""
    return _listing(await service.list_active(owner_id=user.id))


@router.get("/trash", response_model=RecipeListResponse)
async def list_trash(
    user: AuthenticatedUser = Depends(get_user_or_admin),
    service: RecipeService = Depends(get_recipe_service),
) -> RecipeListResponse:
    """
    Trashed recipes, most recently trashed first.

    Admins see every user's trash.
    """
    return _listing(await service.list_trash(user))


@router.get("/admin/all", response_model=RecipeListResponse)
async def admin_list_recipes(
    user: AuthenticatedUser = Depends(get_admin_user),
    service: RecipeService = Depends(get_recipe_service),
) -> RecipeListResponse:
    return _listing(await service.list_active())


@router.delete("/admin/{recipe_id}", response_model=MessageResponse)
async def admin_delete_recipe(
    recipe_id: str,
    user: AuthenticatedUser = Depends(get_admin_user),
    service: RecipeService = Depends(get_recipe_service),
) -> MessageResponse:
    """Permanently delete any user's recipe."""
    await service.hard_delete(user, recipe_id, as_admin=True)
    return MessageResponse(message="Recipe deleted by admin")


@router.post("/bulk-delete", response_model=BulkResponse)
async def bulk_delete(
    request: BulkRequest,
    user: AuthenticatedUser = Depends(get_user_or_admin),
    service: RecipeService = Depends(get_recipe_service),
) -> BulkResponse:
    """
    Move several recipes to the trash.

    Ids the caller may not modify, or that are missing or already
    trashed, are skipped silently.
    """
    result = await service.bulk_soft_delete(user, request.ids)
    return BulkResponse(message="Bulk delete completed", **result.model_dump())


@router.post("/bulk-restore", response_model=BulkResponse)
async def bulk_restore(
    request: BulkRequest,
    user: AuthenticatedUser = Depends(get_user_or_admin),
    service: RecipeService = Depends(get_recipe_service),
) -> BulkResponse:
    """Restore several recipes from the trash, skipping ineligible ids."""
    result = await service.bulk_restore(user, request.ids)
    return BulkResponse(message="Bulk restore completed", **result.model_dump())


@router.post("/images", response_model=ImageUploadResponse, status_code=201)
async def upload_image(
    file: UploadFile = File(...),
    user: AuthenticatedUser = Depends(get_user_or_admin),
    service: RecipeService = Depends(get_recipe_service),
) -> ImageUploadResponse:
    """
    Store a recipe image and return its URL.

    Accepts JPEG, PNG, WebP and GIF files up to the configured size.
    """
    image = ImageUpload(
        filename=file.filename or "image",
        content_type=file.content_type or "application/octet-stream",
        data=await file.read(),
    )
    return ImageUploadResponse(image_url=await service.upload_image(image))


# -------------------------------------------------------------------------
# Single-recipe routes
# -------------------------------------------------------------------------


@router.get("/{recipe_id}", response_model=RecipeResponse)
async def get_recipe(
    recipe_id: str,
    user: AuthenticatedUser = Depends(get_user_or_admin),
    service: RecipeService = Depends(get_recipe_service),
) -> RecipeResponse:
    return RecipeResponse(recipe=await service.get(user, recipe_id))


@router.put("/{recipe_id}", response_model=RecipeResponse)
async def update_recipe(
    recipe_id: str,
    request: RecipeInput,
    user: AuthenticatedUser = Depends(get_user_or_admin),
    service: RecipeService = Depends(get_recipe_service),
) -> RecipeResponse:
    """
    Update an active recipe.

    Omitted fields keep their stored values.
    """
    recipe = await service.update(user, recipe_id, request)
    return RecipeResponse(message="Recipe updated", recipe=recipe)


@router.post("/{recipe_id}/trash", response_model=RecipeResponse)
async def trash_recipe(
    recipe_id: str,
    user: AuthenticatedUser = Depends(get_user_or_admin),
    service: RecipeService = Depends(get_recipe_service),
) -> RecipeResponse:
    """Move a recipe to the trash."""
    recipe = await service.soft_delete(user, recipe_id)
    return RecipeResponse(message="Recipe moved to trash", recipe=recipe)


@router.post("/{recipe_id}/restore", response_model=RecipeResponse)
async def restore_recipe(
    recipe_id: str,
    user: AuthenticatedUser = Depends(get_user_or_admin),
    service: RecipeService = Depends(get_recipe_service),
) -> RecipeResponse:
    """Bring a recipe back from the trash."""
    recipe = await service.restore(user, recipe_id)
    return RecipeResponse(message="Recipe restored", recipe=recipe)


@router.delete("/{recipe_id}", response_model=MessageResponse)
async def delete_recipe(
    recipe_id: str,
    user: AuthenticatedUser = Depends(get_user_or_admin),
    service: RecipeService = Depends(get_recipe_service),
) -> MessageResponse:
    """
    Permanently delete one of the caller's own recipes.

    Admins use /admin/{recipe_id} to delete other users' recipes.
    """
    await service.hard_delete(user, recipe_id)
    return MessageResponse(message="Recipe deleted")
