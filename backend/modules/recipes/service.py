"""
Recipe lifecycle service.

Owns every recipe mutation: create, update, soft delete (trash),
restore, bulk variants and hard delete. Within one call the steps run in
order, each awaiting the previous one:

    duplicate check -> store write -> activity append -> broadcast

Nothing serializes concurrent calls, so two creates with the same title
for the same owner can both pass the duplicate check.

State per recipe:

    ACTIVE <-> TRASHED   (trash / restore)
    ACTIVE | TRASHED -> purged   (hard delete; only the activity log remains)
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Callable, Optional

from modules.activity.models import ActivityAction
from shared.models import AuthenticatedUser

from .duplicates import DuplicateChecker
from .exceptions import (
    DuplicateTitleError,
    RecipeAccessDeniedError,
    RecipeNotFoundError,
    RecipeNotInTrashError,
    RecipeValidationError,
)
from .interfaces import IAssetUploader, IRecipeStore
from .models import BulkResult, ImageUpload, Recipe, RecipeInput
from .normalization import merge_recipe_update, normalize_new_recipe
from .uploads import check_image

if TYPE_CHECKING:
    from modules.activity.service import AuditLogger

logger = logging.getLogger(__name__)

DEFAULT_BULK_MAX_IDS = 100
DEFAULT_UPLOAD_MAX_BYTES = 5 * 1024 * 1024


class RecipeService:
    """Recipe lifecycle manager."""

    def __init__(
        self,
        store: IRecipeStore,
        audit: "AuditLogger",
        uploader: Optional[IAssetUploader] = None,
        bulk_max_ids: int = DEFAULT_BULK_MAX_IDS,
        upload_max_bytes: int = DEFAULT_UPLOAD_MAX_BYTES,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self._store = store
        self._duplicates = DuplicateChecker(store)
        self._audit = audit
        self._uploader = uploader
        self._bulk_max_ids = bulk_max_ids
        self._upload_max_bytes = upload_max_bytes
        self._clock = clock

    # -------------------------------------------------------------------------
    # Create / update
    # -------------------------------------------------------------------------

    async def create(
        self,
        owner: AuthenticatedUser,
        fields: RecipeInput,
        image: Optional[ImageUpload] = None,
    ) -> Recipe:
        """
        Create a recipe owned by `owner`.

        Raises:
            RecipeValidationError: If title or description is blank
            DuplicateTitleError: If the owner has an active recipe with the same title
        """
        values = normalize_new_recipe(fields)

        existing = await self._duplicates.find_collision(owner.id, values["title"])
        if existing is not None:
            raise DuplicateTitleError(existing.title)

        if image is not None:
            values["image_url"] = await self.upload_image(image)

        now = self._clock()
        recipe = await self._store.insert(
            Recipe(
                id=str(uuid.uuid4()),
                owner_id=owner.id,
                created_at=now,
                updated_at=now,
                **values,
            )
        )

        await self._audit.record_best_effort(owner.id, ActivityAction.CREATED, recipe)
        return recipe

    async def update(
        self,
        actor: AuthenticatedUser,
        recipe_id: str,
        fields: RecipeInput,
        image: Optional[ImageUpload] = None,
    ) -> Recipe:
        """
        Update an active recipe. Owner or admin only.

        The duplicate check runs against the recipe owner's titles,
        skipping this recipe.

        Raises:
            RecipeNotFoundError: If missing or trashed
            RecipeAccessDeniedError: If the actor may not modify it
            RecipeValidationError: If title or description is supplied blank
            DuplicateTitleError: If the new title collides
        """
        recipe = await self._get_active(recipe_id)
        self._check_can_modify(actor, recipe)

        changes = merge_recipe_update(recipe, fields)
        title = changes.get("title", recipe.title)
        existing = await self._duplicates.find_collision(
            recipe.owner_id, title, exclude_id=recipe.id
        )
        if existing is not None:
            raise DuplicateTitleError(existing.title)

        if image is not None:
            changes["image_url"] = await self.upload_image(image)

        changes["updated_at"] = self._clock()
        updated = await self._store.update(recipe.model_copy(update=changes))

        await self._audit.record_best_effort(actor.id, ActivityAction.UPDATED, updated)
        return updated

    async def upload_image(self, image: ImageUpload) -> str:
        """
        Validate an image and store it through the uploader.

        Raises:
            InvalidImageError / ImageTooLargeError: For unacceptable files
            RecipeValidationError: If no uploader is configured
        """
        check_image(image, self._upload_max_bytes)
        if self._uploader is None:
            raise RecipeValidationError("Image uploads are not configured")
        return await self._uploader.upload(image)

    # -------------------------------------------------------------------------
    # Trash / restore
    # -------------------------------------------------------------------------

    async def soft_delete(self, actor: AuthenticatedUser, recipe_id: str) -> Recipe:
        """
        Move a recipe to the trash. Owner or admin only.

        Trashing an already-trashed recipe is reported as not found.
        """
        recipe = await self._get_active(recipe_id)
        self._check_can_modify(actor, recipe)

        trashed = await self._store.update(
            recipe.model_copy(update={"deleted_at": self._clock()})
        )
        await self._audit.record_best_effort(actor.id, ActivityAction.DELETED, trashed)
        return trashed

    async def restore(self, actor: AuthenticatedUser, recipe_id: str) -> Recipe:
        """
        Take a recipe out of the trash. Owner or admin only.

        Restores are not written to the activity log.

        Raises:
            RecipeNotInTrashError: If missing or not trashed
            RecipeAccessDeniedError: If the actor may not modify it
        """
        recipe = await self._store.get(recipe_id)
        if recipe is None or not recipe.is_trashed:
            raise RecipeNotInTrashError(recipe_id)
        self._check_can_modify(actor, recipe)

        return await self._store.update(recipe.model_copy(update={"deleted_at": None}))

    async def bulk_soft_delete(self, actor: AuthenticatedUser, ids: list[str]) -> BulkResult:
        """
        Trash each recipe the actor may modify.

        Missing, already-trashed and foreign recipes are skipped without
        error; the result lists only what was trashed.
        """
        self._check_bulk_ids(ids)
        now = self._clock()
        done: list[str] = []

        for recipe_id in dict.fromkeys(ids):
            recipe = await self._store.get(recipe_id)
            if recipe is None or recipe.is_trashed or not self._can_modify(actor, recipe):
                continue
            trashed = await self._store.update(recipe.model_copy(update={"deleted_at": now}))
            done.append(trashed.id)
            await self._audit.record_best_effort(actor.id, ActivityAction.DELETED, trashed)

        return BulkResult(succeeded=len(done), ids=done)

    async def bulk_restore(self, actor: AuthenticatedUser, ids: list[str]) -> BulkResult:
        """Restore each trashed recipe the actor may modify, skipping the rest."""
        self._check_bulk_ids(ids)
        done: list[str] = []

        for recipe_id in dict.fromkeys(ids):
            recipe = await self._store.get(recipe_id)
            if recipe is None or not recipe.is_trashed or not self._can_modify(actor, recipe):
                continue
            restored = await self._store.update(recipe.model_copy(update={"deleted_at": None}))
            done.append(restored.id)

        return BulkResult(succeeded=len(done), ids=done)

    # -------------------------------------------------------------------------
    # Hard delete
    # -------------------------------------------------------------------------

    async def hard_delete(
        self,
        actor: AuthenticatedUser,
        recipe_id: str,
        as_admin: bool = False,
    ) -> None:
        """
        Permanently remove a recipe, active or trashed.

        The owner path requires ownership even for admins; the admin path
        (as_admin=True, admin role enforced by the caller) bypasses it.
        The activity log keeps referring to the purged recipe.
        """
        recipe = await self._store.get(recipe_id)
        if recipe is None:
            raise RecipeNotFoundError(recipe_id)
        if not as_admin and recipe.owner_id != actor.id:
            raise RecipeAccessDeniedError(recipe_id, actor.id)
        if as_admin and not actor.is_admin:
            raise RecipeAccessDeniedError(recipe_id, actor.id)

        await self._store.delete(recipe.id)
        logger.info(f"Recipe {recipe.id} purged by {actor.id}")
        await self._audit.record_best_effort(actor.id, ActivityAction.DELETED, recipe)

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    async def get(self, actor: AuthenticatedUser, recipe_id: str) -> Recipe:
        """Get an active recipe visible to its owner or an admin."""
        recipe = await self._get_active(recipe_id)
        self._check_can_modify(actor, recipe)
        return recipe

    async def list_active(self, owner_id: Optional[str] = None) -> list[Recipe]:
        return await self._store.list_active(owner_id)

    async def list_trash(self, actor: AuthenticatedUser) -> list[Recipe]:
        """Admins see every trashed recipe; users see their own."""
        return await self._store.list_trashed(None if actor.is_admin else actor.id)

    # -------------------------------------------------------------------------
    # Private helpers
    # -------------------------------------------------------------------------

    async def _get_active(self, recipe_id: str) -> Recipe:
        recipe = await self._store.get(recipe_id)
        if recipe is None or recipe.is_trashed:
            raise RecipeNotFoundError(recipe_id)
        return recipe

    @staticmethod
    def _can_modify(actor: AuthenticatedUser, recipe: Recipe) -> bool:
        return actor.is_admin or recipe.owner_id == actor.id

    def _check_can_modify(self, actor: AuthenticatedUser, recipe: Recipe) -> None:
        if not self._can_modify(actor, recipe):
            raise RecipeAccessDeniedError(recipe.id, actor.id)

    def _check_bulk_ids(self, ids: list[str]) -> None:
        if not ids:
            raise RecipeValidationError("ids array required")
        if len(ids) > self._bulk_max_ids:
            raise RecipeValidationError(
                f"At most {self._bulk_max_ids} ids per request",
                details={"max_ids": self._bulk_max_ids, "received": len(ids)},
            )
