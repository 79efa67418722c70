"""
Comment service.

Comments can only be added to active recipes. Listing is public and
resolves each author's display name at read time, so renamed users show
their current name.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Callable

from modules.auth.interfaces import IAuthService
from modules.recipes.exceptions import RecipeNotFoundError
from modules.recipes.interfaces import IRecipeStore
from shared.models import AuthenticatedUser

from .exceptions import CommentValidationError
from .interfaces import ICommentStore
from .models import Comment, CommentRequest, CommentView

logger = logging.getLogger(__name__)

UNKNOWN_AUTHOR = "Unknown user"


class CommentService:
    def __init__(
        self,
        store: ICommentStore,
        recipes: IRecipeStore,
        auth: IAuthService,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self._store = store
        self._recipes = recipes
        self._auth = auth
        self._clock = clock

    async def add(self, author: AuthenticatedUser, request: CommentRequest) -> CommentView:
        """
        Add a comment to an active recipe.

        Raises:
            CommentValidationError: If the recipe id or text is blank
            RecipeNotFoundError: If the recipe is missing or trashed
        """
        recipe_id = str(request.recipe_id).strip() if request.recipe_id is not None else ""
        text = str(request.comment).strip() if request.comment is not None else ""
        if not recipe_id or not text:
            raise CommentValidationError()

        recipe = await self._recipes.get(recipe_id)
        if recipe is None or recipe.is_trashed:
            raise RecipeNotFoundError(recipe_id)

        comment = await self._store.insert(
            Comment(
                id=str(uuid.uuid4()),
                recipe_id=recipe.id,
                user_id=author.id,
                comment=text,
                created_at=self._clock(),
            )
        )
        logger.debug(f"Comment {comment.id} added to recipe {recipe.id} by {author.id}")
        return (await self._with_authors([comment]))[0]

    async def list_for_recipe(self, recipe_id: str) -> list[CommentView]:
        """Newest first."""
        return await self._with_authors(await self._store.list_for_recipe(recipe_id))

    async def _with_authors(self, comments: list[Comment]) -> list[CommentView]:
        names: dict[str, str] = {}
        for user_id in {c.user_id for c in comments}:
            profile = await self._auth.get_public_profile(user_id)
            names[user_id] = profile.display_name if profile else UNKNOWN_AUTHOR
        return [
            CommentView(author_name=names[c.user_id], **c.model_dump())
            for c in comments
        ]
