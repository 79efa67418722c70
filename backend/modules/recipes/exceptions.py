"""
Recipes module exceptions.
"""

from shared.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    PayloadTooLargeError,
    ValidationError,
)


class RecipeValidationError(ValidationError):
    """Raised when recipe input is missing required values."""

    pass


class RecipeNotFoundError(NotFoundError):
    """Raised when a recipe does not exist or is not in the expected state."""

    def __init__(self, recipe_id: str, message: str = "Recipe not found"):
        super().__init__(message, details={"recipe_id": recipe_id})


class RecipeNotInTrashError(RecipeNotFoundError):
    """Raised when restoring a recipe that is not trashed."""

    def __init__(self, recipe_id: str):
        super().__init__(recipe_id, "Recipe not in trash")


class RecipeAccessDeniedError(AuthorizationError):
    """Raised when the caller neither owns the recipe nor may bypass ownership."""

    def __init__(self, recipe_id: str, user_id: str):
        super().__init__(
            "Not allowed",
            details={"recipe_id": recipe_id, "user_id": user_id},
        )


class DuplicateTitleError(ConflictError):
    """Raised when the owner already has an active recipe with this title."""

    def __init__(self, existing_title: str):
        super().__init__(
            f'You already have a recipe titled "{existing_title}"',
            code="DUPLICATE_TITLE",
            details={"duplicate": True, "existing_title": existing_title},
        )
        self.existing_title = existing_title


class InvalidImageError(ValidationError):
    """Raised for uploads that are not an accepted image type."""

    def __init__(self, content_type: str):
        super().__init__(
            "Only image files are allowed",
            details={"content_type": content_type},
        )


class ImageTooLargeError(PayloadTooLargeError):
    """Raised for uploads over the size ceiling."""

    def __init__(self, max_bytes: int):
        super().__init__(
            "Image too large",
            details=f"Maximum {max_bytes // (1024 * 1024)}MB allowed",
        )
