"""
Comments module exceptions.
"""

from shared.exceptions import ValidationError


class CommentValidationError(ValidationError):
    """Raised when a comment or its recipe id is missing."""

    def __init__(self, message: str = "Recipe ID and comment are required"):
        super().__init__(message)
