"""
Base repository class for Supabase-backed stores.

Provides a common abstraction layer for the Supabase implementations of
the store ports, encapsulating client access and row timestamp parsing.
"""

from datetime import datetime
from typing import Any, Optional, TypeVar, Generic
from supabase import Client


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for all Supabase repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Generic type parameter for model type hints

    Subclasses implement the store port of their module and handle
    dict-to-Pydantic model mapping internally.

    Example:
        class SupabaseRecipeStore(BaseRepository[Recipe]):
            async def get(self, recipe_id: str) -> Optional[Recipe]:
                result = self._db.table("recipes").select("*").eq("id", recipe_id).execute()
                if not result.data:
                    return None
                return self._map_to_recipe(result.data[0])
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    @staticmethod
    def _parse_timestamp(value: Any) -> Optional[datetime]:
        """Parse an ISO timestamp column, passing through None and datetimes."""
        if value is None or isinstance(value, datetime):
            return value
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
