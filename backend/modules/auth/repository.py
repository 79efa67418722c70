"""
Credential store implementations.

- InMemoryCredentialStore: process-local, used in development and tests
- SupabaseCredentialStore: the `users` table

Neither performs authorization checks; the service layer does.
"""

from typing import Any, Optional

from shared.models import Role
from shared.repository import BaseRepository

from .models import User, normalize_email


class InMemoryCredentialStore:
    """Credential store backed by a dict. Email lookup is case-insensitive."""

    def __init__(self) -> None:
        self._users: dict[str, User] = {}

    async def get_by_id(self, user_id: str) -> Optional[User]:
        user = self._users.get(user_id)
        return user.model_copy() if user else None

    async def get_by_email(self, email: str) -> Optional[User]:
        wanted = normalize_email(email)
        for user in self._users.values():
            if user.email == wanted:
                return user.model_copy()
        return None

    async def insert(self, user: User) -> User:
        stored = user.model_copy(update={"email": normalize_email(user.email)})
        self._users[stored.id] = stored
        return stored.model_copy()

    async def update(self, user: User) -> User:
        return await self.insert(user)


class SupabaseCredentialStore(BaseRepository[User]):
    """Credential store backed by the Supabase `users` table."""

    TABLE = "users"

    async def get_by_id(self, user_id: str) -> Optional[User]:
        result = self._db.table(self.TABLE).select("*").eq("id", user_id).execute()
        if not result.data:
            return None
        return self._map_to_user(result.data[0])

    async def get_by_email(self, email: str) -> Optional[User]:
        result = (
            self._db.table(self.TABLE)
            .select("*")
            .eq("email", normalize_email(email))
            .execute()
        )
        if not result.data:
            return None
        return self._map_to_user(result.data[0])

    async def insert(self, user: User) -> User:
        result = self._db.table(self.TABLE).insert(self._to_row(user)).execute()
        return self._map_to_user(result.data[0])

    async def update(self, user: User) -> User:
        row = self._to_row(user)
        row.pop("id")
        row.pop("created_at")
        result = self._db.table(self.TABLE).update(row).eq("id", user.id).execute()
        return self._map_to_user(result.data[0])

    # -------------------------------------------------------------------------
    # Private mapping methods
    # -------------------------------------------------------------------------

    def _to_row(self, user: User) -> dict[str, Any]:
        return {
            "id": user.id,
            "email": normalize_email(user.email),
            "first_name": user.first_name,
            "last_name": user.last_name,
            "password_hash": user.password_hash,
            "role": user.role.value,
            "active": user.active,
            "otp": user.otp,
            "otp_expires_at": user.otp_expires_at.isoformat() if user.otp_expires_at else None,
            "created_at": user.created_at.isoformat(),
        }

    def _map_to_user(self, data: dict[str, Any]) -> User:
        """Map database row to User model."""
        return User(
            id=str(data["id"]),
            email=data["email"],
            first_name=data["first_name"],
            last_name=data["last_name"],
            password_hash=data["password_hash"],
            role=Role(data.get("role") or Role.USER.value),
            active=bool(data.get("active", True)),
            otp=data.get("otp"),
            otp_expires_at=self._parse_timestamp(data.get("otp_expires_at")),
            created_at=self._parse_timestamp(data["created_at"]),
        )
