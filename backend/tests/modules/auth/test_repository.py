"""Tests for modules/auth/repository.py."""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from modules.auth.interfaces import ICredentialStore
from modules.auth.repository import InMemoryCredentialStore, SupabaseCredentialStore
from shared.models import Role

from tests.conftest import make_user


def user_row(**overrides) -> dict:
    row = {
        "id": "user-1",
        "email": "alice@example.com",
        "first_name": "Alice",
        "last_name": "Smith",
        "password_hash": "hash",
        "role": "admin",
        "active": True,
        "otp": None,
        "otp_expires_at": None,
        "created_at": "2024-01-01T00:00:00Z",
    }
    row.update(overrides)
    return row


class TestInMemoryCredentialStore:
    def test_satisfies_protocol(self):
        assert isinstance(InMemoryCredentialStore(), ICredentialStore)

    @pytest.mark.asyncio
    async def test_lookup_by_email_is_case_insensitive(self):
        store = InMemoryCredentialStore()
        await store.insert(make_user(email="Alice@Example.com"))
        found = await store.get_by_email("ALICE@example.COM")
        assert found is not None
        assert found.email == "alice@example.com"

    @pytest.mark.asyncio
    async def test_returns_copies(self):
        """Mutating a returned user should not change the stored record."""
        store = InMemoryCredentialStore()
        user = await store.insert(make_user())
        fetched = await store.get_by_id(user.id)
        fetched.first_name = "Changed"
        assert (await store.get_by_id(user.id)).first_name == "Test"

    @pytest.mark.asyncio
    async def test_update(self):
        store = InMemoryCredentialStore()
        user = await store.insert(make_user())
        user.last_name = "Renamed"
        await store.update(user)
        assert (await store.get_by_id(user.id)).last_name == "Renamed"

    @pytest.mark.asyncio
    async def test_missing(self):
        store = InMemoryCredentialStore()
        assert await store.get_by_id("nope") is None
        assert await store.get_by_email("nope@example.com") is None


class TestSupabaseCredentialStore:
    @pytest.fixture
    def db(self) -> MagicMock:
        return MagicMock()

    @pytest.mark.asyncio
    async def test_get_by_id_maps_row(self, db):
        db.table.return_value.select.return_value.eq.return_value.execute.return_value.data = [user_row()]
        store = SupabaseCredentialStore(db)

        user = await store.get_by_id("user-1")

        db.table.assert_called_with("users")
        assert user.role == Role.ADMIN
        assert user.created_at == datetime(2024, 1, 1, tzinfo=timezone.utc)

    @pytest.mark.asyncio
    async def test_get_by_email_normalizes(self, db):
        execute = db.table.return_value.select.return_value.eq.return_value.execute
        execute.return_value.data = []
        store = SupabaseCredentialStore(db)

        assert await store.get_by_email("  Alice@Example.com") is None
        db.table.return_value.select.return_value.eq.assert_called_with("email", "alice@example.com")

    @pytest.mark.asyncio
    async def test_insert_serializes_user(self, db):
        db.table.return_value.insert.return_value.execute.return_value.data = [user_row(role="user")]
        store = SupabaseCredentialStore(db)

        await store.insert(make_user(user_id="user-1", email="alice@example.com"))

        row = db.table.return_value.insert.call_args.args[0]
        assert row["role"] == "user"
        assert row["email"] == "alice@example.com"
        assert isinstance(row["created_at"], str)

    @pytest.mark.asyncio
    async def test_update_does_not_rewrite_identity(self, db):
        db.table.return_value.update.return_value.eq.return_value.execute.return_value.data = [user_row()]
        store = SupabaseCredentialStore(db)

        await store.update(make_user(user_id="user-1"))

        row = db.table.return_value.update.call_args.args[0]
        assert "id" not in row
        assert "created_at" not in row
        db.table.return_value.update.return_value.eq.assert_called_with("id", "user-1")
