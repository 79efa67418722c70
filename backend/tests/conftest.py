"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
Every test runs against the in-memory stores with a fresh service container.
"""

import asyncio
import uuid
from datetime import datetime, timezone, timedelta

import jwt  # PyJWT
import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import get_container, reset_container
from modules.auth.models import User
from modules.auth.passwords import _hash
from shared.config import get_settings
from shared.models import Role


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"

STRONG_PASSWORD = "Str0ng!Pass"


def create_test_token(
    user_id: str = "test-user-123",
    role: str = "user",
    expired: bool = False,
    secret: str = TEST_JWT_SECRET,
) -> str:
    """
    Create a session token the way the token service does.

    Args:
        user_id: Subject claim
        role: Role claim
        expired: If True, creates a token that expired an hour ago
        secret: Signing secret; pass another value to forge a bad signature
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)
    payload = {
        "sub": user_id,
        "role": role,
        "iat": int((now - timedelta(hours=2)).timestamp()) if expired else int(now.timestamp()),
        "exp": int(exp.timestamp()),
        "jti": str(uuid.uuid4()),
    }
    return jwt.encode(payload, secret, algorithm="HS256")


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def make_user(
    user_id: str = "test-user-123",
    email: str = "test@example.com",
    first_name: str = "Test",
    last_name: str = "User",
    role: Role = Role.USER,
    active: bool = True,
    password: str = STRONG_PASSWORD,
) -> User:
    """Build a credential record with a real (low-cost) bcrypt hash."""
    return User(
        id=user_id,
        email=email,
        first_name=first_name,
        last_name=last_name,
        password_hash=_hash(password, 4),
        role=role,
        active=active,
        created_at=datetime.now(timezone.utc),
    )


def seed_user(**kwargs) -> User:
    """Insert a user into the container's credential store and return it."""
    user = make_user(**kwargs)
    return asyncio.run(get_container().credential_store.insert(user))


def register(
    client: TestClient,
    email: str = "alice@example.com",
    first_name: str = "Alice",
    last_name: str = "Smith",
    password: str = STRONG_PASSWORD,
) -> str:
    """Register through the API and return the session token."""
    response = client.post(
        "/api/auth/register",
        json={
            "first_name": first_name,
            "last_name": last_name,
            "email": email,
            "password": password,
            "confirm_password": password,
        },
    )
    assert response.status_code == 201, response.text
    return response.json()["token"]


@pytest.fixture(autouse=True)
def test_environment(monkeypatch):
    """Test settings and a fresh container before and after each test."""
    monkeypatch.setenv("COOKBOOK_ENVIRONMENT", "test")
    monkeypatch.setenv("COOKBOOK_JWT_SECRET", TEST_JWT_SECRET)
    monkeypatch.setenv("COOKBOOK_BCRYPT_ROUNDS", "4")
    monkeypatch.setenv("COOKBOOK_STORAGE_BACKEND", "memory")
    get_settings.cache_clear()
    reset_container()
    yield
    get_settings.cache_clear()
    reset_container()


@pytest.fixture
def app():
    """Create a fresh app for each test."""
    return create_app()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def test_user_id() -> str:
    """Provide a consistent test user ID."""
    return "test-user-123"


@pytest.fixture
def auth_token(test_user_id: str) -> str:
    """Create a valid user token for testing."""
    return create_test_token(user_id=test_user_id)


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers with a valid token."""
    return bearer(auth_token)


@pytest.fixture
def admin_user() -> User:
    """An admin account present in the credential store."""
    return seed_user(
        user_id="admin-1",
        email="admin@example.com",
        first_name="Ada",
        last_name="Admin",
        role=Role.ADMIN,
    )


@pytest.fixture
def admin_headers(admin_user: User) -> dict[str, str]:
    return bearer(create_test_token(user_id=admin_user.id, role="admin"))
