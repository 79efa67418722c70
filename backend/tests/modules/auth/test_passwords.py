"""Tests for modules/auth/passwords.py."""

import pytest

from modules.auth.passwords import hash_password, validate_password, verify_password


class TestValidatePassword:
    def test_strong_password(self):
        assert validate_password("Str0ng!Pass") == []

    def test_reports_every_failure(self):
        """All unmet requirements should be listed together."""
        errors = validate_password("abc")
        assert "Password must be at least 8 characters long" in errors
        assert "Password must contain at least one uppercase letter" in errors
        assert "Password must contain at least one number" in errors
        assert "Password must contain at least one special character" in errors
        assert "Password must contain at least one lowercase letter" not in errors

    @pytest.mark.parametrize(
        "password,missing",
        [
            ("str0ng!pass", "uppercase"),
            ("STR0NG!PASS", "lowercase"),
            ("Strong!Pass", "number"),
            ("Str0ngPass1", "special"),
        ],
    )
    def test_single_missing_class(self, password, missing):
        errors = validate_password(password)
        assert len(errors) == 1
        assert missing in errors[0]


class TestHashing:
    @pytest.mark.asyncio
    async def test_hash_and_verify(self):
        password_hash = await hash_password("Str0ng!Pass", rounds=4)
        assert password_hash != "Str0ng!Pass"
        assert await verify_password("Str0ng!Pass", password_hash) is True
        assert await verify_password("wrong", password_hash) is False

    @pytest.mark.asyncio
    async def test_verify_against_non_bcrypt_value(self):
        """A corrupt stored hash should fail verification, not crash."""
        assert await verify_password("Str0ng!Pass", "plaintext") is False
