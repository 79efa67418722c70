"""Tests for modules/auth/service.py."""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest

from modules.auth.exceptions import (
    AuthNotConfiguredError,
    EmailAlreadyExistsError,
    ExpiredTokenError,
    InactiveAccountError,
    InvalidCredentialsError,
    InvalidOtpError,
    InvalidTokenError,
    MissingTokenError,
    PasswordPolicyError,
    UserNotFoundError,
)
from modules.auth.models import (
    LoginRequest,
    PasswordChangeRequest,
    ProfileUpdateRequest,
    RegisterRequest,
)
from modules.auth.repository import InMemoryCredentialStore
from modules.auth.service import AuthService
from shared.config import Settings
from shared.exceptions import ValidationError
from shared.models import AuthenticatedUser, Role

from tests.conftest import STRONG_PASSWORD, create_test_token, make_user


SECRET = "service-test-secret"


class FakeClock:
    def __init__(self):
        self.now = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now


def register_request(**overrides) -> RegisterRequest:
    fields = {
        "first_name": "Alice",
        "last_name": "Smith",
        "email": "alice@example.com",
        "password": STRONG_PASSWORD,
        "confirm_password": STRONG_PASSWORD,
    }
    fields.update(overrides)
    return RegisterRequest(**fields)


class TestAuthService:
    @pytest.fixture
    def settings(self) -> Settings:
        return Settings(_env_file=None, jwt_secret=SECRET, bcrypt_rounds=4, otp_ttl_minutes=5)

    @pytest.fixture
    def store(self) -> InMemoryCredentialStore:
        return InMemoryCredentialStore()

    @pytest.fixture
    def clock(self) -> FakeClock:
        return FakeClock()

    @pytest.fixture
    def otp_sender(self) -> AsyncMock:
        return AsyncMock()

    @pytest.fixture
    def service(self, store, settings, clock, otp_sender) -> AuthService:
        return AuthService(store=store, settings=settings, otp_sender=otp_sender, clock=clock)


class TestRegister(TestAuthService):
    @pytest.mark.asyncio
    async def test_register_creates_user_and_token(self, service, store):
        """Registration should store a hashed password and return a valid token."""
        token = await service.register(register_request())

        identity = await service.validate_token(token)
        user = await store.get_by_id(identity.id)
        assert user.email == "alice@example.com"
        assert user.role == Role.USER
        assert user.active is True
        assert user.password_hash != STRONG_PASSWORD

    @pytest.mark.asyncio
    async def test_email_is_normalized(self, service, store):
        await service.register(register_request(email="  Alice@Example.COM "))
        assert await store.get_by_email("alice@example.com") is not None

    @pytest.mark.asyncio
    async def test_duplicate_email(self, service):
        """The same email in another case should be rejected."""
        await service.register(register_request())
        with pytest.raises(EmailAlreadyExistsError):
            await service.register(register_request(email="ALICE@example.com"))

    @pytest.mark.asyncio
    async def test_passwords_must_match(self, service):
        with pytest.raises(ValidationError, match="Passwords do not match"):
            await service.register(register_request(confirm_password="Other!Pass1"))

    @pytest.mark.asyncio
    async def test_weak_password(self, service):
        with pytest.raises(PasswordPolicyError) as exc_info:
            await service.register(register_request(password="weak", confirm_password="weak"))
        assert len(exc_info.value.details) >= 3

    @pytest.mark.asyncio
    async def test_missing_secret(self, store):
        """Registration should fail before storing anything without a secret."""
        service = AuthService(store=store, settings=Settings(_env_file=None, jwt_secret=""))
        with pytest.raises(AuthNotConfiguredError):
            await service.register(register_request())
        assert await store.get_by_email("alice@example.com") is None


class TestLogin(TestAuthService):
    @pytest.mark.asyncio
    async def test_login_success(self, service):
        await service.register(register_request())
        token = await service.login(LoginRequest(email="alice@example.com", password=STRONG_PASSWORD))
        assert (await service.validate_token(token)).role == Role.USER

    @pytest.mark.asyncio
    async def test_unknown_email_and_wrong_password_look_alike(self, service):
        """Both failures should produce the same error."""
        await service.register(register_request())

        with pytest.raises(InvalidCredentialsError) as unknown:
            await service.login(LoginRequest(email="nobody@example.com", password=STRONG_PASSWORD))
        with pytest.raises(InvalidCredentialsError) as wrong:
            await service.login(LoginRequest(email="alice@example.com", password="Wr0ng!Pass"))

        assert unknown.value.to_dict() == wrong.value.to_dict()
        assert unknown.value.code == "AUTH_ERROR"

    @pytest.mark.asyncio
    async def test_inactive_account(self, service, store):
        await store.insert(make_user(email="bob@example.com", active=False))
        with pytest.raises(InactiveAccountError):
            await service.login(LoginRequest(email="bob@example.com", password=STRONG_PASSWORD))


class TestOtp(TestAuthService):
    @pytest.mark.asyncio
    async def test_request_and_verify(self, service, store, otp_sender):
        """A delivered code should sign the user in exactly once."""
        await service.register(register_request())
        await service.request_otp("alice@example.com")

        email, otp = otp_sender.send.call_args.args
        assert email == "alice@example.com"
        assert len(otp) == 6 and otp.isdigit()

        token = await service.verify_otp("alice@example.com", otp)
        assert token

        with pytest.raises(InvalidOtpError):
            await service.verify_otp("alice@example.com", otp)

    @pytest.mark.asyncio
    async def test_expired_code(self, service, clock, otp_sender):
        await service.register(register_request())
        await service.request_otp("alice@example.com")
        otp = otp_sender.send.call_args.args[1]

        clock.now += timedelta(minutes=6)
        with pytest.raises(InvalidOtpError):
            await service.verify_otp("alice@example.com", otp)

    @pytest.mark.asyncio
    async def test_new_request_supersedes_old_code(self, service, otp_sender):
        await service.register(register_request())
        await service.request_otp("alice@example.com")
        first = otp_sender.send.call_args.args[1]
        await service.request_otp("alice@example.com")
        second = otp_sender.send.call_args.args[1]

        if first != second:
            with pytest.raises(InvalidOtpError):
                await service.verify_otp("alice@example.com", first)
        assert await service.verify_otp("alice@example.com", second)

    @pytest.mark.asyncio
    async def test_wrong_code(self, service, otp_sender):
        await service.register(register_request())
        await service.request_otp("alice@example.com")
        otp = otp_sender.send.call_args.args[1]
        wrong = "000000" if otp != "000000" else "111111"
        with pytest.raises(InvalidOtpError):
            await service.verify_otp("alice@example.com", wrong)

    @pytest.mark.asyncio
    async def test_unknown_user(self, service):
        with pytest.raises(UserNotFoundError):
            await service.request_otp("nobody@example.com")

    @pytest.mark.asyncio
    async def test_inactive_user(self, service, store):
        await store.insert(make_user(email="bob@example.com", active=False))
        with pytest.raises(InactiveAccountError):
            await service.request_otp("bob@example.com")


class TestValidateToken(TestAuthService):
    @pytest.mark.asyncio
    async def test_valid_token(self, service):
        token = create_test_token(user_id="user-9", role="admin", secret=SECRET)
        user = await service.validate_token(token)
        assert user == AuthenticatedUser(id="user-9", role=Role.ADMIN)

    @pytest.mark.asyncio
    async def test_expired_token(self, service):
        token = create_test_token(expired=True, secret=SECRET)
        with pytest.raises(ExpiredTokenError):
            await service.validate_token(token)

    @pytest.mark.asyncio
    async def test_forged_token(self, service):
        token = create_test_token(secret="someone-else")
        with pytest.raises(InvalidTokenError):
            await service.validate_token(token)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("token", ["", None])
    async def test_missing_token(self, service, token):
        with pytest.raises(MissingTokenError):
            await service.validate_token(token)


class TestProfiles(TestAuthService):
    @pytest.mark.asyncio
    async def test_get_user_by_id_hides_secrets(self, service, store):
        user = await store.insert(make_user())
        profile = await service.get_user_by_id(user.id)
        assert profile.email == user.email
        assert "password_hash" not in profile.model_dump()

    @pytest.mark.asyncio
    async def test_public_profile(self, service, store):
        user = await store.insert(make_user(first_name="Jo", last_name="Cook"))
        profile = await service.get_public_profile(user.id)
        assert profile.model_dump() == {"id": user.id, "display_name": "Jo Cook"}
        assert await service.get_public_profile("missing") is None

    @pytest.mark.asyncio
    async def test_update_profile(self, service, store):
        user = await store.insert(make_user())
        profile = await service.update_profile(
            user.id,
            ProfileUpdateRequest(first_name="New", last_name="Name", email="NEW@example.com"),
        )
        assert profile.first_name == "New"
        assert profile.email == "new@example.com"

    @pytest.mark.asyncio
    async def test_update_profile_email_taken(self, service, store):
        user = await store.insert(make_user())
        await store.insert(make_user(user_id="other", email="taken@example.com"))
        with pytest.raises(EmailAlreadyExistsError):
            await service.update_profile(
                user.id,
                ProfileUpdateRequest(first_name="A", last_name="B", email="Taken@Example.com"),
            )

    @pytest.mark.asyncio
    async def test_update_profile_keeps_own_email(self, service, store):
        user = await store.insert(make_user())
        profile = await service.update_profile(
            user.id,
            ProfileUpdateRequest(first_name="A", last_name="B", email=user.email),
        )
        assert profile.email == user.email

    @pytest.mark.asyncio
    async def test_change_password(self, service, store):
        user = await store.insert(make_user())
        await service.change_password(
            user.id,
            PasswordChangeRequest(current_password=STRONG_PASSWORD, new_password="N3w!Password"),
        )
        token = await service.login(LoginRequest(email=user.email, password="N3w!Password"))
        assert token

    @pytest.mark.asyncio
    async def test_change_password_wrong_current(self, service, store):
        user = await store.insert(make_user())
        with pytest.raises(InvalidCredentialsError):
            await service.change_password(
                user.id,
                PasswordChangeRequest(current_password="Wr0ng!Pass", new_password="N3w!Password"),
            )

    @pytest.mark.asyncio
    async def test_change_password_policy(self, service, store):
        user = await store.insert(make_user())
        with pytest.raises(PasswordPolicyError):
            await service.change_password(
                user.id,
                PasswordChangeRequest(current_password=STRONG_PASSWORD, new_password="short"),
            )
