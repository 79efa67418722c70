"""
Authentication service implementation.

Registers users, signs them in by password or one-time passcode, and
validates session tokens for the authorization gate.
"""

import hmac
import logging
import secrets
import uuid
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from shared.config import Settings, get_settings
from shared.exceptions import ValidationError
from shared.models import AuthenticatedUser, Role

from .interfaces import IAuthService, ICredentialStore, IOtpSender
from .models import (
    LoginRequest,
    PasswordChangeRequest,
    ProfileUpdateRequest,
    PublicProfile,
    RegisterRequest,
    User,
    UserProfile,
    normalize_email,
)
from .exceptions import (
    AuthNotConfiguredError,
    EmailAlreadyExistsError,
    InactiveAccountError,
    InvalidCredentialsError,
    InvalidOtpError,
    MissingTokenError,
    PasswordPolicyError,
    UserNotFoundError,
)
from .passwords import hash_password, validate_password, verify_password
from .tokens import TokenService

logger = logging.getLogger(__name__)


class LogOtpSender:
    """Writes passcodes to the operational log until a real channel exists."""

    async def send(self, email: str, otp: str) -> None:
        logger.info(f"OTP for {email}: {otp}")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Credentials live in an ICredentialStore; tokens come from TokenService.
    """

    def __init__(
        self,
        store: ICredentialStore,
        tokens: Optional[TokenService] = None,
        otp_sender: Optional[IOtpSender] = None,
        settings: Optional[Settings] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._settings = settings or get_settings()
        self._store = store
        self._tokens = tokens or TokenService(self._settings)
        self._otp_sender = otp_sender or LogOtpSender()
        self._clock = clock

    # -------------------------------------------------------------------------
    # Sign-up and sign-in
    # -------------------------------------------------------------------------

    async def register(self, request: RegisterRequest) -> str:
        """
        Create a user account and return a session token for it.

        Raises:
            AuthNotConfiguredError: If tokens cannot be issued
            EmailAlreadyExistsError: If the normalized email is taken
            ValidationError: If the passwords differ
            PasswordPolicyError: If the password is too weak
        """
        if not self._settings.jwt_secret:
            logger.error("JWT secret is not configured; refusing registration")
            raise AuthNotConfiguredError()

        email = normalize_email(request.email)
        if await self._store.get_by_email(email) is not None:
            raise EmailAlreadyExistsError()

        if request.password != request.confirm_password:
            raise ValidationError("Passwords do not match")

        problems = validate_password(request.password)
        if problems:
            raise PasswordPolicyError(problems)

        password_hash = await hash_password(request.password, self._settings.bcrypt_rounds)
        user = await self._store.insert(
            User(
                id=str(uuid.uuid4()),
                email=email,
                first_name=request.first_name,
                last_name=request.last_name,
                password_hash=password_hash,
                role=Role.USER,
                active=True,
                created_at=self._clock(),
            )
        )
        logger.info(f"Registered user {user.id}")
        return self._tokens.issue(user.id, user.role)

    async def login(self, request: LoginRequest) -> str:
        """
        Check an email/password pair and return a session token.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password
            InactiveAccountError: If the account is deactivated
        """
        user = await self._store.get_by_email(request.email)
        if user is None:
            raise InvalidCredentialsError()

        if not await verify_password(request.password, user.password_hash):
            raise InvalidCredentialsError()

        if not user.active:
            raise InactiveAccountError()

        return self._tokens.issue(user.id, user.role)

    async def request_otp(self, email: str) -> None:
        """
        Start a passcode challenge, replacing any earlier one.

        Raises:
            UserNotFoundError: If no account has this email
            InactiveAccountError: If the account is deactivated
        """
        user = await self._store.get_by_email(email)
        if user is None:
            raise UserNotFoundError()
        if not user.active:
            raise InactiveAccountError()

        otp = str(100000 + secrets.randbelow(900000))
        user.otp = otp
        user.otp_expires_at = self._clock() + timedelta(minutes=self._settings.otp_ttl_minutes)
        await self._store.update(user)

        await self._otp_sender.send(user.email, otp)

    async def verify_otp(self, email: str, otp: str) -> str:
        """
        Complete a passcode challenge and return a session token.

        A successful check clears the challenge so the code is single-use.

        Raises:
            UserNotFoundError: If no account has this email
            InvalidOtpError: If the code is wrong, missing or expired
        """
        user = await self._store.get_by_email(email)
        if user is None:
            raise UserNotFoundError()

        if (
            not user.otp
            or user.otp_expires_at is None
            or user.otp_expires_at < self._clock()
            or not hmac.compare_digest(user.otp, otp.strip())
        ):
            raise InvalidOtpError()

        user.otp = None
        user.otp_expires_at = None
        await self._store.update(user)

        return self._tokens.issue(user.id, user.role)

    async def logout(self, user: AuthenticatedUser) -> None:
        """Tokens are stateless; the client discards its copy."""
        logger.info(f"User {user.id} (role: {user.role.value}) logged out")

    # -------------------------------------------------------------------------
    # Token validation
    # -------------------------------------------------------------------------

    async def validate_token(self, token: Optional[str]) -> AuthenticatedUser:
        """Validate a session token and return the caller's identity."""
        if not token:
            raise MissingTokenError()

        claims = self._tokens.verify(token)
        return AuthenticatedUser(id=claims.sub, role=claims.role)

    # -------------------------------------------------------------------------
    # Profiles
    # -------------------------------------------------------------------------

    async def get_user_by_id(self, user_id: str) -> Optional[UserProfile]:
        user = await self._store.get_by_id(user_id)
        return UserProfile.from_user(user) if user else None

    async def get_public_profile(self, user_id: str) -> Optional[PublicProfile]:
        user = await self._store.get_by_id(user_id)
        if user is None:
            return None
        return PublicProfile(id=user.id, display_name=user.display_name)

    async def update_profile(
        self,
        user_id: str,
        request: ProfileUpdateRequest,
    ) -> UserProfile:
        """
        Change name and email.

        Activity records already written keep the old display name.
        """
        user = await self._store.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)

        email = normalize_email(request.email)
        existing = await self._store.get_by_email(email)
        if existing is not None and existing.id != user.id:
            raise EmailAlreadyExistsError()

        user.first_name = request.first_name
        user.last_name = request.last_name
        user.email = email
        updated = await self._store.update(user)
        return UserProfile.from_user(updated)

    async def change_password(
        self,
        user_id: str,
        request: PasswordChangeRequest,
    ) -> None:
        user = await self._store.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)

        if not await verify_password(request.current_password, user.password_hash):
            raise InvalidCredentialsError("Current password is incorrect")

        problems = validate_password(request.new_password)
        if problems:
            raise PasswordPolicyError(problems)

        user.password_hash = await hash_password(
            request.new_password, self._settings.bcrypt_rounds
        )
        await self._store.update(user)
