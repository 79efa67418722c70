"""
Session token issuing and verification.

Tokens are stateless HS256 JWTs carrying the user ID, role and a fixed
expiry. Nothing is stored server-side, so a token stays valid until it
expires. The jti claim is the key a future denylist would use.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from pydantic import ValidationError as PydanticValidationError

from shared.config import Settings, get_settings
from shared.models import Role

from .exceptions import AuthNotConfiguredError, ExpiredTokenError, InvalidTokenError
from .models import TokenClaims


class TokenService:
    """Issues and verifies signed, time-boxed session tokens."""

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings or get_settings()

    @property
    def ttl(self) -> timedelta:
        return timedelta(hours=self._settings.token_ttl_hours)

    def issue(self, user_id: str, role: Role) -> str:
        """
        Produce a signed token for a user.

        Raises:
            AuthNotConfiguredError: If no signing secret is configured
        """
        secret = self._settings.jwt_secret
        if not secret:
            raise AuthNotConfiguredError()

        now = datetime.now(timezone.utc)
        payload = {
            "sub": user_id,
            "role": Role(role).value,
            "iat": int(now.timestamp()),
            "exp": int((now + self.ttl).timestamp()),
            "jti": str(uuid.uuid4()),
        }
        return jwt.encode(payload, secret, algorithm=self._settings.jwt_algorithm)

    def verify(self, token: str) -> TokenClaims:
        """
        Verify a token's signature and expiry and return its claims.

        Never fails open: a missing secret rejects every token.

        Raises:
            ExpiredTokenError: If the token has expired
            InvalidTokenError: For any other problem
        """
        secret = self._settings.jwt_secret
        if not secret:
            raise InvalidTokenError("Server authentication not configured")

        try:
            payload = jwt.decode(
                token,
                secret,
                algorithms=[self._settings.jwt_algorithm],
                options={"require": ["sub", "exp", "iat"]},
            )
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except jwt.InvalidTokenError:
            raise InvalidTokenError()

        try:
            return TokenClaims(**payload)
        except PydanticValidationError:
            raise InvalidTokenError()
