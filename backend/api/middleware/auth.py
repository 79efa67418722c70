"""
Authorization gate.

Validates bearer tokens and enforces role predicates. Ownership is not
checked here; services compare the recipe owner with the caller.
"""

from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from modules.auth.exceptions import InsufficientPermissionsError, MissingTokenError
from modules.auth.interfaces import IAuthService
from shared.models import AuthenticatedUser, Role

from ..dependencies import get_auth_service

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: IAuthService = Depends(get_auth_service),
) -> AuthenticatedUser:
    """
    Dependency that requires authentication.

    Use this for endpoints that require a logged-in user.

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthenticatedUser = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    if credentials is None:
        raise MissingTokenError()

    return await auth.validate_token(credentials.credentials)


def require_role(user: Optional[AuthenticatedUser], allowed: set[Role]) -> None:
    """
    Check that an authenticated caller holds one of the allowed roles.

    Raises:
        MissingTokenError: If no identity is attached (gate not run)
        InsufficientPermissionsError: If the role is not allowed
    """
    if user is None:
        raise MissingTokenError("Authentication required")
    if user.role not in allowed:
        required = " or ".join(sorted(role.value for role in allowed))
        raise InsufficientPermissionsError(required, user.role.value)


def role_required(*roles: Role):
    """Build a dependency that authenticates and then applies require_role."""
    allowed = set(roles)

    async def dependency(
        user: AuthenticatedUser = Depends(get_current_user),
    ) -> AuthenticatedUser:
        require_role(user, allowed)
        return user

    return dependency


get_user_or_admin = role_required(Role.USER, Role.ADMIN)
get_admin_user = role_required(Role.ADMIN)
