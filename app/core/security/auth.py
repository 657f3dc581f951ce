"""Access control: bearer-token extraction, identity resolution, role checks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Any, Callable, Coroutine

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.api.deps import get_token_blocklist, get_token_service, get_user_repository
from app.core.errors import ForbiddenError, InvalidTokenError, NoTokenError, UnauthorizedError
from app.core.security.tokens import TokenClaims, TokenService
from app.models.user import User, UserRole, UserStatus
from app.repositories.base import TokenBlocklist, UserRepository

bearer_scheme = HTTPBearer(
    auto_error=False,  # Return None so a missing header maps to NoTokenError
    description="JWT access token from /auth/login or /auth/register",
)


@dataclass(frozen=True)
class AuthContext:
    """Identity attached to a protected request."""

    claims: TokenClaims
    user: User

    @property
    def role(self) -> UserRole:
        return UserRole(self.user.role)


def get_token_claims(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> TokenClaims:
    """Verify the ``Authorization: Bearer`` token and return its claims.

    Raises NoTokenError when the header is missing or not a bearer
    credential, InvalidTokenError when verification fails.
    """
    if credentials is None or not credentials.credentials:
        raise NoTokenError()
    return tokens.verify(credentials.credentials)


async def get_auth_context(
    request: Request,
    claims: TokenClaims = Depends(get_token_claims),
    users: UserRepository = Depends(get_user_repository),
    blocklist: TokenBlocklist = Depends(get_token_blocklist),
) -> AuthContext:
    """Resolve the caller, re-validating against the store on every call.

    Role and status are read from the database rather than trusted from
    the token, so suspensions and role changes apply immediately.
    """
    if await blocklist.is_revoked(claims.jti):
        raise InvalidTokenError("Token has been revoked")

    user = await users.get_by_id(claims.subject_id)
    if user is None or user.status != UserStatus.ACTIVE:
        raise UnauthorizedError("User not found or inactive")

    request.state.user_id = user.id
    return AuthContext(claims=claims, user=user)


def require_roles(*roles: UserRole) -> Callable[..., Coroutine[Any, Any, AuthContext]]:
    """Build a dependency admitting only callers whose current role is in ``roles``."""
    allowed = frozenset(roles)

    async def _require(auth: AuthContext = Depends(get_auth_context)) -> AuthContext:
        if auth.role not in allowed:
            if allowed == {UserRole.ADMIN}:
                raise ForbiddenError("Admin access required")
            raise ForbiddenError("Insufficient role for this operation")
        return auth

    return _require


require_admin = require_roles(UserRole.ADMIN)

# Convenience type aliases for route dependencies
CurrentAuth = Annotated[AuthContext, Depends(get_auth_context)]
AdminAuth = Annotated[AuthContext, Depends(require_admin)]
