"""Auth service: registration, login, token refresh and logout.

Pure business logic with no HTTP dependencies. Raises the errors from
``app.core.errors``, which the application's exception handlers map to
status codes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from app.core.errors import (
    ConflictError,
    InvalidCredentialsError,
    PasswordMismatchError,
    UnauthorizedError,
)
from app.core.security.masking import mask_email
from app.core.security.passwords import PasswordHasher
from app.core.security.tokens import IssuedToken, TokenClaims, TokenService, TokenSubject
from app.models.user import User, UserRole, UserStatus
from app.repositories.base import TokenBlocklist, UserRepository
from app.repositories.users import DUPLICATE_EMAIL_MESSAGE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthResult:
    token: str
    user: User


def subject_for(user: User) -> TokenSubject:
    return TokenSubject(subject_id=str(user.id), email=user.email, role=UserRole(user.role).value)


class AuthService:
    def __init__(
        self,
        users: UserRepository,
        hasher: PasswordHasher,
        tokens: TokenService,
        blocklist: TokenBlocklist,
    ) -> None:
        self.users = users
        self.hasher = hasher
        self.tokens = tokens
        self.blocklist = blocklist

    def _issue(self, user: User) -> IssuedToken:
        return self.tokens.issue(subject_for(user))

    async def login(self, email: str, password: str) -> AuthResult:
        """Authenticate by email and password.

        Unknown email, inactive account and wrong password all fail with
        the same InvalidCredentialsError so callers cannot tell them apart.
        """
        user = await self.users.get_by_email(email)
        if user is None:
            await self.hasher.verify_dummy_async(password)
            logger.info("Login rejected for unknown email %s", mask_email(email))
            raise InvalidCredentialsError()

        if user.status != UserStatus.ACTIVE:
            await self.hasher.verify_dummy_async(password)
            logger.info(
                "Login rejected for user %s: account is %s", user.id, UserStatus(user.status).value
            )
            raise InvalidCredentialsError()

        if not await self.hasher.verify_async(password, user.password_hash):
            logger.info("Login rejected for user %s: wrong password", user.id)
            raise InvalidCredentialsError()

        user = await self.users.touch_last_login(user)
        issued = self._issue(user)
        logger.info("User %s logged in", user.id)
        return AuthResult(token=issued.token, user=user)

    async def register(
        self,
        email: str,
        first_name: str,
        last_name: str,
        password: str,
        password_confirmation: str,
    ) -> AuthResult:
        """Create an active ``user``-role account and log it in.

        Raises:
            PasswordMismatchError: confirmation differs from password
            ConflictError: email already registered
        """
        if password != password_confirmation:
            raise PasswordMismatchError()

        # Fast path only; the unique index decides races (add() raises Conflict)
        if await self.users.get_by_email(email) is not None:
            raise ConflictError(DUPLICATE_EMAIL_MESSAGE)

        password_hash = await self.hasher.hash_async(password)
        user = await self.users.add(
            User(
                email=email,
                first_name=first_name.strip(),
                last_name=last_name.strip(),
                password_hash=password_hash,
                role=UserRole.USER,
                status=UserStatus.ACTIVE,
                email_verified=False,
            )
        )
        issued = self._issue(user)
        logger.info("User %s registered", user.id)
        return AuthResult(token=issued.token, user=user)

    async def refresh(self, claims: TokenClaims) -> str:
        """Re-issue a token for the subject of ``claims``.

        The user is re-read so role or status changes made after the presented
        token was issued are picked up. The presented token is revoked (rotation).
        """
        user = await self.users.get_by_id(claims.subject_id)
        if user is None or user.status != UserStatus.ACTIVE:
            raise UnauthorizedError("User not found or inactive")

        issued = self._issue(user)
        await self.blocklist.revoke(claims.jti, claims.subject_id, claims.expires_at)
        logger.info("Token refreshed for user %s", user.id)
        return issued.token

    async def logout(self, claims: TokenClaims) -> str:
        """Revoke the presented token until its natural expiry."""
        await self.blocklist.revoke(claims.jti, claims.subject_id, claims.expires_at)
        purged = await self.blocklist.purge_expired()
        if purged:
            logger.debug("Purged %d expired blocklist entries", purged)
        logger.info("User %s logged out", claims.subject_id)
        return "Logout successful"
