"""User management: admin CRUD, self-service updates, status and role changes."""

from __future__ import annotations

import logging

from app.core.errors import ConflictError, ForbiddenError, NotFoundError
from app.core.security.passwords import PasswordHasher
from app.models.user import User, UserRole, UserStatus
from app.repositories.base import UserRepository
from app.repositories.users import DUPLICATE_EMAIL_MESSAGE
from app.schemas.user import UserCreate, UserUpdate

logger = logging.getLogger(__name__)

USER_NOT_FOUND_MESSAGE = "User not found"
SELF_UPDATABLE_FIELDS = frozenset({"email", "first_name", "last_name"})


class UserService:
    def __init__(self, users: UserRepository, hasher: PasswordHasher) -> None:
        self.users = users
        self.hasher = hasher

    async def _get_or_404(self, user_id: str) -> User:
        user = await self.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError(USER_NOT_FOUND_MESSAGE)
        return user

    @staticmethod
    def _ensure_self_or_admin(actor: User, user_id: str) -> None:
        if not actor.is_admin and str(actor.id) != str(user_id):
            raise ForbiddenError("You may only access your own account")

    async def create(self, data: UserCreate) -> User:
        if await self.users.get_by_email(data.email) is not None:
            raise ConflictError(DUPLICATE_EMAIL_MESSAGE)

        user = User(
            email=data.email,
            first_name=data.first_name.strip(),
            last_name=data.last_name.strip(),
            password_hash=await self.hasher.hash_async(data.password),
            role=UserRole(data.role) if data.role else UserRole.USER,
            status=UserStatus(data.status) if data.status else UserStatus.ACTIVE,
            email_verified=False,
        )
        user = await self.users.add(user)
        logger.info("User %s created by admin", user.id)
        return user

    async def list_users(self) -> list[User]:
        return await self.users.list_all()

    async def get(self, actor: User, user_id: str) -> User:
        self._ensure_self_or_admin(actor, user_id)
        return await self._get_or_404(user_id)

    async def profile(self, actor: User) -> User:
        return await self._get_or_404(actor.id)

    async def update(self, actor: User, user_id: str, data: UserUpdate) -> User:
        """Apply a partial update.

        Users may change their own name and email; role, status and
        email verification are reserved for admins.
        """
        self._ensure_self_or_admin(actor, user_id)
        if not actor.is_admin and data.privileged_fields:
            raise ForbiddenError("Only administrators may change role, status or emailVerified")

        user = await self._get_or_404(user_id)
        changes = data.model_dump(exclude_unset=True)

        new_email = changes.get("email")
        if new_email is not None and new_email != user.email:
            existing = await self.users.get_by_email(new_email)
            if existing is not None and str(existing.id) != str(user.id):
                raise ConflictError(DUPLICATE_EMAIL_MESSAGE)

        for field, value in changes.items():
            if field in ("first_name", "last_name"):
                value = value.strip()
            elif field == "role":
                value = UserRole(value)
            elif field == "status":
                value = UserStatus(value)
            setattr(user, field, value)

        user = await self.users.save(user)
        logger.info("User %s updated: %s", user.id, ", ".join(sorted(changes)))
        return user

    async def update_status(self, user_id: str, status: UserStatus) -> User:
        user = await self._get_or_404(user_id)
        user.status = status
        user = await self.users.save(user)
        logger.info("User %s status changed to %s", user.id, status.value)
        return user

    async def update_role(self, user_id: str, role: UserRole) -> User:
        user = await self._get_or_404(user_id)
        user.role = role
        user = await self.users.save(user)
        logger.info("User %s role changed to %s", user.id, role.value)
        return user

    async def soft_delete(self, user_id: str) -> None:
        """Deactivate the account; rows are never removed."""
        await self.update_status(user_id, UserStatus.INACTIVE)

    async def verify_email(self, user_id: str) -> User:
        """Mark the email verified. Admin-only, like emailVerified in update()."""
        user = await self._get_or_404(user_id)
        user.email_verified = True
        user = await self.users.save(user)
        logger.info("User %s email marked verified", user.id)
        return user
