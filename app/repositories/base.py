"""Storage interfaces the services depend on."""

from datetime import datetime
from typing import Protocol

from app.models.user import User


class UserRepository(Protocol):
    """Persistence of user records."""

    async def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return None if absent or the ID is malformed."""
        ...

    async def get_by_email(self, email: str) -> User | None:
        """Find a user by exact email."""
        ...

    async def list_all(self) -> list[User]:
        """Return every user, newest first."""
        ...

    async def count(self) -> int:
        ...

    async def add(self, user: User) -> User:
        """Insert a new user. Raise ConflictError if the email is taken."""
        ...

    async def save(self, user: User) -> User:
        """Persist changes made to ``user``. Raise ConflictError on email collision."""
        ...

    async def touch_last_login(self, user: User) -> User:
        """Stamp ``last_login_at`` with the current time."""
        ...


class TokenBlocklist(Protocol):
    """Revoked token identifiers."""

    async def revoke(self, jti: str, user_id: str, expires_at: datetime) -> None:
        ...

    async def is_revoked(self, jti: str) -> bool:
        ...

    async def purge_expired(self) -> int:
        """Delete entries whose token has expired anyway. Return rows removed."""
        ...
