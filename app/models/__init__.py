"""Database models."""

from app.models.revoked_token import RevokedToken
from app.models.user import User, UserRole, UserStatus

__all__ = [
    "RevokedToken",
    "User",
    "UserRole",
    "UserStatus",
]
