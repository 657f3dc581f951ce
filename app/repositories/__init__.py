"""Persistence adapters."""

from app.repositories.base import TokenBlocklist, UserRepository
from app.repositories.revoked_tokens import SQLTokenBlocklist
from app.repositories.users import DUPLICATE_EMAIL_MESSAGE, SQLUserRepository

__all__ = [
    "DUPLICATE_EMAIL_MESSAGE",
    "SQLTokenBlocklist",
    "SQLUserRepository",
    "TokenBlocklist",
    "UserRepository",
]
