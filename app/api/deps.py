"""Dependency wiring: request-scoped repositories and services.

Long-lived objects (settings, hasher, token service) are built once by
``create_application`` and kept on ``app.state``; everything touching the
database is created per request from the session yielded by ``get_db``.
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings
from app.core.security.passwords import PasswordHasher
from app.core.security.tokens import TokenService
from app.db.session import get_db
from app.repositories.base import TokenBlocklist, UserRepository
from app.repositories.revoked_tokens import SQLTokenBlocklist
from app.repositories.users import SQLUserRepository
from app.services.auth_service import AuthService
from app.services.user_service import UserService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_user_repository(db: AsyncSession = Depends(get_db)) -> UserRepository:
    return SQLUserRepository(db)


def get_token_blocklist(db: AsyncSession = Depends(get_db)) -> TokenBlocklist:
    return SQLTokenBlocklist(db)


def get_auth_service(
    users: UserRepository = Depends(get_user_repository),
    blocklist: TokenBlocklist = Depends(get_token_blocklist),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
) -> AuthService:
    return AuthService(users=users, hasher=hasher, tokens=tokens, blocklist=blocklist)


def get_user_service(
    users: UserRepository = Depends(get_user_repository),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> UserService:
    return UserService(users=users, hasher=hasher)
