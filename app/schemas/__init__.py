"""Pydantic schemas for API validation."""

from app.schemas.auth import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    VerifyResponse,
)
from app.schemas.common import MessageResponse
from app.schemas.user import (
    RoleUpdate,
    StatusUpdate,
    UserCreate,
    UserEnvelope,
    UserListResponse,
    UserMessageEnvelope,
    UserResponse,
    UserUpdate,
)

__all__ = [
    "AuthResponse",
    "LoginRequest",
    "MessageResponse",
    "RegisterRequest",
    "RoleUpdate",
    "StatusUpdate",
    "TokenResponse",
    "UserCreate",
    "UserEnvelope",
    "UserListResponse",
    "UserMessageEnvelope",
    "UserResponse",
    "UserUpdate",
    "VerifyResponse",
]
