"""Pydantic schemas for User."""

from __future__ import annotations

from datetime import datetime

from pydantic import ConfigDict, EmailStr

from app.models.user import UserRole, UserStatus
from app.schemas.common import CamelModel


class UserResponse(CamelModel):
    """Sanitised user representation; the password hash is never included."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    first_name: str
    last_name: str
    role: UserRole
    status: UserStatus
    email_verified: bool
    last_login_at: datetime | None = None
    created_at: datetime
    updated_at: datetime


class UserEnvelope(CamelModel):
    user: UserResponse


class UserMessageEnvelope(CamelModel):
    message: str
    user: UserResponse


class UserListResponse(CamelModel):
    users: list[UserResponse]
    total: int


class UserCreate(CamelModel):
    """Admin-side user creation."""

    email: EmailStr
    first_name: str
    last_name: str
    password: str
    role: str | None = None
    status: str | None = None


class UserUpdate(CamelModel):
    """Partial update. Only admins may send role, status or email_verified."""

    email: EmailStr | None = None
    first_name: str | None = None
    last_name: str | None = None
    role: str | None = None
    status: str | None = None
    email_verified: bool | None = None

    @property
    def privileged_fields(self) -> set[str]:
        return {"role", "status", "email_verified"} & self.model_fields_set


class StatusUpdate(CamelModel):
    status: str | None = None


class RoleUpdate(CamelModel):
    role: str | None = None
