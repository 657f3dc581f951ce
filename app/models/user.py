"""User model for authentication and access control."""

from datetime import datetime
from enum import Enum

from sqlalchemy import Boolean, CheckConstraint, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, TimestampMixin, UUIDMixin


class UserRole(str, Enum):
    """Role governing access-control decisions."""

    ADMIN = "admin"
    USER = "user"
    REVIEWER = "reviewer"


class UserStatus(str, Enum):
    """Account status; only active users may authenticate."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"


def _enum_check(column: str, enum: type[Enum]) -> str:
    values = ", ".join(f"'{member.value}'" for member in enum)
    return f"{column} IN ({values})"


class User(Base, UUIDMixin, TimestampMixin):
    """Application user, keyed by a unique email."""

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint(_enum_check("role", UserRole), name="ck_users_role"),
        CheckConstraint(_enum_check("status", UserStatus), name="ck_users_status"),
        CheckConstraint("password_hash <> ''", name="ck_users_password_hash_not_empty"),
    )

    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[UserRole] = mapped_column(String(20), default=UserRole.USER, index=True, nullable=False)
    status: Mapped[UserStatus] = mapped_column(
        String(20), default=UserStatus.ACTIVE, index=True, nullable=False
    )
    email_verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    last_login_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"
