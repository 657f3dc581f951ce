"""Explicit request validation.

Pydantic parses the shape of each body; the functions here apply the
business rules and return a ``Validation`` result instead of raising, so a
handler can inspect it or call ``raise_for_errors()`` at the top.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from app.core.errors import ValidationError
from app.models.user import UserRole, UserStatus
from app.schemas.auth import LoginRequest, RegisterRequest
from app.schemas.user import UserCreate, UserUpdate

PASSWORD_MIN_LENGTH = 6
# bcrypt only looks at the first 72 bytes
PASSWORD_MAX_BYTES = 72
NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 255

STATUS_REQUIRED_MESSAGE = "Valid status is required (active, inactive, suspended)"
ROLE_REQUIRED_MESSAGE = "Valid role is required (admin, user, reviewer)"


@dataclass(frozen=True)
class Validation:
    """Outcome of a validation function: ok, or a list of messages."""

    errors: tuple[str, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def message(self) -> str:
        return "; ".join(self.errors)

    def raise_for_errors(self) -> None:
        if self.errors:
            raise ValidationError(self.message)


def _check_email(email: str | None, errors: list[str]) -> None:
    if email is not None and len(email) > EMAIL_MAX_LENGTH:
        errors.append(f"Email must be at most {EMAIL_MAX_LENGTH} characters")


def _check_name(label: str, value: str | None, errors: list[str], *, required: bool) -> None:
    if value is None:
        if required:
            errors.append(f"{label} is required")
        return
    if not value.strip():
        errors.append(f"{label} must not be blank")
    elif len(value) > NAME_MAX_LENGTH:
        errors.append(f"{label} must be at most {NAME_MAX_LENGTH} characters")


def _check_password(password: str, errors: list[str]) -> None:
    if len(password) < PASSWORD_MIN_LENGTH:
        errors.append(f"Password must be at least {PASSWORD_MIN_LENGTH} characters long")
    elif len(password.encode("utf-8")) > PASSWORD_MAX_BYTES:
        errors.append(f"Password must be at most {PASSWORD_MAX_BYTES} bytes long")


def validate_status_value(value: str | None) -> Validation:
    if value not in {s.value for s in UserStatus}:
        return Validation((STATUS_REQUIRED_MESSAGE,))
    return Validation()


def validate_role_value(value: str | None) -> Validation:
    if value not in {r.value for r in UserRole}:
        return Validation((ROLE_REQUIRED_MESSAGE,))
    return Validation()


def validate_registration(body: RegisterRequest) -> Validation:
    """Field rules for self-registration.

    Password confirmation is compared by the auth service, which owns
    the PasswordMismatch outcome.
    """
    errors: list[str] = []
    _check_email(body.email, errors)
    _check_name("First name", body.first_name, errors, required=True)
    _check_name("Last name", body.last_name, errors, required=True)
    _check_password(body.password, errors)
    return Validation(tuple(errors))


def validate_login(body: LoginRequest) -> Validation:
    if not body.password:
        return Validation(("Email and password are required",))
    return Validation()


def validate_user_create(body: UserCreate) -> Validation:
    errors: list[str] = []
    _check_email(body.email, errors)
    _check_name("First name", body.first_name, errors, required=True)
    _check_name("Last name", body.last_name, errors, required=True)
    _check_password(body.password, errors)
    if body.role is not None:
        errors.extend(validate_role_value(body.role).errors)
    if body.status is not None:
        errors.extend(validate_status_value(body.status).errors)
    return Validation(tuple(errors))


def validate_user_update(body: UserUpdate) -> Validation:
    errors: list[str] = []
    if "email" in body.model_fields_set and body.email is None:
        errors.append("Email must not be null")
    _check_email(body.email, errors)
    _check_name("First name", body.first_name, errors, required="first_name" in body.model_fields_set)
    _check_name("Last name", body.last_name, errors, required="last_name" in body.model_fields_set)
    if "role" in body.model_fields_set:
        errors.extend(validate_role_value(body.role).errors)
    if "status" in body.model_fields_set:
        errors.extend(validate_status_value(body.status).errors)
    if "email_verified" in body.model_fields_set and body.email_verified is None:
        errors.append("emailVerified must be a boolean")
    return Validation(tuple(errors))
