"""Application error taxonomy.

Services raise these to express rule violations; the exception handlers
installed by ``create_application`` turn them into JSON responses of the
shape ``{statusCode, message, error, timestamp, path}``.
"""

from __future__ import annotations

from http import HTTPStatus


class AppError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def error(self) -> str:
        return HTTPStatus(self.status_code).phrase

    @property
    def headers(self) -> dict[str, str] | None:
        return None


class ValidationError(AppError):
    """Malformed or missing input."""

    status_code = HTTPStatus.BAD_REQUEST
    default_message = "Validation failed"


class PasswordMismatchError(ValidationError):
    default_message = "Passwords do not match"


class _BearerChallenge(AppError):
    status_code = HTTPStatus.UNAUTHORIZED

    @property
    def headers(self) -> dict[str, str] | None:
        return {"WWW-Authenticate": "Bearer"}


class InvalidCredentialsError(_BearerChallenge):
    default_message = "Invalid email or password"


class UnauthorizedError(_BearerChallenge):
    default_message = "Unauthorized"


class NoTokenError(UnauthorizedError):
    default_message = "No token provided"


class InvalidTokenError(UnauthorizedError):
    default_message = "Invalid token"


class ForbiddenError(AppError):
    """Authenticated, but the role does not permit the action."""

    status_code = HTTPStatus.FORBIDDEN
    default_message = "Forbidden"


class NotFoundError(AppError):
    status_code = HTTPStatus.NOT_FOUND
    default_message = "Resource not found"


class ConflictError(AppError):
    """A unique key (the user email) is already taken."""

    status_code = HTTPStatus.CONFLICT
    default_message = "Resource already exists"
