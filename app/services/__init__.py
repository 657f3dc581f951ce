"""Business logic, free of HTTP concerns."""

from app.services.auth_service import AuthResult, AuthService
from app.services.user_service import UserService

__all__ = ["AuthResult", "AuthService", "UserService"]
