"""Pydantic schemas for the authentication endpoints."""

from pydantic import EmailStr

from app.schemas.common import CamelModel
from app.schemas.user import UserResponse


class RegisterRequest(CamelModel):
    email: EmailStr
    first_name: str
    last_name: str
    password: str
    password_confirmation: str


class LoginRequest(CamelModel):
    email: EmailStr
    password: str


class AuthResponse(CamelModel):
    """Token plus the sanitised user it was issued for."""

    message: str
    token: str
    user: UserResponse


class TokenResponse(CamelModel):
    token: str


class VerifyResponse(CamelModel):
    message: str
    user: UserResponse
