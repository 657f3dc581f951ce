"""Authentication endpoints."""

from fastapi import APIRouter, Depends, status

from app.api.deps import get_auth_service
from app.core.security.auth import CurrentAuth
from app.schemas.auth import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    VerifyResponse,
)
from app.schemas.common import MessageResponse
from app.schemas.user import UserResponse
from app.schemas.validation import validate_login, validate_registration
from app.services.auth_service import AuthService

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    body: RegisterRequest,
    service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Register a new user and return a token for it."""
    validate_registration(body).raise_for_errors()

    result = await service.register(
        email=body.email,
        first_name=body.first_name,
        last_name=body.last_name,
        password=body.password,
        password_confirmation=body.password_confirmation,
    )
    return AuthResponse(
        message="User registered successfully",
        token=result.token,
        user=UserResponse.model_validate(result.user),
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    body: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Authenticate with email and password."""
    validate_login(body).raise_for_errors()

    result = await service.login(body.email, body.password)
    return AuthResponse(
        message="Login successful",
        token=result.token,
        user=UserResponse.model_validate(result.user),
    )


@router.post("/refresh", response_model=TokenResponse)
async def refresh(
    auth: CurrentAuth,
    service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    """Exchange a valid token for a fresh one; the old token is revoked."""
    token = await service.refresh(auth.claims)
    return TokenResponse(token=token)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    auth: CurrentAuth,
    service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    """Revoke the presented token."""
    message = await service.logout(auth.claims)
    return MessageResponse(message=message)


@router.get("/verify", response_model=VerifyResponse)
async def verify(auth: CurrentAuth) -> VerifyResponse:
    """Check the presented token and return the user it belongs to."""
    return VerifyResponse(message="Token is valid", user=UserResponse.model_validate(auth.user))
