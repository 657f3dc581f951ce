"""User management endpoints."""

from fastapi import APIRouter, Depends, Response, status

from app.api.deps import get_user_service
from app.core.security.auth import AdminAuth, CurrentAuth
from app.models.user import User, UserRole, UserStatus
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
from app.schemas.validation import (
    validate_role_value,
    validate_status_value,
    validate_user_create,
    validate_user_update,
)
from app.services.user_service import UserService

router = APIRouter()


def _envelope(user: User) -> UserEnvelope:
    return UserEnvelope(user=UserResponse.model_validate(user))


# /profile is declared before /{user_id} so it is not captured as an id
@router.get("/profile", response_model=UserEnvelope)
async def get_profile(
    auth: CurrentAuth,
    service: UserService = Depends(get_user_service),
) -> UserEnvelope:
    """Return the caller's own record."""
    return _envelope(await service.profile(auth.user))


@router.get("", response_model=UserListResponse)
async def list_users(
    _: AdminAuth,
    service: UserService = Depends(get_user_service),
) -> UserListResponse:
    """List all users, newest first."""
    users = await service.list_users()
    return UserListResponse(
        users=[UserResponse.model_validate(u) for u in users],
        total=len(users),
    )


@router.post("", response_model=UserEnvelope, status_code=status.HTTP_201_CREATED)
async def create_user(
    body: UserCreate,
    _: AdminAuth,
    service: UserService = Depends(get_user_service),
) -> UserEnvelope:
    """Create a user (admin only)."""
    validate_user_create(body).raise_for_errors()
    return _envelope(await service.create(body))


@router.get("/{user_id}", response_model=UserEnvelope)
async def get_user(
    user_id: str,
    auth: CurrentAuth,
    service: UserService = Depends(get_user_service),
) -> UserEnvelope:
    """Get a user by ID (self or admin)."""
    return _envelope(await service.get(auth.user, user_id))


@router.patch("/{user_id}", response_model=UserEnvelope)
async def update_user(
    user_id: str,
    body: UserUpdate,
    auth: CurrentAuth,
    service: UserService = Depends(get_user_service),
) -> UserEnvelope:
    """Update a user; non-admins may only change their own name and email."""
    validate_user_update(body).raise_for_errors()
    return _envelope(await service.update(auth.user, user_id, body))


@router.patch("/{user_id}/status", response_model=UserMessageEnvelope)
async def update_user_status(
    user_id: str,
    body: StatusUpdate,
    _: AdminAuth,
    service: UserService = Depends(get_user_service),
) -> UserMessageEnvelope:
    validate_status_value(body.status).raise_for_errors()
    user = await service.update_status(user_id, UserStatus(body.status))
    return UserMessageEnvelope(
        message="User status updated successfully",
        user=UserResponse.model_validate(user),
    )


@router.patch("/{user_id}/role", response_model=UserMessageEnvelope)
async def update_user_role(
    user_id: str,
    body: RoleUpdate,
    _: AdminAuth,
    service: UserService = Depends(get_user_service),
) -> UserMessageEnvelope:
    validate_role_value(body.role).raise_for_errors()
    user = await service.update_role(user_id, UserRole(body.role))
    return UserMessageEnvelope(
        message="User role updated successfully",
        user=UserResponse.model_validate(user),
    )


@router.post("/{user_id}/verify-email", response_model=UserEnvelope)
async def verify_user_email(
    user_id: str,
    _: AdminAuth,
    service: UserService = Depends(get_user_service),
) -> UserEnvelope:
    """Mark a user's email as verified (admin only)."""
    return _envelope(await service.verify_email(user_id))


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: str,
    _: AdminAuth,
    service: UserService = Depends(get_user_service),
) -> Response:
    """Deactivate a user (soft delete)."""
    await service.soft_delete(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
