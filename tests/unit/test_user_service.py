"""Unit tests for UserService."""

from __future__ import annotations

from datetime import timedelta

import pytest

from app.core.errors import ConflictError, ForbiddenError, NotFoundError
from app.models.user import UserRole, UserStatus
from app.schemas.user import UserCreate, UserUpdate
from tests.conftest import DEFAULT_PASSWORD


@pytest.fixture
def admin(make_user):
    return make_user(email="admin@b.com", role=UserRole.ADMIN)


@pytest.fixture
def member(make_user):
    return make_user(email="member@b.com")


@pytest.mark.asyncio
async def test_create_defaults_to_active_user(user_service, hasher):
    user = await user_service.create(
        UserCreate(email="new@b.com", first_name="New", last_name="Person", password=DEFAULT_PASSWORD)
    )
    assert user.role == UserRole.USER
    assert user.status == UserStatus.ACTIVE
    assert hasher.verify(DEFAULT_PASSWORD, user.password_hash)


@pytest.mark.asyncio
async def test_create_with_explicit_role(user_service):
    user = await user_service.create(
        UserCreate(
            email="rev@b.com",
            first_name="Re",
            last_name="Viewer",
            password=DEFAULT_PASSWORD,
            role="reviewer",
        )
    )
    assert user.role == UserRole.REVIEWER


@pytest.mark.asyncio
async def test_create_duplicate_conflicts(user_service, member):
    with pytest.raises(ConflictError):
        await user_service.create(
            UserCreate(email=member.email, first_name="X", last_name="Y", password=DEFAULT_PASSWORD)
        )


@pytest.mark.asyncio
async def test_list_users_newest_first(user_service, make_user):
    older = make_user(email="older@b.com")
    newer = make_user(email="newer@b.com")
    older.created_at = newer.created_at - timedelta(days=1)

    users = await user_service.list_users()
    assert [u.email for u in users] == ["newer@b.com", "older@b.com"]


@pytest.mark.asyncio
async def test_get_self_allowed(user_service, member):
    assert (await user_service.get(member, member.id)).id == member.id


@pytest.mark.asyncio
async def test_get_other_user_forbidden_for_non_admin(user_service, member, admin):
    with pytest.raises(ForbiddenError):
        await user_service.get(member, admin.id)


@pytest.mark.asyncio
async def test_admin_get_missing_user_404(user_service, admin):
    with pytest.raises(NotFoundError):
        await user_service.get(admin, "00000000-0000-4000-8000-000000000000")


@pytest.mark.asyncio
async def test_self_update_name_and_email(user_service, member):
    updated = await user_service.update(
        member, member.id, UserUpdate(first_name="  Renamed ", email="renamed@b.com")
    )
    assert updated.first_name == "Renamed"
    assert updated.email == "renamed@b.com"
    assert updated.last_name == "User"


@pytest.mark.asyncio
async def test_self_update_cannot_change_role(user_service, member):
    with pytest.raises(ForbiddenError):
        await user_service.update(member, member.id, UserUpdate(role="admin"))
    assert member.role == UserRole.USER


@pytest.mark.asyncio
async def test_admin_update_all_fields(user_service, admin, member):
    updated = await user_service.update(
        admin,
        member.id,
        UserUpdate(role="reviewer", status="suspended", email_verified=True),
    )
    assert updated.role == UserRole.REVIEWER
    assert updated.status == UserStatus.SUSPENDED
    assert updated.email_verified is True


@pytest.mark.asyncio
async def test_update_email_collision_conflicts(user_service, admin, member):
    with pytest.raises(ConflictError):
        await user_service.update(member, member.id, UserUpdate(email=admin.email))
    assert member.email == "member@b.com"


@pytest.mark.asyncio
async def test_update_status_and_role(user_service, member):
    assert (await user_service.update_status(member.id, UserStatus.INACTIVE)).status == UserStatus.INACTIVE
    assert (await user_service.update_role(member.id, UserRole.ADMIN)).role == UserRole.ADMIN


@pytest.mark.asyncio
async def test_update_status_missing_user_404(user_service):
    with pytest.raises(NotFoundError):
        await user_service.update_status("missing", UserStatus.ACTIVE)


@pytest.mark.asyncio
async def test_soft_delete_keeps_row(user_service, user_repo, member):
    await user_service.soft_delete(member.id)

    assert member.id in user_repo.store
    assert user_repo.store[member.id].status == UserStatus.INACTIVE


@pytest.mark.asyncio
async def test_verify_email(user_service, member):
    assert (await user_service.verify_email(member.id)).email_verified is True


@pytest.mark.asyncio
async def test_verify_email_missing_user_404(user_service):
    with pytest.raises(NotFoundError):
        await user_service.verify_email("00000000-0000-4000-8000-000000000000")


@pytest.mark.asyncio
async def test_self_update_cannot_set_email_verified(user_service, member):
    with pytest.raises(ForbiddenError):
        await user_service.update(member, member.id, UserUpdate(email_verified=True))
    assert member.email_verified is False
