"""First-run admin provisioning."""

from __future__ import annotations

import logging

from app.config import Settings
from app.core.security.masking import mask_email
from app.core.security.passwords import PasswordHasher
from app.models.user import User, UserRole, UserStatus
from app.repositories.base import UserRepository

logger = logging.getLogger(__name__)


async def bootstrap_admin_if_needed(
    settings: Settings,
    users: UserRepository,
    hasher: PasswordHasher,
) -> User | None:
    """Create the first admin user if the users table is empty.

    Controlled via environment variables so a fresh deployment has a
    deterministic way to log in:

    - BOOTSTRAP_ADMIN_EMAIL
    - BOOTSTRAP_ADMIN_PASSWORD

    Does nothing unless both are set and there are 0 rows in ``users``.
    """
    email = (settings.bootstrap_admin_email or "").strip()
    password = settings.bootstrap_admin_password or ""
    if not email or not password:
        return None

    if await users.count() > 0:
        return None

    admin = await users.add(
        User(
            email=email,
            first_name="Admin",
            last_name="User",
            password_hash=await hasher.hash_async(password),
            role=UserRole.ADMIN,
            status=UserStatus.ACTIVE,
            email_verified=True,
        )
    )
    logger.warning("Bootstrapped initial admin account %s (%s)", admin.id, mask_email(admin.email))
    return admin
