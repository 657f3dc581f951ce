"""Bcrypt password hashing."""

from __future__ import annotations

import asyncio
import logging

import bcrypt

logger = logging.getLogger(__name__)

# Work factor 12 (2^12 iterations) resists offline brute force
DEFAULT_BCRYPT_ROUNDS = 12


class PasswordHasher:
    """Hash and verify passwords with a configurable bcrypt cost."""

    def __init__(self, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> None:
        if not 4 <= rounds <= 31:
            raise ValueError("bcrypt rounds must be between 4 and 31")
        self.rounds = rounds
        # Built once at the configured cost so every dummy verify does identical work
        self._dummy_hash = self.hash("dummy-password-for-timing")

    def hash(self, password: str) -> str:
        """Hash a password using bcrypt."""
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify(self, password: str, hashed_password: str) -> bool:
        """Verify a plaintext password against a stored hash."""
        try:
            return bcrypt.checkpw(password.encode("utf-8"), hashed_password.encode("utf-8"))
        except ValueError:
            logger.warning("Stored password hash is malformed; treating as mismatch")
            return False

    async def hash_async(self, password: str) -> str:
        return await asyncio.to_thread(self.hash, password)

    async def verify_async(self, password: str, hashed_password: str) -> bool:
        return await asyncio.to_thread(self.verify, password, hashed_password)

    async def verify_dummy_async(self, password: str) -> None:
        """Burn one verification so unknown emails cost as much as wrong passwords."""
        await self.verify_async(password, self._dummy_hash)
