"""JWT issuance and verification."""

from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from app.config import MIN_SECRET_KEY_LENGTH, Settings
from app.core.errors import InvalidTokenError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenSubject:
    """Identity claims carried by every access token."""

    subject_id: str
    email: str
    role: str


@dataclass(frozen=True)
class TokenClaims(TokenSubject):
    """Verified token contents, including timing and identifier fields."""

    jti: str
    issued_at: datetime
    expires_at: datetime


@dataclass(frozen=True)
class IssuedToken:
    token: str
    claims: TokenClaims


def _timestamp(value: object) -> datetime:
    return datetime.fromtimestamp(int(value), tz=timezone.utc)  # type: ignore[arg-type]


class TokenService:
    """Sign and verify HS-family JWTs with a server-held secret.

    There is no server-side session: a token is valid while its signature
    checks out, ``exp`` is in the future, and its ``jti`` has not been put
    on the blocklist (that last check is done by the access-control layer).
    """

    def __init__(
        self,
        secret_key: str,
        *,
        algorithm: str = "HS256",
        default_ttl: timedelta = timedelta(hours=24),
    ) -> None:
        if len(secret_key.encode()) < MIN_SECRET_KEY_LENGTH:
            raise ValueError(f"Token secret must be at least {MIN_SECRET_KEY_LENGTH} bytes")
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.default_ttl = default_ttl

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            settings.secret_key,
            algorithm=settings.algorithm,
            default_ttl=timedelta(minutes=settings.access_token_expire_minutes),
        )

    def issue(self, subject: TokenSubject, ttl: timedelta | None = None) -> IssuedToken:
        """Create a signed access token for ``subject``."""
        # JWT timestamps are whole seconds; truncate so claims round-trip exactly
        now = datetime.now(timezone.utc).replace(microsecond=0)
        expire = now + (ttl if ttl is not None else self.default_ttl)
        jti = secrets.token_hex(16)
        payload = {
            "sub": subject.subject_id,
            "email": subject.email,
            "role": subject.role,
            "jti": jti,
            "iat": now,
            "exp": expire,
        }
        token = jwt.encode(payload, self._secret_key, algorithm=self.algorithm)
        claims = TokenClaims(
            subject_id=subject.subject_id,
            email=subject.email,
            role=subject.role,
            jti=jti,
            issued_at=now,
            expires_at=expire,
        )
        return IssuedToken(token=token, claims=claims)

    def verify(self, token: str) -> TokenClaims:
        """Verify signature and expiry, returning the decoded claims.

        Raises:
            InvalidTokenError: malformed token, bad signature, expired
                token, or missing claims.
        """
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            logger.debug("JWT verification failed: %s", e)
            raise InvalidTokenError() from e

        try:
            return TokenClaims(
                subject_id=str(payload["sub"]),
                email=str(payload["email"]),
                role=str(payload["role"]),
                jti=str(payload["jti"]),
                issued_at=_timestamp(payload["iat"]),
                expires_at=_timestamp(payload["exp"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            logger.debug("JWT payload is missing required claims: %s", e)
            raise InvalidTokenError("Invalid token payload") from e
