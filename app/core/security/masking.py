"""Masking helpers so secrets and identities stay out of log lines."""

from __future__ import annotations

import re
from urllib.parse import urlparse, urlunparse


def mask_url(url: str | None) -> str:
    """Strip the password from a connection-string URL.

    Examples
    --------
    >>> mask_url("postgresql+asyncpg://auth:s3cret@db:5432/auth")
    'postgresql+asyncpg://auth:****@db:5432/auth'
    >>> mask_url(None)
    ''
    """
    if not url:
        return ""

    try:
        parsed = urlparse(url)
        if parsed.password:
            user_part = parsed.username or ""
            host_part = parsed.hostname or ""
            port_part = f":{parsed.port}" if parsed.port else ""
            netloc = f"{user_part}:****@{host_part}{port_part}"
            return urlunparse(parsed._replace(netloc=netloc))
        return url
    except ValueError:
        # Fallback: regex-based masking for non-standard URLs
        return re.sub(r"://([^:]+):([^@]+)@", r"://\1:****@", url)


def mask_email(email: str | None) -> str:
    """Keep the first character of the local part and the domain.

    ``"alice@example.com"`` → ``"a****@example.com"``
    """
    if not email:
        return ""
    local, sep, domain = email.partition("@")
    if not sep:
        return "****"
    return f"{local[:1]}****@{domain}"
