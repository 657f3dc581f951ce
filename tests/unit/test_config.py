"""Unit tests for settings validation."""

from __future__ import annotations

import pytest

from app.config import DEFAULT_SECRET_KEY, Settings

STRONG_SECRET = "x" * 40


class TestSecretKeyValidation:
    def test_rejects_default_key_in_production(self):
        with pytest.raises(ValueError, match="known default"):
            Settings(_env_file=None, environment="production", secret_key=DEFAULT_SECRET_KEY)

    def test_rejects_short_key_in_any_environment(self):
        with pytest.raises(ValueError, match="at least 32 characters"):
            Settings(_env_file=None, environment="development", secret_key="tooshort")

    def test_allows_default_key_in_development(self):
        s = Settings(_env_file=None, environment="development", secret_key=DEFAULT_SECRET_KEY)
        assert s.secret_key == DEFAULT_SECRET_KEY

    def test_accepts_strong_key_in_production(self):
        s = Settings(_env_file=None, environment="production", secret_key=STRONG_SECRET)
        assert s.secret_key == STRONG_SECRET


class TestDatabaseUrl:
    def test_plain_postgres_url_gets_asyncpg_driver(self):
        s = Settings(_env_file=None, database_url="postgresql://u:p@h:5432/db")
        assert str(s.database_url).startswith("postgresql+asyncpg://")

    def test_heroku_style_scheme_is_normalised(self):
        s = Settings(_env_file=None, database_url="postgres://u:p@h:5432/db")
        assert str(s.database_url).startswith("postgresql+asyncpg://")


class TestMiscSettings:
    def test_defaults(self):
        s = Settings(_env_file=None)
        assert s.access_token_expire_minutes == 60 * 24
        assert s.bcrypt_rounds == 12
        assert s.algorithm == "HS256"
        assert s.deployment_target == "standalone"

    def test_cors_origins_from_comma_string(self):
        s = Settings(_env_file=None, cors_origins="http://a.test, http://b.test")
        assert s.cors_origins == ["http://a.test", "http://b.test"]

    def test_api_prefix_is_normalised(self):
        s = Settings(_env_file=None, api_prefix="api/v1/")
        assert s.api_prefix == "/api/v1"

    def test_bcrypt_rounds_bounds(self):
        with pytest.raises(ValueError):
            Settings(_env_file=None, bcrypt_rounds=2)

    def test_serverless_flag(self):
        assert Settings(_env_file=None, deployment_target="serverless").is_serverless is True
