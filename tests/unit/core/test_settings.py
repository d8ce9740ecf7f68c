import pytest
from pydantic import ValidationError

from greeny_auth.core.config.auth import AuthSettings
from greeny_auth.core.config.database import DatabaseSettings
from greeny_auth.core.config.redis import RedisSettings
from greeny_auth.core.config.settings import settings


def test_test_environment_is_loaded():
    assert settings.is_test
    assert settings.DATABASE_URL.startswith("sqlite+aiosqlite://")
    assert settings.BCRYPT_WORK_FACTOR == 4


def test_database_url_is_assembled_from_parts(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)

    db = DatabaseSettings(
        POSTGRES_USER="greeny",
        POSTGRES_PASSWORD="secret",
        POSTGRES_HOST="db",
        POSTGRES_PORT=5433,
        POSTGRES_DB="market",
    )

    assert db.DATABASE_URL == "postgresql+asyncpg://greeny:secret@db:5433/market"


def test_redis_url_is_assembled_with_tls_and_password(monkeypatch):
    monkeypatch.delenv("REDIS_URL", raising=False)

    redis = RedisSettings(REDIS_HOST="cache", REDIS_PASSWORD="pw", REDIS_SSL=True)

    assert redis.REDIS_URL == "rediss://:pw@cache:6379/0"


def test_short_jwt_secret_is_rejected():
    with pytest.raises(ValidationError):
        AuthSettings(JWT_SECRET_KEY="too-short")


def test_only_hmac_algorithms_are_accepted():
    with pytest.raises(ValidationError):
        AuthSettings(JWT_SECRET_KEY="x" * 64, JWT_ALGORITHM="RS256")


def test_missing_required_fields_only_warn_in_test_mode():
    relaxed = settings.model_copy(update={"REDIS_URL": ""})

    relaxed.validate_required_fields()


def test_missing_required_fields_raise_outside_test_mode():
    strict = settings.model_copy(update={"APP_ENV": "production", "REDIS_URL": ""})

    with pytest.raises(ValueError, match="REDIS_URL"):
        strict.validate_required_fields()
