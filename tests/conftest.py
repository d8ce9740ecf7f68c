import os

# Settings are read once, at import time of greeny_auth.core.config.settings,
# so the test environment has to be in place before anything imports it.
os.environ["APP_ENV"] = "test"
os.environ["JWT_SECRET_KEY"] = "test-only-signing-secret-" + "x" * 48
os.environ["BCRYPT_WORK_FACTOR"] = "4"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./greeny_auth_test.db"
os.environ["REDIS_URL"] = "redis://localhost:6379/15"
os.environ["LOG_JSON"] = "false"

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from greeny_auth.domain import entities  # noqa: F401
from greeny_auth.domain.services.auth import AuthOrchestrator
from greeny_auth.domain.services.member import MemberService
from greeny_auth.infrastructure.services.authentication import (
    BcryptPasswordHasher,
    JwtTokenSigner,
)
from tests.utils.in_memory import InMemoryIdentityRegistry, InMemoryRefreshTokenStore


@pytest.fixture
def token_signer() -> JwtTokenSigner:
    return JwtTokenSigner()


@pytest.fixture(scope="session")
def password_hasher() -> BcryptPasswordHasher:
    return BcryptPasswordHasher(rounds=4)


@pytest.fixture
def registry() -> InMemoryIdentityRegistry:
    return InMemoryIdentityRegistry()


@pytest.fixture
def token_store() -> InMemoryRefreshTokenStore:
    return InMemoryRefreshTokenStore()


@pytest.fixture
def orchestrator(registry, token_store, token_signer, password_hasher) -> AuthOrchestrator:
    return AuthOrchestrator(registry, token_store, token_signer, password_hasher)


@pytest.fixture
def member_service(registry, token_store, password_hasher) -> MemberService:
    return MemberService(registry, token_store, password_hasher)


@pytest_asyncio.fixture
async def db_session():
    """A fresh in-memory SQLite schema per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_maker() as session:
        yield session

    await engine.dispose()
