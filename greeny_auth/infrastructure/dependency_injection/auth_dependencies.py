"""Dependency injection for the authentication services.

Each factory builds one layer on top of the previous one so that routes
depend only on the domain services, and tests can swap any layer through
``app.dependency_overrides``.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import AsyncSession

from greeny_auth.domain.interfaces import (
    IIdentityRegistry,
    IPasswordHasher,
    IRefreshTokenStore,
    ITokenSigner,
)
from greeny_auth.domain.services.auth import AuthOrchestrator
from greeny_auth.domain.services.member import MemberService
from greeny_auth.infrastructure.database.async_db import get_async_db
from greeny_auth.infrastructure.redis import get_redis
from greeny_auth.infrastructure.repositories import IdentityRegistry, RedisRefreshTokenStore
from greeny_auth.infrastructure.services.authentication import BcryptPasswordHasher, JwtTokenSigner

# ---------------------------------------------------------------------------
# Type aliases for dependency injection
# ---------------------------------------------------------------------------

AsyncDB = Annotated[AsyncSession, Depends(get_async_db)]
RedisClient = Annotated[Redis, Depends(get_redis)]

# ---------------------------------------------------------------------------
# Infrastructure Layer Dependencies
# ---------------------------------------------------------------------------


def get_identity_registry(db: AsyncDB) -> IIdentityRegistry:
    return IdentityRegistry(db)


def get_refresh_token_store(redis: RedisClient) -> IRefreshTokenStore:
    return RedisRefreshTokenStore(redis)


@lru_cache
def get_token_signer() -> ITokenSigner:
    """Process-wide token signer; it holds configuration only."""
    return JwtTokenSigner()


@lru_cache
def get_password_hasher() -> IPasswordHasher:
    return BcryptPasswordHasher()


# ---------------------------------------------------------------------------
# Domain Service Dependencies
# ---------------------------------------------------------------------------


def get_auth_orchestrator(
    registry: Annotated[IIdentityRegistry, Depends(get_identity_registry)],
    token_store: Annotated[IRefreshTokenStore, Depends(get_refresh_token_store)],
    token_signer: Annotated[ITokenSigner, Depends(get_token_signer)],
    password_hasher: Annotated[IPasswordHasher, Depends(get_password_hasher)],
) -> AuthOrchestrator:
    """Factory that wires the authentication orchestrator for one request.

    Returns:
        AuthOrchestrator: Bound to the request's database session and Redis client.
    """
    return AuthOrchestrator(registry, token_store, token_signer, password_hasher)


def get_member_service(
    registry: Annotated[IIdentityRegistry, Depends(get_identity_registry)],
    token_store: Annotated[IRefreshTokenStore, Depends(get_refresh_token_store)],
    password_hasher: Annotated[IPasswordHasher, Depends(get_password_hasher)],
) -> MemberService:
    return MemberService(registry, token_store, password_hasher)


AuthService = Annotated[AuthOrchestrator, Depends(get_auth_orchestrator)]
MemberServiceDep = Annotated[MemberService, Depends(get_member_service)]
