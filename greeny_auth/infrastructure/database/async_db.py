from __future__ import annotations

"""
Asynchronous Database Utilities Module

This module provides the asynchronous SQLAlchemy engine and session factory the
identity registry runs on. PostgreSQL is reached through ``asyncpg``; test
suites point ``DATABASE_URL`` at ``sqlite+aiosqlite``.

**Security Note**: Ensure that the database connection URL (DATABASE_URL) is
configured for SSL/TLS when connecting over untrusted networks. Avoid logging
connection details.

Key Components:
    - engine: The asynchronous SQLAlchemy engine.
    - AsyncSessionFactory: A factory for creating asynchronous database sessions.
    - get_async_db: A FastAPI dependency yielding one session per request.
    - create_async_db_and_tables: Utility to create tables using the async engine.
"""

from typing import AsyncGenerator

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel
from structlog import get_logger

from greeny_auth.core.config.settings import settings
from greeny_auth.domain import entities  # noqa: F401  registers tables on SQLModel.metadata

logger = get_logger(__name__)


def _engine_options(url: str) -> dict:
    """Pool options for server databases; SQLite gets the driver defaults."""
    if make_url(url).get_backend_name() == "sqlite":
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_size": settings.POSTGRES_POOL_SIZE,
        "max_overflow": settings.POSTGRES_MAX_OVERFLOW,
        "pool_timeout": settings.POSTGRES_POOL_TIMEOUT,
        "pool_pre_ping": True,
    }


engine = create_async_engine(settings.DATABASE_URL, echo=False, **_engine_options(settings.DATABASE_URL))

AsyncSessionFactory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that yields an AsyncSession.

    The transaction is rolled back if the request fails and the session is
    always closed.

    Yields:
        AsyncSession: An asynchronous database session for use in FastAPI routes.
    """
    async with AsyncSessionFactory() as session:
        logger.debug("Async database session created")
        try:
            yield session
        except Exception:  # noqa: BLE001 – Any DB error must trigger rollback
            await session.rollback()
            logger.error("Async database session rollback due to error")
            raise
        finally:
            await session.close()
            logger.debug("Async database session closed")


async def create_async_db_and_tables() -> None:
    """
    Create tables using the async engine.

    Used at startup outside production, where the Alembic migration owns the
    schema.
    """
    logger.info("Creating async database tables")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("Async database tables created")
