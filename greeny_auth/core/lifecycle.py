"""Application lifecycle management.

This module handles application startup and shutdown events, ensuring proper
initialization and cleanup of application resources.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from structlog import get_logger

from greeny_auth.core.config.settings import settings
from greeny_auth.core.logging import configure_logging
from greeny_auth.infrastructure.database import create_async_db_and_tables, engine

logger = get_logger(__name__)


def create_lifespan_manager():
    """Create the application lifespan manager.

    Returns:
        AsyncContextManager: The lifespan manager for the FastAPI application
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Configures logging and the schema on startup, disposes the engine on shutdown.

        Tables are created directly only outside production; production
        schemas are owned by the Alembic migrations.
        """
        configure_logging()
        if settings.APP_ENV != "production":
            await create_async_db_and_tables()
        logger.info("application_startup", env=settings.APP_ENV, version=settings.VERSION)

        yield

        await engine.dispose()
        logger.info("application_shutdown", env=settings.APP_ENV)

    return lifespan
