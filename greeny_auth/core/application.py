"""Application factory for creating and configuring the FastAPI application."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from greeny_auth.adapters.api.v1 import api_router
from greeny_auth.core.config.settings import settings
from greeny_auth.core.handlers import register_exception_handlers
from greeny_auth.core.lifecycle import create_lifespan_manager


def create_application() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        FastAPI: The configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="Member authentication and session tokens for the Greeny marketplace.",
        debug=settings.DEBUG,
        lifespan=create_lifespan_manager(),
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Authorization", "Content-Type"],
    )

    register_exception_handlers(app)
    app.include_router(api_router, prefix="/api/v1")

    return app
