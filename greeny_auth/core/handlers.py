"""
Global exception handlers for the FastAPI application.

Each exception family of :mod:`greeny_auth.core.exceptions` is translated
into one HTTP status with a ``{"detail": ..., "code": ...}`` body.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette import status
from structlog import get_logger

from greeny_auth.core.exceptions import (
    AuthenticationError,
    ConflictError,
    DatabaseError,
    GreenyError,
    NotFoundError,
    ValidationError,
)

__all__ = [
    "authentication_error_handler",
    "conflict_error_handler",
    "database_error_handler",
    "greeny_error_handler",
    "not_found_error_handler",
    "register_exception_handlers",
    "validation_error_handler",
]

logger = get_logger(__name__)


def _error_response(status_code: int, exc: GreenyError) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "code": exc.code},
    )


def _client_host(request: Request) -> str:
    return request.client.host if request.client else "unknown"


async def authentication_error_handler(request: Request, exc: AuthenticationError) -> JSONResponse:
    """Handles `AuthenticationError`, returning a `401 Unauthorized`.

    Covers wrong passwords, refresh-token owner mismatch and unreadable
    tokens. The body never says which check failed beyond the error code.
    """
    logger.warning(
        "Authentication failure",
        error=exc.code,
        client_ip=_client_host(request),
        path=request.url.path,
    )
    return _error_response(status.HTTP_401_UNAUTHORIZED, exc)


async def not_found_error_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    """Handles `NotFoundError`, returning a `404 Not Found`."""
    logger.warning("Resource not found", error=exc.code, path=request.url.path)
    return _error_response(status.HTTP_404_NOT_FOUND, exc)


async def conflict_error_handler(request: Request, exc: ConflictError) -> JSONResponse:
    """Handles `ConflictError`, returning a `409 Conflict`."""
    logger.warning("Conflicting request", error=exc.code, path=request.url.path)
    return _error_response(status.HTTP_409_CONFLICT, exc)


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    """Handles `ValidationError`, returning a `422 Unprocessable Entity`."""
    logger.warning("Input rejected by domain rules", error=exc.code, path=request.url.path)
    return _error_response(status.HTTP_422_UNPROCESSABLE_ENTITY, exc)


async def database_error_handler(request: Request, exc: DatabaseError) -> JSONResponse:
    """Handles `DatabaseError`, returning a `500 Internal Server Error`."""
    logger.error("Database error", error=exc.code, detail=exc.message, path=request.url.path)
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, exc)


async def greeny_error_handler(request: Request, exc: GreenyError) -> JSONResponse:
    """Fallback for `GreenyError` subclasses without a dedicated handler."""
    logger.error("Unhandled application error", error=exc.code, path=request.url.path)
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, exc)


def register_exception_handlers(app: FastAPI) -> None:
    """Registers all custom exception handlers with the FastAPI application.

    Starlette resolves handlers along the exception's MRO, so registering the
    families is enough for every concrete subclass.
    """
    app.add_exception_handler(AuthenticationError, authentication_error_handler)
    app.add_exception_handler(NotFoundError, not_found_error_handler)
    app.add_exception_handler(ConflictError, conflict_error_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(DatabaseError, database_error_handler)
    app.add_exception_handler(GreenyError, greeny_error_handler)
