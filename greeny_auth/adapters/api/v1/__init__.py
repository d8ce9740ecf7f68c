"""API v1 router configuration.
"""

from fastapi import APIRouter

from .auth import router as auth_router
from .health import router as health_router
from .members import router as members_router

api_router = APIRouter()

api_router.include_router(health_router, prefix="/health", tags=["health"])
api_router.include_router(auth_router)
api_router.include_router(members_router)
