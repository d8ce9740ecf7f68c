from __future__ import annotations

"""Authentication router package: bundles sign-up, sign-in and token endpoints."""

from fastapi import APIRouter

from .routes import agreement as agreement_route
from .routes import auto_login as auto_login_route
from .routes import reissue as reissue_route
from .routes import sign_in as sign_in_route
from .routes import sign_out as sign_out_route
from .routes import sign_up as sign_up_route
from .routes import token_status as token_status_route

router = APIRouter(prefix="/auth", tags=["auth"])

# Delegate to sub-routers ----------------------------------------------------

router.include_router(sign_up_route.router, prefix="/sign-up")
router.include_router(sign_in_route.router, prefix="/sign-in")
router.include_router(agreement_route.router, prefix="/agreement")
router.include_router(reissue_route.router, prefix="/reissue")
router.include_router(token_status_route.router, prefix="/token-status")
router.include_router(auto_login_route.router, prefix="/auto-login")
router.include_router(sign_out_route.router, prefix="/sign-out")

__all__ = ["router"]
