from __future__ import annotations

"""Sign-out endpoint. Drops the member's stored refresh token."""

import structlog
from fastapi import APIRouter, Response, status

from greeny_auth.core.dependencies.auth import CurrentPrincipal
from greeny_auth.infrastructure.dependency_injection.auth_dependencies import AuthService

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.post(
    "",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Sign out the current member",
    responses={401: {"description": "Missing or invalid access token"}},
)
async def sign_out(principal: CurrentPrincipal, auth_service: AuthService) -> Response:
    await auth_service.sign_out(principal.email)
    logger.info("Sign-out request completed", member_id=principal.identity_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
