from __future__ import annotations

"""Registration endpoint for general (email and password) members."""

import structlog
from fastapi import APIRouter, Response, status

from greeny_auth.adapters.api.v1.auth.schemas import SignUpRequest
from greeny_auth.infrastructure.dependency_injection.auth_dependencies import AuthService

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_class=Response,
    summary="Register a general member",
    responses={
        201: {"description": "Member created; sign in to obtain tokens"},
        409: {"description": "Email already in use"},
    },
)
async def sign_up(payload: SignUpRequest, auth_service: AuthService) -> Response:
    """Creates the member, its credential and profile. No tokens are issued."""
    identity = await auth_service.sign_up(
        email=payload.email,
        password=payload.password,
        name=payload.name,
        phone=payload.phone,
        birth=payload.birth,
    )
    logger.info("Sign-up request completed", member_id=identity.id)
    return Response(status_code=status.HTTP_201_CREATED)
