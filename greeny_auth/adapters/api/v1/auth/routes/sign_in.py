from __future__ import annotations

"""Password sign-in endpoint.

A thin adapter: the orchestrator decides between reusing the stored refresh
token and publishing a new pair.
"""

import structlog
from fastapi import APIRouter, Request, status

from greeny_auth.adapters.api.v1.auth.schemas import SignInRequest, TokenOut
from greeny_auth.core.logging import mask_email
from greeny_auth.infrastructure.dependency_injection.auth_dependencies import AuthService

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.post(
    "",
    response_model=TokenOut,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    summary="Sign in with email and password",
    responses={
        401: {"description": "Wrong password"},
        404: {"description": "No member uses this email"},
    },
)
async def sign_in(request: Request, payload: SignInRequest, auth_service: AuthService) -> TokenOut:
    request_logger = logger.bind(
        endpoint="sign_in",
        client_ip=request.client.host if request.client else "unknown",
    )
    request_logger.info("Sign-in attempt", email=mask_email(payload.email))

    tokens = await auth_service.sign_in_general(
        email=payload.email,
        password=payload.password,
        auto_login=payload.auto_login,
    )

    request_logger.info("Sign-in succeeded", email=mask_email(payload.email))
    return TokenOut.from_domain(tokens)
