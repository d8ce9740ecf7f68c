from __future__ import annotations

"""Access-token reissue endpoint."""

from fastapi import APIRouter, status

from greeny_auth.adapters.api.v1.auth.schemas import ReissueRequest, TokenOut
from greeny_auth.infrastructure.dependency_injection.auth_dependencies import AuthService

router = APIRouter()


@router.post(
    "",
    response_model=TokenOut,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    summary="Reissue an access token",
    description=(
        "Trades an access token, expired or not, plus the refresh token for a new "
        "access token. An invalid refresh token rotates the whole pair; a valid "
        "refresh token that is not the stored one is rejected."
    ),
    responses={
        401: {"description": "Unreadable access token or refresh token owner mismatch"},
        404: {"description": "No refresh token stored for the member"},
    },
)
async def reissue(payload: ReissueRequest, auth_service: AuthService) -> TokenOut:
    tokens = await auth_service.reissue(payload.access_token, payload.refresh_token)
    return TokenOut.from_domain(tokens)
