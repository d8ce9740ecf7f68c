from __future__ import annotations

"""Auto-login flag lookup for the signed-in general member."""

from fastapi import APIRouter

from greeny_auth.adapters.api.v1.auth.schemas import AutoLoginOut
from greeny_auth.core.dependencies.auth import CurrentPrincipal
from greeny_auth.infrastructure.dependency_injection.auth_dependencies import AuthService

router = APIRouter()


@router.get(
    "",
    response_model=AutoLoginOut,
    summary="Read the auto-login flag",
    responses={
        401: {"description": "Missing or invalid access token"},
        404: {"description": "Member gone or signed up through a social provider"},
    },
)
async def auto_login(principal: CurrentPrincipal, auth_service: AuthService) -> AutoLoginOut:
    return AutoLoginOut(is_auto=await auth_service.get_auto_login_info(principal.identity_id))
