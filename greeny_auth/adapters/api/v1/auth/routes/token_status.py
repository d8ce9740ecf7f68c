from __future__ import annotations

"""Token validity check. Never fails: a bad header simply reads as invalid."""

from typing import Optional

from fastapi import APIRouter, Header

from greeny_auth.adapters.api.v1.auth.schemas import TokenStatusOut
from greeny_auth.infrastructure.dependency_injection.auth_dependencies import AuthService

router = APIRouter()


@router.get("", response_model=TokenStatusOut, summary="Check an Authorization header")
async def token_status(
    auth_service: AuthService,
    authorization: Optional[str] = Header(default=None),
) -> TokenStatusOut:
    return TokenStatusOut(is_valid=auth_service.get_token_status(authorization))
