from __future__ import annotations

"""Consent capture endpoint.

Social members receive their first token pair here. General members get an
empty body and sign in separately.
"""

from fastapi import APIRouter, status

from greeny_auth.adapters.api.v1.auth.schemas import AgreementRequest, TokenOut
from greeny_auth.infrastructure.dependency_injection.auth_dependencies import AuthService

router = APIRouter()


@router.post(
    "",
    response_model=TokenOut,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    summary="Record sign-up consent",
    responses={404: {"description": "No member uses this email"}},
)
async def agreement(payload: AgreementRequest, auth_service: AuthService) -> TokenOut:
    tokens = await auth_service.agreement_in_sign_up(
        email=payload.email,
        personal_info=payload.personal_info,
        third_party=payload.third_party,
    )
    return TokenOut.from_domain(tokens)
