from __future__ import annotations

"""Endpoints acting on the signed-in member.

Every route resolves the bearer token into a :class:`Principal` and hands its
id to :class:`MemberService`; nothing here reads ambient request state.
"""

import structlog
from fastapi import APIRouter, Response, status

from greeny_auth.adapters.api.v1.auth.schemas import ChangePasswordRequest, MemberInfoOut
from greeny_auth.core.dependencies.auth import CurrentPrincipal
from greeny_auth.infrastructure.dependency_injection.auth_dependencies import MemberServiceDep

logger = structlog.get_logger(__name__)
router = APIRouter(prefix="/members", tags=["members"])


@router.get(
    "/me",
    response_model=MemberInfoOut,
    response_model_exclude_none=True,
    summary="Read the current member",
)
async def read_me(principal: CurrentPrincipal, member_service: MemberServiceDep) -> MemberInfoOut:
    info = await member_service.get_member_info(principal.identity_id)
    return MemberInfoOut.from_domain(info)


@router.put(
    "/me/password",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Change the current member's password",
    responses={
        401: {"description": "Current password does not match"},
        404: {"description": "Member signed up through a social provider"},
    },
)
async def change_password(
    payload: ChangePasswordRequest,
    principal: CurrentPrincipal,
    member_service: MemberServiceDep,
) -> Response:
    await member_service.change_password(
        principal.identity_id, payload.current_password, payload.new_password
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/me",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Withdraw the current member",
)
async def withdraw(principal: CurrentPrincipal, member_service: MemberServiceDep) -> Response:
    await member_service.withdraw(principal.identity_id)
    logger.info("Member withdrawal completed", member_id=principal.identity_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
