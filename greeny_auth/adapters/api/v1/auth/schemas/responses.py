from __future__ import annotations

"""Response Pydantic models for authentication and member endpoints."""

from typing import Optional

from pydantic import BaseModel

from greeny_auth.domain.value_objects.member_info import MemberInfo
from greeny_auth.domain.value_objects.token import TokenResponse


class TokenOut(BaseModel):
    """Access and refresh tokens. Both are omitted while consent is pending."""

    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    email: Optional[str] = None

    @classmethod
    def from_domain(cls, response: TokenResponse) -> "TokenOut":
        return cls(
            access_token=response.access_token,
            refresh_token=response.refresh_token,
            email=response.email,
        )


class TokenStatusOut(BaseModel):
    is_valid: bool


class AutoLoginOut(BaseModel):
    is_auto: bool


class MemberInfoOut(BaseModel):
    """General members get their profile, social members their provider."""

    email: Optional[str] = None
    name: Optional[str] = None
    phone: Optional[str] = None
    birth: Optional[str] = None
    provider: Optional[str] = None

    @classmethod
    def from_domain(cls, info: MemberInfo) -> "MemberInfoOut":
        return cls(
            email=info.email,
            name=info.name,
            phone=info.phone,
            birth=info.birth,
            provider=info.provider,
        )
