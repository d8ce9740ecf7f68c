from .requests import (
    AgreementRequest,
    ChangePasswordRequest,
    ReissueRequest,
    SignInRequest,
    SignUpRequest,
)
from .responses import AutoLoginOut, MemberInfoOut, TokenOut, TokenStatusOut

__all__ = [
    "AgreementRequest",
    "AutoLoginOut",
    "ChangePasswordRequest",
    "MemberInfoOut",
    "ReissueRequest",
    "SignInRequest",
    "SignUpRequest",
    "TokenOut",
    "TokenStatusOut",
]
