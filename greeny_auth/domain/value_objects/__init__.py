from .identity import (
    Account,
    Credential,
    GeneralAccount,
    Identity,
    Principal,
    SocialAccount,
    normalize_email,
)
from .member_info import MemberInfo
from .password import MAX_PASSWORD_BYTES, ensure_password_storable, password_byte_length
from .token import TokenPair, TokenResponse

__all__ = [
    "MAX_PASSWORD_BYTES",
    "Account",
    "Credential",
    "GeneralAccount",
    "Identity",
    "MemberInfo",
    "Principal",
    "SocialAccount",
    "TokenPair",
    "TokenResponse",
    "ensure_password_storable",
    "normalize_email",
    "password_byte_length",
]
