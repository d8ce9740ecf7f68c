from .member import (
    Member,
    MemberAgreement,
    MemberGeneral,
    MemberProfile,
    MemberSocial,
    Provider,
    Role,
)

__all__ = [
    "Member",
    "MemberAgreement",
    "MemberGeneral",
    "MemberProfile",
    "MemberSocial",
    "Provider",
    "Role",
]
