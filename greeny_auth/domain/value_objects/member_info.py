"""Read model describing a member to the member itself."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class MemberInfo:
    """Profile details for general members, provider name for social members."""

    email: Optional[str] = None
    name: Optional[str] = None
    phone: Optional[str] = None
    birth: Optional[str] = None
    provider: Optional[str] = None
