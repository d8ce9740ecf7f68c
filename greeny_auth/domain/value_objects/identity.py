"""Identity value objects.

The split between password accounts and social accounts is expressed as a
tagged union: an :class:`Identity` carries exactly one ``account`` which is
either a :class:`GeneralAccount` (wrapping the password :class:`Credential`)
or a :class:`SocialAccount` (naming the provider). The variant is chosen when
the identity is created and never reinterpreted afterwards, so the two login
paths cannot drift into a state where both, or neither, apply.
"""

from dataclasses import dataclass
from typing import Union

from greeny_auth.domain.entities.member import Provider, Role


@dataclass(frozen=True)
class Credential:
    """Password credential of a general account."""

    identity_id: int
    password_hash: str
    auto_login: bool = False


@dataclass(frozen=True)
class GeneralAccount:
    credential: Credential


@dataclass(frozen=True)
class SocialAccount:
    provider: Provider


Account = Union[GeneralAccount, SocialAccount]


@dataclass(frozen=True)
class Identity:
    """The canonical account record as seen by the authentication core.

    Attributes:
        id: Registry identifier of the member.
        email: Unique, normalized email address.
        role: The member's role.
        account: Which login path this identity uses, with its path data.
    """

    id: int
    email: str
    role: Role
    account: Account

    @property
    def is_general(self) -> bool:
        return isinstance(self.account, GeneralAccount)

    @property
    def is_social(self) -> bool:
        return isinstance(self.account, SocialAccount)

    @property
    def credential(self) -> Credential | None:
        """The password credential, or ``None`` for social identities."""
        if isinstance(self.account, GeneralAccount):
            return self.account.credential
        return None

    @property
    def subject(self) -> str:
        """The identity id as it appears in a token ``sub`` claim."""
        return str(self.id)

    def to_principal(self) -> "Principal":
        return Principal(identity_id=self.id, email=self.email, role=self.role)


@dataclass(frozen=True)
class Principal:
    """Who a token was issued to.

    This is the value threaded explicitly into every operation that acts on
    behalf of a signed-in member; there is no ambient "current user".
    """

    identity_id: int
    email: str
    role: Role = Role.USER

    @property
    def subject(self) -> str:
        return str(self.identity_id)


def normalize_email(email: str) -> str:
    """Lowercase and trim an email so lookups and storage keys agree."""
    return email.strip().lower()
