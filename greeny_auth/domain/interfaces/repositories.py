"""Repository interfaces for abstracting data persistence in the domain layer.

This module defines the abstract base classes (interfaces) the authentication
core talks to. The concrete implementations live in the ``infrastructure``
layer: SQLAlchemy for the identity registry and Redis for refresh tokens.

Lookups return ``None`` when a record is absent. Deciding whether absence is
an error is left to the domain services.
"""

from abc import ABC, abstractmethod
from typing import Optional

from greeny_auth.domain.entities.member import MemberAgreement, MemberProfile, Provider
from greeny_auth.domain.value_objects.identity import Identity


class IIdentityRegistry(ABC):
    """One capability interface over every identity-related record.

    Identity, credential, social link, profile and agreement rows are all
    reached through this registry. Each mutating method is a single unit of
    work: either all of its writes become visible or none do.
    """

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[Identity]:
        """Retrieves an identity by email (case-insensitively).

        Returns:
            The identity with its account variant resolved, or ``None``.
        """
        raise NotImplementedError

    @abstractmethod
    async def get_by_id(self, identity_id: int) -> Optional[Identity]:
        raise NotImplementedError

    @abstractmethod
    async def exists_by_email(self, email: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    async def create_general(
        self, email: str, password_hash: str, name: str, phone: str, birth: str
    ) -> Identity:
        """Creates a general identity with its credential and profile.

        Args:
            email: The email to register.
            password_hash: Already-hashed password.
            name: Member's name for the profile.
            phone: Member's phone number for the profile.
            birth: Member's birth date for the profile.

        Returns:
            The created identity. Auto-login starts disabled.
        """
        raise NotImplementedError

    @abstractmethod
    async def create_social(self, email: str, provider: Provider) -> Identity:
        """Creates a social identity with its provider link.

        No profile and no agreement are created.
        """
        raise NotImplementedError

    @abstractmethod
    async def update_password(self, identity_id: int, password_hash: str) -> None:
        raise NotImplementedError

    @abstractmethod
    async def update_auto_login(self, identity_id: int, auto_login: bool) -> None:
        raise NotImplementedError

    @abstractmethod
    async def get_profile(self, identity_id: int) -> Optional[MemberProfile]:
        raise NotImplementedError

    @abstractmethod
    async def get_agreement(self, identity_id: int) -> Optional[MemberAgreement]:
        raise NotImplementedError

    @abstractmethod
    async def has_agreement(self, identity_id: int) -> bool:
        raise NotImplementedError

    @abstractmethod
    async def save_agreement(
        self, identity_id: int, personal_info: bool, third_party: bool
    ) -> MemberAgreement:
        """Records consent answers, keeping at most one agreement per identity.

        If an agreement already exists its flags are overwritten instead of a
        second row being created.
        """
        raise NotImplementedError

    @abstractmethod
    async def delete(self, identity_id: int) -> None:
        """Deletes the identity together with every record hanging off it."""
        raise NotImplementedError


class IRefreshTokenStore(ABC):
    """Single-value-per-identity store for the active refresh token.

    The store is a pure lookup/overwrite table keyed by email. It does not
    enforce expiry: whether a stored token is still usable is decided by the
    token's own ``exp`` claim through the token signer.
    """

    @abstractmethod
    async def get(self, email: str) -> Optional[str]:
        raise NotImplementedError

    @abstractmethod
    async def save(self, email: str, token: str) -> None:
        """Stores ``token`` for ``email``, replacing any previous value."""
        raise NotImplementedError

    @abstractmethod
    async def delete(self, email: str) -> None:
        raise NotImplementedError

    @abstractmethod
    async def exists(self, email: str) -> bool:
        raise NotImplementedError
