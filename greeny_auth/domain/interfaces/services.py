"""Interfaces for the cryptographic collaborators of the authentication core."""

from abc import ABC, abstractmethod

from greeny_auth.domain.value_objects.identity import Principal
from greeny_auth.domain.value_objects.token import TokenPair


class ITokenSigner(ABC):
    """Signs, verifies and parses access and refresh tokens.

    Access tokens embed the principal (identity id, email, role) and live for
    a short time. Refresh tokens carry no identity claims and live longer.
    """

    @abstractmethod
    def issue(self, principal: Principal) -> TokenPair:
        """Mints a fresh access token and a fresh refresh token."""
        raise NotImplementedError

    @abstractmethod
    def sign_access(self, principal: Principal) -> str:
        """Mints an access token only."""
        raise NotImplementedError

    @abstractmethod
    def verify(self, token: str) -> bool:
        """Checks signature and expiry.

        Returns:
            ``True`` if the token is well-formed, correctly signed and not
            expired. Never raises.
        """
        raise NotImplementedError

    @abstractmethod
    def parse(self, token: str) -> Principal:
        """Recovers the principal from an access token, tolerating expiry.

        The signature is still checked; only the ``exp`` claim is ignored so
        that an expired access token can be traded in during reissue.

        Raises:
            InvalidTokenError: If the token is garbled, forged or carries no
                identity claims.
        """
        raise NotImplementedError


class IPasswordHasher(ABC):
    @abstractmethod
    def hash(self, plaintext: str) -> str:
        raise NotImplementedError

    @abstractmethod
    def matches(self, plaintext: str, digest: str) -> bool:
        """Verifies ``plaintext`` against ``digest`` in constant time."""
        raise NotImplementedError
