"""Token value objects returned by the authentication core."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class TokenPair:
    """An access token and the refresh token issued (or reused) with it."""

    access_token: str
    refresh_token: str


@dataclass(frozen=True)
class TokenResponse:
    """Outcome of a sign-in style operation.

    Either both tokens are present, or neither is. Token-less responses are
    returned when consent has not been captured yet (first social sign-in,
    where ``email`` tells the client whom to ask) and for general accounts
    recording their consent.
    """

    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    email: Optional[str] = None

    @classmethod
    def from_pair(cls, pair: TokenPair) -> "TokenResponse":
        return cls(access_token=pair.access_token, refresh_token=pair.refresh_token)

    @classmethod
    def without_tokens(cls, email: Optional[str] = None) -> "TokenResponse":
        return cls(email=email)

    @property
    def has_tokens(self) -> bool:
        return self.access_token is not None and self.refresh_token is not None
