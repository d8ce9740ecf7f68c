"""Domain interfaces (ports) implemented by the infrastructure layer."""

from .repositories import IIdentityRegistry, IRefreshTokenStore
from .services import IPasswordHasher, ITokenSigner

__all__ = [
    "IIdentityRegistry",
    "IPasswordHasher",
    "IRefreshTokenStore",
    "ITokenSigner",
]
