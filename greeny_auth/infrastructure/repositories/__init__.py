from .identity_registry import IdentityRegistry
from .refresh_token_store import RedisRefreshTokenStore

__all__ = ["IdentityRegistry", "RedisRefreshTokenStore"]
