"""Redis-backed refresh-token store.

One string key per member email holds the member's active refresh token:

    refresh_token:<email>  ->  <refresh token>

Keys carry no TTL. A stored token's usability is decided by its own ``exp``
claim, and the authentication core deletes or overwrites stale entries when
it meets them.
"""

from typing import Optional

from redis.asyncio import Redis
from structlog import get_logger

from greeny_auth.core.config.settings import settings
from greeny_auth.core.logging import mask_email
from greeny_auth.domain.interfaces.repositories import IRefreshTokenStore

logger = get_logger(__name__)


class RedisRefreshTokenStore(IRefreshTokenStore):
    """Refresh-token store on an async Redis client.

    Attributes:
        redis_client (Redis): Async Redis client.
        key_prefix (str): Prefix prepended to the email to build the key.
    """

    def __init__(self, redis_client: Redis, key_prefix: Optional[str] = None):
        self.redis_client = redis_client
        self.key_prefix = key_prefix if key_prefix is not None else settings.REFRESH_TOKEN_KEY_PREFIX

    async def get(self, email: str) -> Optional[str]:
        value = await self.redis_client.get(self._key(email))
        if isinstance(value, bytes):
            value = value.decode()
        logger.debug("Refresh token lookup", email=mask_email(email), found=value is not None)
        return value

    async def save(self, email: str, token: str) -> None:
        await self.redis_client.set(self._key(email), token)
        logger.debug("Refresh token stored", email=mask_email(email))

    async def delete(self, email: str) -> None:
        removed = await self.redis_client.delete(self._key(email))
        logger.debug("Refresh token deleted", email=mask_email(email), removed=bool(removed))

    async def exists(self, email: str) -> bool:
        return await self.redis_client.exists(self._key(email)) > 0

    def _key(self, email: str) -> str:
        """Generate the Redis key under which the member's refresh token is stored."""
        return f"{self.key_prefix}{email}"
