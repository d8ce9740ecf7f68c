"""
Redis Connection Module

This module provides the asynchronous Redis client backing the refresh-token
store. The client is provided as a FastAPI dependency, which closes the
connection after the request.

**Security Note**: Use ``rediss://`` (REDIS_SSL) when Redis is reached over an
untrusted network, and never log the connection URL.
"""

from typing import AsyncGenerator

from redis.asyncio import Redis
from structlog import get_logger

from greeny_auth.core.config.settings import settings

logger = get_logger(__name__)


async def get_redis() -> AsyncGenerator[Redis, None]:
    """
    Provides an asynchronous Redis client.

    Responses are decoded to ``str`` so stored refresh tokens compare directly
    with the ones clients present.

    Yields:
        Redis: An asynchronous Redis client instance.
    """
    redis = Redis.from_url(settings.REDIS_URL, encoding="utf-8", decode_responses=True)
    logger.debug("Redis connection created")
    try:
        yield redis
    finally:
        await redis.aclose()
        logger.debug("Redis connection closed")
