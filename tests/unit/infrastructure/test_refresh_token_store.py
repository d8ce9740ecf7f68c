from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from redis.asyncio import Redis

from greeny_auth.infrastructure.repositories import RedisRefreshTokenStore


@pytest_asyncio.fixture
async def redis_client():
    """Provides a mocked asynchronous Redis client."""
    mock_redis = AsyncMock(spec=Redis)
    mock_redis.get = AsyncMock(return_value=None)
    mock_redis.set = AsyncMock(return_value=True)
    mock_redis.delete = AsyncMock(return_value=1)
    mock_redis.exists = AsyncMock(return_value=0)
    return mock_redis


@pytest.fixture
def store(redis_client) -> RedisRefreshTokenStore:
    return RedisRefreshTokenStore(redis_client)


@pytest.mark.asyncio
async def test_save_writes_prefixed_key_without_ttl(store, redis_client):
    await store.save("greeny@example.com", "refresh-token")

    redis_client.set.assert_awaited_once_with("refresh_token:greeny@example.com", "refresh-token")
    redis_client.setex.assert_not_called()


@pytest.mark.asyncio
async def test_get_returns_none_when_missing(store, redis_client):
    assert await store.get("greeny@example.com") is None
    redis_client.get.assert_awaited_once_with("refresh_token:greeny@example.com")


@pytest.mark.asyncio
async def test_get_decodes_bytes(store, redis_client):
    redis_client.get.return_value = b"refresh-token"

    assert await store.get("greeny@example.com") == "refresh-token"


@pytest.mark.asyncio
async def test_delete_removes_key(store, redis_client):
    await store.delete("greeny@example.com")

    redis_client.delete.assert_awaited_once_with("refresh_token:greeny@example.com")


@pytest.mark.asyncio
async def test_exists_reflects_redis_count(store, redis_client):
    assert await store.exists("greeny@example.com") is False

    redis_client.exists.return_value = 1
    assert await store.exists("greeny@example.com") is True


@pytest.mark.asyncio
async def test_custom_prefix(redis_client):
    store = RedisRefreshTokenStore(redis_client, key_prefix="rt:")

    await store.save("greeny@example.com", "refresh-token")

    redis_client.set.assert_awaited_once_with("rt:greeny@example.com", "refresh-token")
