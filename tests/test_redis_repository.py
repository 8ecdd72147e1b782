from unittest.mock import AsyncMock, MagicMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from catalog_cache.entities import LookupStatus
from catalog_cache.protocols import CacheStore
from catalog_cache.repositories import RedisCacheRepository
from catalog_cache.repositories.redis_repository import FLUSH_SCRIPT


@pytest.fixture
def redis_client():
    client = MagicMock()
    client.get = AsyncMock(return_value=None)
    client.set = AsyncMock(return_value=True)
    client.expire = AsyncMock(return_value=True)
    client.delete = AsyncMock(return_value=1)
    client.eval = AsyncMock(return_value=3)
    client.ping = AsyncMock(return_value=True)
    client.aclose = AsyncMock()
    return client


@pytest.fixture
def repository(redis_client):
    return RedisCacheRepository(redis_client=redis_client, key_prefix="test_cache")


def test_satisfies_protocol(repository):
    assert isinstance(repository, CacheStore)


@pytest.mark.asyncio
async def test_get_hit_uses_prefixed_key(repository, redis_client):
    redis_client.get.return_value = '{"results":[]}'

    lookup = await repository.get("products?page=2")

    redis_client.get.assert_awaited_once_with("test_cache:products?page=2")
    assert lookup.is_hit
    assert lookup.value == '{"results":[]}'


@pytest.mark.asyncio
async def test_get_decodes_bytes(repository, redis_client):
    redis_client.get.return_value = b'{"results":[]}'

    lookup = await repository.get("products")

    assert lookup.value == '{"results":[]}'


@pytest.mark.asyncio
async def test_get_miss(repository):
    lookup = await repository.get("products")

    assert lookup.status is LookupStatus.MISS


@pytest.mark.asyncio
async def test_set_and_expire(repository, redis_client):
    await repository.set("products/categories", "v")
    assert await repository.expire("products/categories", 600) is True

    redis_client.set.assert_awaited_once_with("test_cache:products/categories", "v")
    redis_client.expire.assert_awaited_once_with("test_cache:products/categories", 600)


@pytest.mark.asyncio
async def test_flush_runs_atomic_script_on_namespace(repository, redis_client):
    await repository.flush()

    redis_client.eval.assert_awaited_once_with(FLUSH_SCRIPT, 0, "test_cache:*")


@pytest.mark.asyncio
async def test_get_fails_open_when_redis_down(repository, redis_client):
    redis_client.get.side_effect = RedisConnectionError("connection refused")

    lookup = await repository.get("products")

    assert lookup.status is LookupStatus.STORE_UNAVAILABLE


@pytest.mark.asyncio
async def test_writes_fail_open_when_redis_down(repository, redis_client):
    redis_client.set.side_effect = RedisConnectionError("down")
    redis_client.expire.side_effect = RedisConnectionError("down")
    redis_client.delete.side_effect = RedisConnectionError("down")
    redis_client.eval.side_effect = RedisConnectionError("down")

    await repository.set("products", "v")
    assert await repository.expire("products", 60) is False
    await repository.delete("products")
    await repository.flush()


@pytest.mark.asyncio
async def test_health_check(repository, redis_client):
    assert await repository.health_check() is True

    redis_client.ping.side_effect = RedisConnectionError("down")
    assert await repository.health_check() is False


@pytest.mark.asyncio
async def test_close(repository, redis_client):
    await repository.close()

    redis_client.aclose.assert_awaited_once()
