"""Redis implementation of CacheStore.

Opt-in backend (``CACHE_BACKEND=redis``). Keys are namespaced under a
prefix so a flush only removes this service's entries. Every Redis failure
is logged and absorbed: the cache fails open.
"""

from collections.abc import Awaitable
from typing import Any, TypeVar

import redis.asyncio as redis
from redis.exceptions import RedisError

from catalog_cache.config import Settings, get_redis_client, settings
from catalog_cache.entities import CacheLookup
from catalog_cache.exceptions import CacheUnavailableError
from catalog_cache.logging import get_logger

T = TypeVar("T")

logger = get_logger("catalog_cache.store")

# KEYS inside a script runs atomically with the DEL calls, so no reader
# observes a half-flushed namespace.
FLUSH_SCRIPT = """
local keys = redis.call('KEYS', ARGV[1])
for i = 1, #keys, 5000 do
    redis.call('DEL', unpack(keys, i, math.min(i + 4999, #keys)))
end
return #keys
"""


class RedisCacheRepository:
    """Redis-backed cache store.

    This class satisfies the CacheStore protocol through structural
    typing - no explicit inheritance needed.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        key_prefix: str | None = None,
    ) -> None:
        """Initialize the Redis cache repository.

        Args:
            redis_client: Async Redis client instance. If None, creates default.
            key_prefix: Namespace for all keys. Defaults to settings.
        """
        self._client = redis_client or get_redis_client()
        self._prefix = key_prefix or settings.cache_key_prefix

    @classmethod
    def create(cls, config: Settings | None = None) -> "RedisCacheRepository":
        """Factory method to create RedisCacheRepository from settings.

        Args:
            config: Settings to read the Redis URL and prefix from. If None,
                uses the global settings.

        Returns:
            Configured RedisCacheRepository
        """
        config = config or settings
        return cls(redis_client=get_redis_client(config), key_prefix=config.cache_key_prefix)

    def _key(self, key: str) -> str:
        return f"{self._prefix}:{key}"

    async def _call(self, operation: str, awaitable: Awaitable[T]) -> T:
        try:
            return await awaitable
        except (RedisError, OSError) as e:
            raise CacheUnavailableError(f"Redis {operation} failed: {e}") from e

    async def get(self, key: str) -> CacheLookup:
        try:
            value: Any = await self._call("get", self._client.get(self._key(key)))
        except CacheUnavailableError as e:
            logger.warning("Cache store unavailable", operation="get", key=key, error=str(e))
            return CacheLookup.unavailable()

        if value is None:
            return CacheLookup.miss()
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return CacheLookup.hit(value)

    async def set(self, key: str, value: str) -> None:
        try:
            await self._call("set", self._client.set(self._key(key), value))
        except CacheUnavailableError as e:
            logger.warning("Cache store unavailable", operation="set", key=key, error=str(e))

    async def expire(self, key: str, ttl: int) -> bool:
        try:
            return bool(await self._call("expire", self._client.expire(self._key(key), ttl)))
        except CacheUnavailableError as e:
            logger.warning("Cache store unavailable", operation="expire", key=key, error=str(e))
            return False

    async def delete(self, key: str) -> None:
        try:
            await self._call("delete", self._client.delete(self._key(key)))
        except CacheUnavailableError as e:
            logger.warning("Cache store unavailable", operation="delete", key=key, error=str(e))

    async def flush(self) -> None:
        try:
            count = await self._call("flush", self._client.eval(FLUSH_SCRIPT, 0, f"{self._prefix}:*"))
        except CacheUnavailableError as e:
            logger.error("Cache flush failed", error=str(e))
            return
        logger.info("Cache flushed", entries=count)

    async def health_check(self) -> bool:
        try:
            return bool(await self._call("ping", self._client.ping()))
        except CacheUnavailableError:
            return False

    async def get_stats(self) -> dict:
        stats: dict[str, Any] = {"backend": "redis", "key_prefix": self._prefix}
        try:
            count = 0
            async for _ in self._client.scan_iter(match=f"{self._prefix}:*"):
                count += 1
            stats["total_entries"] = count
        except (RedisError, OSError) as e:
            stats["error"] = str(e)
        return stats

    async def close(self) -> None:
        await self._client.aclose()
