"""In-memory implementation of CacheStore.

Entries live only in process memory and vanish on restart. A single
``asyncio.Lock`` serializes access, so a flush is never observed half done.
"""

import asyncio
import time
from collections.abc import Callable

from catalog_cache.entities import CacheEntryEntity, CacheLookup
from catalog_cache.logging import get_logger

logger = get_logger("catalog_cache.store")


class InMemoryCacheRepository:
    """Dict-backed cache store with lazy expiry.

    This class satisfies the CacheStore protocol through structural
    typing - no explicit inheritance needed.

    Expired entries are dropped when read; ``cleanup`` sweeps the rest.
    """

    def __init__(self, clock: Callable[[], float] | None = None, cleanup_interval: float = 60.0) -> None:
        """Initialize the in-memory store.

        Args:
            clock: Source of the current Unix time. Defaults to time.time.
            cleanup_interval: Seconds between sweeps in ``run_cleanup``.
        """
        self._entries: dict[str, CacheEntryEntity] = {}
        self._lock = asyncio.Lock()
        self._clock = clock or time.time
        self.cleanup_interval = cleanup_interval

    async def get(self, key: str) -> CacheLookup:
        async with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return CacheLookup.miss()
            if entry.is_expired(self._clock()):
                del self._entries[key]
                return CacheLookup.miss()
            return CacheLookup.hit(entry.value)

    async def set(self, key: str, value: str) -> None:
        async with self._lock:
            self._entries[key] = CacheEntryEntity(value=value)

    async def expire(self, key: str, ttl: int) -> bool:
        async with self._lock:
            entry = self._entries.get(key)
            if entry is None or entry.is_expired(self._clock()):
                return False
            self._entries[key] = CacheEntryEntity(value=entry.value, expires_at=self._clock() + ttl)
            return True

    async def delete(self, key: str) -> None:
        async with self._lock:
            self._entries.pop(key, None)

    async def flush(self) -> None:
        async with self._lock:
            count = len(self._entries)
            self._entries = {}
        logger.info("Cache flushed", entries=count)

    async def cleanup(self) -> int:
        """Remove every expired entry.

        Returns:
            Number of entries removed
        """
        async with self._lock:
            now = self._clock()
            expired_keys = [k for k, v in self._entries.items() if v.is_expired(now)]
            for key in expired_keys:
                del self._entries[key]
        if expired_keys:
            logger.debug("Expired entries swept", entries=len(expired_keys))
        return len(expired_keys)

    async def run_cleanup(self) -> None:
        """Sweep expired entries forever; run as a background task."""
        while True:
            await asyncio.sleep(self.cleanup_interval)
            await self.cleanup()

    async def health_check(self) -> bool:
        return True

    async def get_stats(self) -> dict:
        async with self._lock:
            total = len(self._entries)
            with_ttl = sum(1 for entry in self._entries.values() if entry.expires_at is not None)
        return {
            "backend": "memory",
            "total_entries": total,
            "entries_with_ttl": with_ttl,
        }

    async def close(self) -> None:
        """Nothing to release; present for symmetry with the Redis store."""
