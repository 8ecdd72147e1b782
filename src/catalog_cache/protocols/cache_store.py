"""Cache storage protocol.

Defines the interface for any key/value store that can hold serialized
catalog responses with per-key absolute expiry.

Implementations can include:
- Process memory (default)
- Redis
"""

from typing import Protocol, runtime_checkable

from catalog_cache.entities import CacheLookup


@runtime_checkable
class CacheStore(Protocol):
    """Protocol for cache storage backends.

    Every operation fails open: an unreachable store reports
    ``STORE_UNAVAILABLE`` from ``get`` and silently drops writes. No method
    raises for backend failures.

    Example:
        ```python
        from catalog_cache.protocols import CacheStore

        store: CacheStore = InMemoryCacheRepository()
        await store.set("products/42", '{"results": {"id": 42}}')
        lookup = await store.get("products/42")
        ```
    """

    async def get(self, key: str) -> CacheLookup:
        """Look up a key.

        Args:
            key: The cache key

        Returns:
            A hit with the stored value, a miss (absent or expired), or
            store-unavailable
        """
        ...

    async def set(self, key: str, value: str) -> None:
        """Store a value without expiry, replacing any previous entry.

        Args:
            key: The cache key
            value: The serialized value
        """
        ...

    async def expire(self, key: str, ttl: int) -> bool:
        """Set an absolute expiry ``ttl`` seconds from now on an existing key.

        Args:
            key: The cache key
            ttl: Time-to-live in seconds

        Returns:
            True if the key existed, False otherwise
        """
        ...

    async def delete(self, key: str) -> None:
        """Remove a single entry if present.

        Args:
            key: The cache key
        """
        ...

    async def flush(self) -> None:
        """Atomically remove every entry."""
        ...

    async def health_check(self) -> bool:
        """Check if the store is accessible.

        Returns:
            True if healthy, False otherwise
        """
        ...

    async def get_stats(self) -> dict:
        """Get store statistics.

        Returns:
            Dictionary with stats (implementation-specific)
        """
        ...

    async def close(self) -> None:
        """Release backend connections."""
        ...
