"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (in-memory → Redis, WooCommerce → fake)
- Unit testing with mock implementations
- Clear separation of concerns

Usage:
    ```python
    from catalog_cache.protocols import CacheStore, UpstreamClient

    # Type hints work with any implementation
    store: CacheStore = InMemoryCacheRepository()  # works
    store: CacheStore = RedisCacheRepository(...)   # also works
    ```
"""

from .cache_store import CacheStore
from .upstream_client import UpstreamClient

__all__ = [
    "CacheStore",
    "UpstreamClient",
]
