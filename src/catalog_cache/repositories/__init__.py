"""Repository layer for data access.

This layer abstracts external dependencies (cache backends, the WooCommerce
REST API) behind protocol-based interfaces. This enables:
- Easy swapping of implementations (memory → Redis)
- Unit testing with fake implementations
- Clear separation of concerns

The repositories are protocol-based (structural typing), not inheritance-based.
Any class implementing the required methods will satisfy the protocol.
"""

from catalog_cache.protocols import CacheStore, UpstreamClient

from .memory_repository import InMemoryCacheRepository
from .redis_repository import RedisCacheRepository
from .woocommerce_client import WooCommerceClient

__all__ = [
    "CacheStore",
    "UpstreamClient",
    "InMemoryCacheRepository",
    "RedisCacheRepository",
    "WooCommerceClient",
]
