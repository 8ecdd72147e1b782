"""Service layer for business logic.

This layer contains the core business logic and orchestration.
Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)

Usage:
    ```python
    from catalog_cache.services import CacheVersion, ProxyService

    version = CacheVersion()
    proxy = ProxyService(store=store, upstream=client, version=version)
    response = await proxy.read(PRODUCT, {"id": "42"})
    ```
"""

from .cache_version import CacheVersion
from .invalidation_service import InvalidationService, compute_signature
from .metrics import CacheMetrics
from .normalizer import ResponseNormalizer
from .proxy_service import (
    CATEGORIES,
    PRODUCT,
    PRODUCTS,
    CatalogResource,
    ProxyService,
    ResourceClass,
)

__all__ = [
    "CacheVersion",
    "CacheMetrics",
    "InvalidationService",
    "compute_signature",
    "ResponseNormalizer",
    "ProxyService",
    "CatalogResource",
    "ResourceClass",
    "PRODUCTS",
    "PRODUCT",
    "CATEGORIES",
]
