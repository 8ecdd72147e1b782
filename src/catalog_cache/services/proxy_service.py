"""Cache-aside proxy for catalog reads.

This service orchestrates a read by coordinating the cache store, the
upstream client and the response normalizer:

    Lookup -> Serve                                  (hit)
    Lookup -> Fetch -> Normalize -> Store -> Serve   (miss)
    Lookup -> Fetch -> Normalize fails               (error, nothing cached)
"""

import asyncio
import json
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from urllib.parse import quote

from catalog_cache.config import settings
from catalog_cache.entities import CatalogResponseEntity, LookupStatus
from catalog_cache.exceptions import UpstreamError
from catalog_cache.logging import get_logger
from catalog_cache.protocols import CacheStore, UpstreamClient

from .cache_version import CacheVersion
from .metrics import CacheMetrics
from .normalizer import ResponseNormalizer

logger = get_logger("catalog_cache.proxy")


class ResourceClass(str, Enum):
    """Caching policy class of a catalog resource."""

    ITEM = "item"  # cached until the next flush
    COLLECTION = "collection"  # cached with the configured TTL


@dataclass(frozen=True)
class CatalogResource:
    """A proxied upstream resource.

    Attributes:
        upstream_path: Path relative to the REST API root
        resource_class: Which TTL policy applies
        path_params: Route parameters appended to the path, in order
    """

    upstream_path: str
    resource_class: ResourceClass
    path_params: tuple[str, ...] = ()

    def resolve(self, params: Mapping[str, str] | None = None) -> str:
        """Build the concrete upstream path, e.g. ``products/42``.

        Parameters are percent-encoded so they stay a single path segment.
        """
        params = params or {}
        segments = (quote(str(params[name]), safe="") for name in self.path_params)
        return "/".join([self.upstream_path, *segments])


PRODUCTS = CatalogResource("products", ResourceClass.COLLECTION)
PRODUCT = CatalogResource("products", ResourceClass.ITEM, ("id",))
CATEGORIES = CatalogResource("products/categories", ResourceClass.COLLECTION)


class ProxyService:
    """Read-through cache in front of the upstream catalog.

    Store failures are folded into misses: availability wins over
    consistency, the request simply goes upstream.

    Two hazards of plain cache-aside are handled here:
    - concurrent misses for the same key share one upstream fetch
      (``coalesce=True``), within this process only
    - a fetch that started before an invalidation never leaves its result
      in the cache

    Example:
        ```python
        proxy = ProxyService(store=InMemoryCacheRepository(), upstream=client, version=CacheVersion())
        response = await proxy.read(PRODUCT, {"id": "42"})
        ```
    """

    def __init__(
        self,
        store: CacheStore,
        upstream: UpstreamClient,
        version: CacheVersion,
        normalizer: ResponseNormalizer | None = None,
        metrics: CacheMetrics | None = None,
        ttl: int | None = None,
        upstream_context: str | None = None,
        coalesce: bool = True,
    ) -> None:
        """Initialize the proxy service.

        Args:
            store: Cache storage backend (required).
            upstream: Upstream catalog client (required).
            version: Shared cache version token (required).
            normalizer: Response normalizer. Defaults to ResponseNormalizer().
            metrics: Counters to update. Defaults to a private instance.
            ttl: TTL in seconds for collection resources. Defaults to settings.
            upstream_context: Value forced as ``context=`` on upstream calls;
                empty string disables it. Defaults to settings.
            coalesce: Share one upstream fetch between concurrent misses.
        """
        self._store = store
        self._upstream = upstream
        self._version = version
        self._normalizer = normalizer or ResponseNormalizer()
        self._metrics = metrics or CacheMetrics()
        self._ttl = ttl or settings.cache_ttl
        self._context = settings.upstream_context if upstream_context is None else upstream_context
        self._coalesce = coalesce
        self._in_flight: dict[tuple[int, str], asyncio.Future[CatalogResponseEntity]] = {}

    @staticmethod
    def cache_key(path: str, query: str = "") -> str:
        """Derive the cache key from the upstream path and the raw query string.

        The query string is used verbatim: ``?a=1&b=2`` and ``?b=2&a=1`` are
        different keys.
        """
        return f"{path}?{query}" if query else path

    def ttl_for(self, resource: CatalogResource) -> int | None:
        if resource.resource_class is ResourceClass.ITEM:
            return None
        return self._ttl

    def upstream_query(self, query: str = "") -> str:
        """Append the forced ``context`` parameter to the client's query.

        Appended last so it overrides a client-supplied ``context``.
        """
        if not self._context:
            return query
        forced = f"context={self._context}"
        return f"{query}&{forced}" if query else forced

    async def read(
        self,
        resource: CatalogResource,
        params: Mapping[str, str] | None = None,
        query: str = "",
    ) -> CatalogResponseEntity:
        """Serve a catalog read from cache, or from upstream on a miss.

        Args:
            resource: The resource being read
            params: Route parameters (e.g. ``{"id": "42"}``)
            query: Raw inbound query string, without ``?``

        Returns:
            The catalog response

        Raises:
            UpstreamError: If the miss could not be served from upstream
        """
        path = resource.resolve(params)
        key = self.cache_key(path, query)

        lookup = await self._store.get(key)
        if lookup.is_hit:
            try:
                cached = self._deserialize(lookup.value or "")
            except ValueError:
                logger.warning("Discarding unreadable cache entry", key=key)
            else:
                self._metrics.record_hit()
                logger.debug("Cache hit", key=key)
                return cached

        if lookup.status is LookupStatus.STORE_UNAVAILABLE:
            self._metrics.record_store_unavailable()
        else:
            self._metrics.record_miss()
        logger.debug("Cache miss", key=key, status=lookup.status.value)

        ttl = self.ttl_for(resource)
        if self._coalesce:
            return await self._fetch_coalesced(key, path, query, ttl)
        return await self._fetch_and_store(key, path, query, ttl)

    async def _fetch_coalesced(
        self,
        key: str,
        path: str,
        query: str,
        ttl: int | None,
    ) -> CatalogResponseEntity:
        # Keyed by generation so requests arriving after an invalidation
        # began never join a fetch that started before it.
        flight_key = (self._version.generation, key)
        future = self._in_flight.get(flight_key)
        if future is None:
            future = asyncio.ensure_future(self._fetch_and_store(key, path, query, ttl))
            self._in_flight[flight_key] = future

            def _done(done: asyncio.Future[CatalogResponseEntity]) -> None:
                self._in_flight.pop(flight_key, None)
                if not done.cancelled():
                    done.exception()

            future.add_done_callback(_done)
        else:
            self._metrics.record_coalesced()
            logger.debug("Joining in-flight fetch", key=key)

        return await asyncio.shield(future)

    async def _fetch_and_store(
        self,
        key: str,
        path: str,
        query: str,
        ttl: int | None,
    ) -> CatalogResponseEntity:
        generation_at_start = self._version.generation
        self._metrics.record_upstream_fetch()

        try:
            raw = await self._upstream.fetch(path, self.upstream_query(query))
            response = self._normalizer.normalize(raw)
        except UpstreamError as e:
            self._metrics.record_upstream_error()
            logger.error("Upstream read failed", key=key, error=str(e), error_type=type(e).__name__)
            raise

        if self._version.generation != generation_at_start:
            self._metrics.record_stale_write_discarded()
            logger.info("Skipping cache write, invalidated during fetch", key=key)
            return response

        await self._store.set(key, self._serialize(response))
        if ttl is not None:
            await self._store.expire(key, ttl)

        # A flush can slip in while the write is suspended on the store.
        if self._version.generation != generation_at_start:
            await self._store.delete(key)
            self._metrics.record_stale_write_discarded()
            logger.info("Removed cache write, invalidated during store", key=key)

        return response

    @staticmethod
    def _serialize(response: CatalogResponseEntity) -> str:
        return json.dumps(response.to_dict(), separators=(",", ":"))

    @staticmethod
    def _deserialize(value: str) -> CatalogResponseEntity:
        data = json.loads(value)
        if not isinstance(data, dict) or "results" not in data:
            raise ValueError("cached value is not a catalog response")
        return CatalogResponseEntity.from_dict(data)

    @property
    def metrics(self) -> CacheMetrics:
        return self._metrics

    @property
    def store(self) -> CacheStore:
        """Get the underlying store (for testing)."""
        return self._store
