"""
Shared fixtures for the catalog cache tests.
"""

import asyncio
import json

import pytest

from catalog_cache.config import Settings
from catalog_cache.entities import RawUpstreamResponse
from catalog_cache.repositories import InMemoryCacheRepository
from catalog_cache.services import CacheMetrics, CacheVersion, InvalidationService, ProxyService

WEBHOOK_SECRET = "whsec-test"


class FakeClock:
    """Manually advanced time source."""

    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeUpstreamClient:
    """In-memory stand-in for the WooCommerce client.

    Responses are registered per upstream path. Set ``gate`` to an
    ``asyncio.Event`` to hold every fetch until the event is set.
    """

    def __init__(self) -> None:
        self.responses: dict[str, RawUpstreamResponse | Exception] = {}
        self.calls: list[tuple[str, str]] = []
        self.gate: asyncio.Event | None = None
        self.closed = False

    def add(self, path, body=None, status_code=200, headers=None, raw=None):
        payload = raw if raw is not None else json.dumps(body).encode()
        self.responses[path] = RawUpstreamResponse(
            status_code=status_code,
            headers={k.lower(): v for k, v in (headers or {}).items()},
            body=payload,
        )

    def fail(self, path, exc):
        self.responses[path] = exc

    async def fetch(self, path, query=""):
        self.calls.append((path, query))
        if self.gate is not None:
            await self.gate.wait()
        response = self.responses.get(path)
        if isinstance(response, Exception):
            raise response
        if response is None:
            return RawUpstreamResponse(status_code=404, body=b'{"code":"woocommerce_rest_invalid_id"}')
        return response

    def calls_for(self, path):
        return [call for call in self.calls if call[0] == path]

    async def close(self):
        self.closed = True


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return InMemoryCacheRepository(clock=clock)


@pytest.fixture
def upstream():
    return FakeUpstreamClient()


@pytest.fixture
def version():
    return CacheVersion(initial=1000)


@pytest.fixture
def metrics():
    return CacheMetrics()


@pytest.fixture
def proxy(store, upstream, version, metrics):
    return ProxyService(
        store=store,
        upstream=upstream,
        version=version,
        metrics=metrics,
        ttl=600,
        upstream_context="view",
    )


@pytest.fixture
def invalidation(store, version, metrics):
    return InvalidationService(store=store, version=version, secret=WEBHOOK_SECRET, metrics=metrics)


@pytest.fixture
def test_settings():
    return Settings(
        woocommerce_site_url="https://shop.example",
        woocommerce_api_key="ck_test",
        woocommerce_api_secret="cs_test",
        webhook_secret=WEBHOOK_SECRET,
        cache_ttl=600,
        cache_backend="memory",
        environment="test",
        log_level="warning",
    )
