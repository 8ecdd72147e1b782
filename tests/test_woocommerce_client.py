import httpx
import pytest

from catalog_cache.exceptions import TransportError
from catalog_cache.protocols import UpstreamClient
from catalog_cache.repositories import WooCommerceClient


def make_client(handler):
    return WooCommerceClient(
        base_url="https://shop.example/wp-json/wc/v2/",
        consumer_key="ck_test",
        consumer_secret="cs_test",
        timeout=5.0,
        transport=httpx.MockTransport(handler),
    )


def test_satisfies_protocol():
    assert isinstance(make_client(lambda request: httpx.Response(200)), UpstreamClient)


@pytest.mark.asyncio
async def test_fetch_builds_url_and_returns_raw_response():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("authorization")
        return httpx.Response(
            200,
            headers={"X-WP-Total": "5", "X-WP-TotalPages": "1"},
            content=b'[{"id":1,"name":"Tools"}]',
        )

    client = make_client(handler)
    raw = await client.fetch("products/categories", "page=1&context=view")
    await client.close()

    assert seen["url"] == "https://shop.example/wp-json/wc/v2/products/categories?page=1&context=view"
    assert seen["auth"].startswith("Basic ")
    assert raw.status_code == 200
    assert raw.header("x-wp-total") == "5"
    assert raw.header("X-WP-TotalPages") == "1"
    assert raw.body == b'[{"id":1,"name":"Tools"}]'


@pytest.mark.asyncio
async def test_error_status_is_returned_not_raised():
    client = make_client(lambda request: httpx.Response(500, content=b"oops"))

    raw = await client.fetch("products")
    await client.close()

    assert raw.status_code == 500


@pytest.mark.asyncio
async def test_network_failure_raises_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = make_client(handler)

    with pytest.raises(TransportError):
        await client.fetch("products/42")
    await client.close()


@pytest.mark.asyncio
async def test_timeout_raises_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    client = make_client(handler)

    with pytest.raises(TransportError):
        await client.fetch("products")
    await client.close()
