"""WooCommerce REST API client.

Talks to ``{site}/wp-json/wc/v2`` over httpx with the consumer key/secret
as HTTP basic credentials. Any HTTP status is handed back to the caller;
only network failures raise.
"""

import httpx

from catalog_cache.config import Settings, settings
from catalog_cache.entities import RawUpstreamResponse
from catalog_cache.exceptions import TransportError
from catalog_cache.logging import get_logger

logger = get_logger("catalog_cache.upstream")


class WooCommerceClient:
    """WooCommerce implementation of the UpstreamClient protocol.

    Example:
        ```python
        client = WooCommerceClient.create()
        raw = await client.fetch("products/42", "context=view")
        print(raw.status_code, raw.header("x-wp-total"))
        ```
    """

    def __init__(
        self,
        base_url: str,
        consumer_key: str,
        consumer_secret: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the WooCommerce client.

        Args:
            base_url: REST API root, e.g. ``https://shop.example/wp-json/wc/v2``
            consumer_key: WooCommerce consumer key
            consumer_secret: WooCommerce consumer secret
            timeout: Request timeout in seconds.
            transport: Optional httpx transport (tests use MockTransport).
        """
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            auth=httpx.BasicAuth(consumer_key, consumer_secret),
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    @classmethod
    def create(cls, config: Settings | None = None) -> "WooCommerceClient":
        """Factory method to create WooCommerceClient from settings."""
        config = config or settings
        return cls(
            base_url=config.api_base_url,
            consumer_key=config.woocommerce_api_key,
            consumer_secret=config.woocommerce_api_secret,
            timeout=config.upstream_timeout,
        )

    async def fetch(self, path: str, query: str = "") -> RawUpstreamResponse:
        url = f"/{path.lstrip('/')}"
        if query:
            url = f"{url}?{query}"

        try:
            response = await self._client.get(url)
        except httpx.HTTPError as e:
            logger.error("Upstream request failed", path=path, error=str(e))
            raise TransportError(f"Failed to reach upstream for {path}: {e}") from e

        logger.debug("Upstream responded", path=path, status_code=response.status_code)
        return RawUpstreamResponse(
            status_code=response.status_code,
            headers={k.lower(): v for k, v in response.headers.items()},
            body=response.content,
        )

    async def close(self) -> None:
        await self._client.aclose()
