"""Error taxonomy for the catalog cache.

Upstream failures collapse into one opaque server error at the HTTP
boundary. Cache and signature errors never reach the client.
"""


class CatalogCacheError(Exception):
    """Base class for all catalog cache errors."""


class UpstreamError(CatalogCacheError):
    """Any failure producing a catalog response from upstream."""


class UpstreamStatusError(UpstreamError):
    """Upstream answered with a non-200 status."""

    def __init__(self, status_code: int, message: str | None = None) -> None:
        self.status_code = status_code
        super().__init__(message or f"Upstream returned status {status_code}")


class BodyParseError(UpstreamError):
    """Upstream body is not well-formed JSON."""


class TransportError(UpstreamError):
    """Network-level failure reaching upstream."""


class CacheUnavailableError(CatalogCacheError):
    """Cache store is not reachable."""


class SignatureError(CatalogCacheError):
    """Webhook signature is missing or does not match."""
