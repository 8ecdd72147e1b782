"""Upstream catalog client protocol."""

from typing import Protocol, runtime_checkable

from catalog_cache.entities import RawUpstreamResponse


@runtime_checkable
class UpstreamClient(Protocol):
    """Protocol for the remote catalog API.

    Any status code is returned as-is; only network-level failures raise.
    """

    async def fetch(self, path: str, query: str = "") -> RawUpstreamResponse:
        """Fetch a catalog resource.

        Args:
            path: Resource path relative to the API root, e.g. ``products/42``
            query: Raw query string to forward, without the leading ``?``

        Returns:
            The raw upstream response

        Raises:
            TransportError: If upstream could not be reached
        """
        ...

    async def close(self) -> None:
        """Release network resources."""
        ...
