"""Turns raw upstream replies into catalog responses."""

import json

from catalog_cache.entities import CatalogResponseEntity, RawUpstreamResponse
from catalog_cache.exceptions import BodyParseError, UpstreamStatusError
from catalog_cache.logging import get_logger

logger = get_logger("catalog_cache.normalizer")

TOTAL_HEADER = "x-wp-total"
TOTAL_PAGES_HEADER = "x-wp-totalpages"


class ResponseNormalizer:
    """Pure transform from ``RawUpstreamResponse`` to ``CatalogResponseEntity``.

    Pagination comes from the WordPress ``x-wp-total`` and
    ``x-wp-totalpages`` headers. A missing, non-numeric or negative header
    leaves the matching field out.
    """

    def normalize(self, raw: RawUpstreamResponse) -> CatalogResponseEntity:
        """Normalize an upstream reply.

        Args:
            raw: The upstream response

        Returns:
            The canonical catalog response

        Raises:
            UpstreamStatusError: If the status is not 200
            BodyParseError: If the body is not valid JSON
        """
        if raw.status_code != 200:
            raise UpstreamStatusError(raw.status_code)

        try:
            results = json.loads(raw.body)
        except ValueError as e:
            raise BodyParseError(f"Upstream body is not valid JSON: {e}") from e

        return CatalogResponseEntity(
            results=results,
            total=self._int_header(raw, TOTAL_HEADER),
            pages=self._int_header(raw, TOTAL_PAGES_HEADER),
        )

    @staticmethod
    def _int_header(raw: RawUpstreamResponse, name: str) -> int | None:
        value = raw.header(name)
        if value is None:
            return None
        try:
            count = int(value.strip())
        except ValueError:
            logger.warning("Ignoring non-integer pagination header", header=name, value=value)
            return None
        if count < 0:
            logger.warning("Ignoring negative pagination header", header=name, value=value)
            return None
        return count
