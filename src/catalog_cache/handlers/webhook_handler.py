"""HTTP handler for the cache invalidation webhook."""

from fastapi import HTTPException, Request, status

from catalog_cache.dto import CleanCacheResponse
from catalog_cache.entities import InvalidationOutcome, WebhookEnvelope
from catalog_cache.exceptions import SignatureError
from catalog_cache.logging import get_logger
from catalog_cache.services import InvalidationService

logger = get_logger("catalog_cache.webhook")

TOPIC_HEADER = "x-wc-webhook-topic"
SIGNATURE_HEADER = "x-wc-webhook-signature"


class WebhookHandler:
    """HTTP handler for ``POST /clean-cache``."""

    def __init__(self, invalidation_service: InvalidationService) -> None:
        self._invalidation = invalidation_service

    async def clean_cache(self, request: Request) -> CleanCacheResponse:
        """Handle POST /clean-cache requests.

        Responds 200 whether or not the cache was flushed, unless invalid
        signatures are configured to be rejected.

        Raises:
            HTTPException: 401 for a mismatched signature when rejection is on
        """
        envelope = WebhookEnvelope(
            topic=request.headers.get(TOPIC_HEADER),
            signature=request.headers.get(SIGNATURE_HEADER),
            raw_body=await request.body(),
        )
        logger.info("Webhook received", topic=envelope.topic, body_bytes=len(envelope.raw_body))

        try:
            outcome = await self._invalidation.handle(envelope)
        except SignatureError as e:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid webhook signature",
            ) from e

        return CleanCacheResponse(
            success=True,
            invalidated=outcome is InvalidationOutcome.INVALIDATED,
            cache_version=self._invalidation.current_version,
        )
