"""Webhook-driven cache invalidation.

WooCommerce signs each webhook delivery with
``base64(HMAC-SHA256(secret, raw_body))`` in ``x-wc-webhook-signature``.
A verified delivery flushes the cache and advances the cache version.
"""

import base64
import hashlib
import hmac

from catalog_cache.entities import InvalidationOutcome, WebhookEnvelope
from catalog_cache.exceptions import SignatureError
from catalog_cache.logging import get_logger
from catalog_cache.protocols import CacheStore

from .cache_version import CacheVersion
from .metrics import CacheMetrics

logger = get_logger("catalog_cache.invalidation")


def compute_signature(secret: str, body: bytes) -> str:
    """Compute the WooCommerce webhook signature for ``body``."""
    digest = hmac.new(secret.encode("utf-8"), body, hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


class InvalidationService:
    """Verifies webhooks and invalidates the cache.

    By default an unverifiable webhook is a silent no-op, indistinguishable
    from success to the sender. With ``reject_invalid=True`` a present but
    wrong signature raises ``SignatureError`` instead; a missing signature
    or body stays a no-op either way.
    """

    def __init__(
        self,
        store: CacheStore,
        version: CacheVersion,
        secret: str,
        metrics: CacheMetrics | None = None,
        reject_invalid: bool = False,
    ) -> None:
        """Initialize the invalidation service.

        Args:
            store: Cache store to flush (required).
            version: Shared cache version token to advance (required).
            secret: Webhook shared secret. Empty disables invalidation.
            metrics: Counters to update. Defaults to a private instance.
            reject_invalid: Raise on a mismatched signature instead of no-op.
        """
        self._store = store
        self._version = version
        self._secret = secret
        self._metrics = metrics or CacheMetrics()
        self._reject_invalid = reject_invalid

    def verify(self, envelope: WebhookEnvelope) -> None:
        """Check the envelope signature.

        Raises:
            SignatureError: If the signature, body or secret is missing, or
                the signature does not match
        """
        if not envelope.signature or not envelope.raw_body:
            raise SignatureError("missing signature or body")

        if not self._secret:
            raise SignatureError("no webhook secret configured")

        expected = compute_signature(self._secret, envelope.raw_body)
        if not hmac.compare_digest(expected.encode("ascii"), envelope.signature.encode("utf-8")):
            raise SignatureError("signature mismatch")

    async def handle(self, envelope: WebhookEnvelope) -> InvalidationOutcome:
        """Handle one webhook delivery.

        Args:
            envelope: The inbound webhook

        Returns:
            INVALIDATED if the cache was flushed, NOOP otherwise

        Raises:
            SignatureError: Only when ``reject_invalid`` is set and a
                present signature does not match
        """
        try:
            self.verify(envelope)
        except SignatureError as e:
            self._metrics.record_webhook_ignored()
            logger.warning("Webhook ignored", topic=envelope.topic, reason=str(e))
            if self._reject_invalid and envelope.signature and envelope.raw_body and self._secret:
                raise
            return InvalidationOutcome.NOOP

        # Writers racing the flush see the generation move before it starts.
        self._version.begin_invalidation()
        await self._store.flush()
        new_version = self._version.advance()
        self._metrics.record_invalidation()
        logger.info("Cache invalidated", topic=envelope.topic, cache_version=new_version)
        return InvalidationOutcome.INVALIDATED

    @property
    def current_version(self) -> int:
        return self._version.current
