"""Webhook domain entities."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class WebhookEnvelope:
    """A single inbound invalidation attempt.

    Attributes:
        topic: Value of ``x-wc-webhook-topic`` (logged only)
        signature: Value of ``x-wc-webhook-signature``
        raw_body: Request body exactly as received
    """

    topic: str | None
    signature: str | None
    raw_body: bytes


class InvalidationOutcome(str, Enum):
    """Result of handling a webhook."""

    NOOP = "noop"
    INVALIDATED = "invalidated"
