import base64
import hashlib
import hmac

import pytest

from catalog_cache.entities import InvalidationOutcome, LookupStatus, WebhookEnvelope
from catalog_cache.exceptions import SignatureError
from catalog_cache.services import InvalidationService, compute_signature

from .conftest import WEBHOOK_SECRET

BODY = b'{"id":42,"name":"Widget","price":"9.99"}'


def signed(body=BODY, secret=WEBHOOK_SECRET, topic="product.updated"):
    return WebhookEnvelope(topic=topic, signature=compute_signature(secret, body), raw_body=body)


def test_compute_signature_matches_hmac_sha256_base64():
    expected = base64.b64encode(hmac.new(b"s3cret", b"payload", hashlib.sha256).digest()).decode()

    assert compute_signature("s3cret", b"payload") == expected


@pytest.mark.asyncio
async def test_valid_signature_flushes_and_bumps_version(invalidation, store, version, metrics):
    await store.set("products/42", "v")
    await store.set("products/categories", "v")
    before = version.current

    outcome = await invalidation.handle(signed())

    assert outcome is InvalidationOutcome.INVALIDATED
    assert (await store.get("products/42")).status is LookupStatus.MISS
    assert (await store.get("products/categories")).status is LookupStatus.MISS
    assert version.current > before
    assert metrics.invalidations == 1


@pytest.mark.asyncio
async def test_each_valid_webhook_bumps_version_once(invalidation, version):
    seen = [version.current]
    for _ in range(3):
        await invalidation.handle(signed())
        seen.append(version.current)

    assert all(b > a for a, b in zip(seen, seen[1:]))


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "envelope",
    [
        WebhookEnvelope(topic="product.updated", signature=None, raw_body=BODY),
        WebhookEnvelope(topic="product.updated", signature="", raw_body=BODY),
        WebhookEnvelope(topic="product.updated", signature=compute_signature(WEBHOOK_SECRET, b""), raw_body=b""),
        WebhookEnvelope(topic="product.updated", signature="bm90LXRoZS1zaWduYXR1cmU=", raw_body=BODY),
        WebhookEnvelope(topic="product.updated", signature=compute_signature("other-secret", BODY), raw_body=BODY),
        WebhookEnvelope(topic="product.updated", signature=compute_signature(WEBHOOK_SECRET, BODY), raw_body=BODY + b" "),
    ],
    ids=["missing", "empty", "empty-body", "garbage", "wrong-secret", "tampered-body"],
)
async def test_unverified_webhook_is_noop(invalidation, store, version, metrics, envelope):
    await store.set("products/42", "v")
    before = version.current

    outcome = await invalidation.handle(envelope)

    assert outcome is InvalidationOutcome.NOOP
    assert (await store.get("products/42")).is_hit
    assert version.current == before
    assert metrics.webhooks_ignored == 1


@pytest.mark.asyncio
async def test_no_secret_configured_never_invalidates(store, version):
    service = InvalidationService(store=store, version=version, secret="")
    await store.set("products/42", "v")

    outcome = await service.handle(signed(secret=""))

    assert outcome is InvalidationOutcome.NOOP
    assert (await store.get("products/42")).is_hit


@pytest.mark.asyncio
async def test_reject_invalid_raises_on_mismatch(store, version):
    service = InvalidationService(store=store, version=version, secret=WEBHOOK_SECRET, reject_invalid=True)

    with pytest.raises(SignatureError):
        await service.handle(signed(secret="other-secret"))


@pytest.mark.asyncio
async def test_reject_invalid_still_ignores_missing_signature(store, version):
    service = InvalidationService(store=store, version=version, secret=WEBHOOK_SECRET, reject_invalid=True)

    outcome = await service.handle(WebhookEnvelope(topic=None, signature=None, raw_body=BODY))

    assert outcome is InvalidationOutcome.NOOP
