import asyncio
import hashlib
import hmac
import re

from workos.core.crypto import CryptoProvider


def test_compute_hmac_signature_is_lowercase_hex_sha256():
    provider = CryptoProvider()
    digest = provider.compute_hmac_signature("1700000000000.{}", "whsec_test")

    assert re.fullmatch(r"[0-9a-f]{64}", digest)
    assert digest == hmac.new(b"whsec_test", b"1700000000000.{}", hashlib.sha256).hexdigest()


def test_two_providers_agree():
    payload = '1700000000000.{"event":"user.created"}'
    assert CryptoProvider().compute_hmac_signature(payload, "secret") == CryptoProvider().compute_hmac_signature(payload, "secret")


def test_different_secret_changes_digest():
    provider = CryptoProvider()
    assert provider.compute_hmac_signature("payload", "a") != provider.compute_hmac_signature("payload", "b")


def test_async_variant_matches_sync():
    provider = CryptoProvider()
    sync_digest = provider.compute_hmac_signature("payload", "secret")
    async_digest = asyncio.run(provider.compute_hmac_signature_async("payload", "secret"))
    assert async_digest == sync_digest


def test_unicode_payload_is_utf8_encoded():
    provider = CryptoProvider()
    expected = hmac.new(b"secret", "é".encode("utf-8"), hashlib.sha256).hexdigest()
    assert provider.compute_hmac_signature("é", "secret") == expected


def test_secure_compare():
    provider = CryptoProvider()
    digest = provider.compute_hmac_signature("payload", "secret")

    assert provider.secure_compare(digest, digest) is True
    assert provider.secure_compare(digest, "foo") is False
    assert provider.secure_compare(digest, "") is False
    assert provider.secure_compare("", "") is False
