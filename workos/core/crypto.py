"""HMAC-SHA256 primitives used for webhook and action signatures."""
from __future__ import annotations
import asyncio
import hashlib
import hmac


class CryptoProvider:
    """Stateless HMAC-SHA256 helper.

    Usage:
        provider = CryptoProvider()
        digest = provider.compute_hmac_signature("1700000000000.{}", "whsec_test")
    """

    def compute_hmac_signature(self, payload: str, secret: str) -> str:
        """Return the lowercase hex HMAC-SHA256 digest of ``payload``.

        Args:
            payload: String to sign (UTF-8 encoded before hashing)
            secret: Shared signing secret

        Returns:
            64-character hex digest
        """
        return hmac.new(secret.encode("utf-8"), payload.encode("utf-8"), hashlib.sha256).hexdigest()

    async def compute_hmac_signature_async(self, payload: str, secret: str) -> str:
        """Coroutine variant of :meth:`compute_hmac_signature` for asyncio callers."""
        return await asyncio.to_thread(self.compute_hmac_signature, payload, secret)

    def secure_compare(self, a: str, b: str) -> bool:
        """Constant-time string comparison. Empty strings never match."""
        if not a or not b:
            return False
        return hmac.compare_digest(a.encode("utf-8"), b.encode("utf-8"))
