"""Signature header construction and verification.

Shared by webhooks and actions. The platform signs the string
``"{timestamp}.{payload}"`` with HMAC-SHA256 and sends it as::

    WorkOS-Signature: t=1700000000000, v1=<64 hex chars>

Several ``v1`` entries may be present while a secret is being rotated;
a match against any one of them is accepted.

Timestamps and tolerances are milliseconds since the Unix epoch.
"""
from __future__ import annotations
import json
import logging
import math
import re
import time
from typing import Any, Callable, List, Optional, Tuple

from .crypto import CryptoProvider
from .exceptions import SignatureVerificationException

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE_MS = 180_000
SIGNATURE_SCHEME = "v1"

_ENTRY_PATTERN = re.compile(r"^\s*([A-Za-z0-9]+)=(.*?)\s*$")
_TIMESTAMP_PATTERN = re.compile(r"[0-9]+")
_JS_EXPONENT_THRESHOLD = 1e21


def now_in_milliseconds() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


def serialize_payload(payload: Any) -> str:
    """Serialize a payload exactly as the signer did.

    Raw bodies (``str``/``bytes``) are used verbatim. Any other JSON value is
    dumped compactly with keys in insertion order, matching ``JSON.stringify``:
    whole-number floats are written as integers and non-finite floats as
    ``null``. Keys are never sorted: reordering changes the digest.
    """
    if isinstance(payload, bytes):
        return payload.decode("utf-8")
    if isinstance(payload, str):
        return payload
    return json.dumps(_js_numbers(payload), separators=(",", ":"), ensure_ascii=False, allow_nan=False)


def _js_numbers(value: Any) -> Any:
    """Rewrite floats the way a JavaScript number is rendered in JSON."""
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        # JS switches to exponent notation from 1e21 upward
        if value.is_integer() and abs(value) < _JS_EXPONENT_THRESHOLD:
            return int(value)
        return value
    if isinstance(value, dict):
        return {key: _js_numbers(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_js_numbers(item) for item in value]
    return value


class SignatureProvider:
    """Compute and verify ``t=..., v1=...`` signature headers.

    Args:
        crypto_provider: HMAC implementation (defaults to CryptoProvider)
        clock: Callable returning "now" in epoch milliseconds
    """

    def __init__(
        self,
        crypto_provider: Optional[CryptoProvider] = None,
        clock: Callable[[], int] = now_in_milliseconds,
    ):
        self.crypto_provider = crypto_provider or CryptoProvider()
        self.clock = clock

    def compute_signature(self, timestamp: int, payload: Any, secret: str) -> str:
        """Return the hex digest for ``payload`` signed at ``timestamp``."""
        signed_payload = f"{timestamp}.{serialize_payload(payload)}"
        return self.crypto_provider.compute_hmac_signature(signed_payload, secret)

    def get_timestamp_and_signature_hash(self, sig_header: str) -> Tuple[int, List[str]]:
        """Parse a signature header.

        Args:
            sig_header: Header value, e.g. ``"t=1700000000000, v1=abc..."``

        Returns:
            Tuple of (timestamp, list of v1 candidate hashes in header order)

        Raises:
            SignatureVerificationException: If the header is empty, lacks a
                numeric ``t`` or has no ``v1`` entry
        """
        if not sig_header or not sig_header.strip():
            raise SignatureVerificationException("Signature header is empty")

        timestamp: Optional[str] = None
        hashes: List[str] = []
        for entry in sig_header.split(","):
            match = _ENTRY_PATTERN.match(entry)
            if not match:
                continue
            key, value = match.groups()
            if key == "t" and timestamp is None:
                timestamp = value
            elif key == SIGNATURE_SCHEME:
                hashes.append(value)

        if timestamp is None:
            raise SignatureVerificationException("Signature header is missing a timestamp")
        if not _TIMESTAMP_PATTERN.fullmatch(timestamp):
            raise SignatureVerificationException("Signature header timestamp is not numeric")
        if not hashes:
            raise SignatureVerificationException(
                f"Signature header has no {SIGNATURE_SCHEME} signature hash"
            )
        return int(timestamp), hashes

    def verify_header(
        self,
        payload: Any,
        sig_header: str,
        secret: str,
        tolerance: int = DEFAULT_TOLERANCE_MS,
    ) -> None:
        """Verify ``sig_header`` against ``payload``.

        Returns None on success; every failure raises.

        Args:
            payload: Raw body (str/bytes) or the decoded JSON value
            sig_header: Signature header sent with the request
            secret: Shared signing secret
            tolerance: Maximum allowed clock skew in milliseconds (inclusive)

        Raises:
            SignatureVerificationException: On malformed header, stale
                timestamp or digest mismatch
        """
        timestamp, signature_hashes = self.get_timestamp_and_signature_hash(sig_header)

        if abs(self.clock() - timestamp) > tolerance:
            logger.warning("Rejected signature: timestamp %s outside tolerance of %sms", timestamp, tolerance)
            raise SignatureVerificationException("Timestamp outside the tolerance zone")

        expected = self.compute_signature(timestamp, payload, secret)
        if not any(self.crypto_provider.secure_compare(expected, candidate) for candidate in signature_hashes):
            logger.warning("Rejected signature: none of %d candidate hash(es) matched", len(signature_hashes))
            raise SignatureVerificationException(
                "Signature hash does not match the expected signature hash for payload"
            )
