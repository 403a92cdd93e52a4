"""Webhook signature verification and event construction."""
from __future__ import annotations
import json
from typing import Any, List, Optional, Tuple

from workos.core.signature import DEFAULT_TOLERANCE_MS, SignatureProvider
from workos.models import Event, deserialize_event


class Webhooks:
    """Verify inbound webhooks and turn them into typed events.

    Usage:
        event = workos.webhooks.construct_event(
            payload=request.get_data(),
            sig_header=request.headers["WorkOS-Signature"],
            secret=os.environ["WORKOS_WEBHOOK_SECRET"],
        )
    """

    def __init__(self, signature_provider: Optional[SignatureProvider] = None):
        self.signature_provider = signature_provider or SignatureProvider()

    def verify_header(self, payload: Any, sig_header: str, secret: str, tolerance: int = DEFAULT_TOLERANCE_MS) -> None:
        """Raise SignatureVerificationException unless ``sig_header`` signs ``payload``."""
        self.signature_provider.verify_header(payload, sig_header, secret, tolerance)

    def compute_signature(self, timestamp: int, payload: Any, secret: str) -> str:
        return self.signature_provider.compute_signature(timestamp, payload, secret)

    def get_timestamp_and_signature_hash(self, sig_header: str) -> Tuple[int, List[str]]:
        return self.signature_provider.get_timestamp_and_signature_hash(sig_header)

    def construct_event(self, payload: Any, sig_header: str, secret: str, tolerance: int = DEFAULT_TOLERANCE_MS) -> Event:
        """Verify the signature, then deserialize the webhook body.

        Args:
            payload: Raw request body (str/bytes, verified verbatim) or decoded JSON
            sig_header: ``WorkOS-Signature`` header value
            secret: Webhook endpoint secret
            tolerance: Maximum allowed clock skew in milliseconds

        Returns:
            Event whose ``data`` is typed according to the event name

        Raises:
            SignatureVerificationException: If verification fails; nothing is deserialized
        """
        self.verify_header(payload, sig_header, secret, tolerance)
        return deserialize_event(_decode(payload))


def _decode(payload: Any) -> Any:
    if isinstance(payload, (bytes, str)):
        return json.loads(payload)
    return payload
