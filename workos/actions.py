"""WorkOS Actions: verify inbound action contexts and sign verdicts."""
from __future__ import annotations
import json
from typing import Any, Dict, Optional, Union

from workos.core.signature import DEFAULT_TOLERANCE_MS, SignatureProvider
from workos.models import (
    ActionResponse,
    AuthenticationActionContext,
    UserRegistrationActionContext,
    deserialize_authentication_action_context,
    deserialize_user_registration_action_context,
)

RESPONSE_OBJECTS = {
    "authentication": "authentication_action_response",
    "user_registration": "user_registration_action_response",
}

CONTEXT_DESERIALIZERS = {
    "authentication_action_context": deserialize_authentication_action_context,
    "user_registration_action_context": deserialize_user_registration_action_context,
}

ActionContext = Union[AuthenticationActionContext, UserRegistrationActionContext]


class Actions:
    """Actions façade sharing the webhook signature scheme."""

    def __init__(self, signature_provider: Optional[SignatureProvider] = None):
        self.signature_provider = signature_provider or SignatureProvider()

    def sign_response(self, response: Dict[str, Any], secret: str) -> ActionResponse:
        """Sign an Allow/Deny verdict.

        Args:
            response: ``{"type": "authentication" | "user_registration",
                "verdict": "Allow" | "Deny", "error_message": optional}``
            secret: Action endpoint secret

        Returns:
            ActionResponse with the signed payload and its signature
        """
        response_type = response.get("type")
        if response_type not in RESPONSE_OBJECTS:
            raise ValueError(f"Unknown action response type: {response_type!r}")

        # One clock read: the payload timestamp and the signing timestamp must agree.
        timestamp = self.signature_provider.clock()
        payload: Dict[str, Any] = {
            "timestamp": timestamp,
            "verdict": response.get("verdict"),
        }
        error_message = response.get("error_message")
        if response.get("verdict") == "Deny" and error_message:
            payload["error_message"] = error_message

        signature = self.signature_provider.compute_signature(timestamp, payload, secret)
        return ActionResponse(object=RESPONSE_OBJECTS[response_type], payload=payload, signature=signature)

    def verify_header(self, payload: Any, sig_header: str, secret: str, tolerance: int = DEFAULT_TOLERANCE_MS) -> None:
        self.signature_provider.verify_header(payload, sig_header, secret, tolerance)

    def construct_action(self, payload: Any, sig_header: str, secret: str, tolerance: int = DEFAULT_TOLERANCE_MS) -> ActionContext:
        """Verify the signature, then deserialize the action context.

        Raises:
            SignatureVerificationException: If verification fails
            ValueError: If the verified payload is not a known action context
        """
        self.verify_header(payload, sig_header, secret, tolerance)
        data = json.loads(payload) if isinstance(payload, (bytes, str)) else payload
        deserializer = CONTEXT_DESERIALIZERS.get(data.get("object"))
        if deserializer is None:
            raise ValueError(f"Unknown action context object: {data.get('object')!r}")
        return deserializer(data)
