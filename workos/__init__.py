"""WorkOS Python SDK.

Usage:
    from workos import WorkOS

    workos = WorkOS("sk_test_123")
    event = workos.webhooks.construct_event(payload=body, sig_header=header, secret=secret)

The signature and pagination primitives live in ``workos.core`` and can be
used without a client instance.
"""
from .client import VERSION, WorkOS
from .core.exceptions import (
    ApiException,
    BadRequestException,
    ConflictException,
    GenericServerException,
    HttpClientError,
    NoApiKeyProvidedException,
    NotFoundException,
    OauthException,
    RateLimitExceededException,
    SignatureVerificationException,
    UnauthorizedException,
    UnprocessableEntityException,
    WorkOSError,
)

__version__ = VERSION

__all__ = [
    "WorkOS",
    "VERSION",
    # Exceptions
    "WorkOSError",
    "ApiException",
    "BadRequestException",
    "ConflictException",
    "GenericServerException",
    "HttpClientError",
    "NoApiKeyProvidedException",
    "NotFoundException",
    "OauthException",
    "RateLimitExceededException",
    "SignatureVerificationException",
    "UnauthorizedException",
    "UnprocessableEntityException",
]
