"""WorkOS-specific exceptions for error handling."""
from __future__ import annotations
from typing import Any, Dict, List, Optional


class WorkOSError(Exception):
    """Base exception for all WorkOS SDK operations."""
    pass


class NoApiKeyProvidedException(WorkOSError):
    """No API key was passed to the client or found in WORKOS_API_KEY."""

    def __init__(self):
        super().__init__(
            "Missing API key. Pass it to the WorkOS constructor or set WORKOS_API_KEY."
        )


class SignatureVerificationException(WorkOSError):
    """Webhook or action signature could not be verified.

    Raised for a malformed header, a timestamp outside the tolerance
    window, or a digest that matches none of the header's candidates.
    """
    pass


class HttpClientError(WorkOSError):
    """Non-2xx response from the transport, before status mapping.

    Attributes:
        status: HTTP status code
        headers: Response headers
        data: Decoded JSON body (or an empty dict when the body is not JSON)
    """

    def __init__(self, status: int, headers: Dict[str, str], data: Dict[str, Any], message: str = ""):
        self.status = status
        self.headers = headers
        self.data = data
        super().__init__(message or f"[{status}] The request could not be completed.")


class ApiException(WorkOSError):
    """HTTP error from the WorkOS API mapped to a typed exception.

    Attributes:
        status: HTTP status code
        request_id: Value of the X-Request-ID response header
        message: Error message from response
    """

    status: int = 0

    def __init__(self, message: str, request_id: str = "", status: Optional[int] = None):
        if status is not None:
            self.status = status
        self.request_id = request_id
        self.message = message
        super().__init__(f"[{self.status}] {message}" + (f" (request {request_id})" if request_id else ""))


class BadRequestException(ApiException):
    """400 with a machine-readable code and field errors."""

    status = 400

    def __init__(self, code: str, errors: List[Dict[str, Any]], message: Optional[str] = None, request_id: str = ""):
        self.code = code
        self.errors = errors
        super().__init__(message or "Bad request", request_id)


class UnauthorizedException(ApiException):
    """401 - the API key is missing, revoked or invalid."""

    status = 401

    def __init__(self, request_id: str = ""):
        super().__init__("Could not authorize the request. Maybe your API key is invalid?", request_id)


class NotFoundException(ApiException):
    """404 - the requested resource does not exist."""

    status = 404

    def __init__(self, path: str, code: Optional[str] = None, message: Optional[str] = None, request_id: str = ""):
        self.path = path
        self.code = code
        super().__init__(message or f"The requested path '{path}' could not be found.", request_id)


class ConflictException(ApiException):
    """409 - the request conflicts with the current resource state."""

    status = 409

    def __init__(self, message: Optional[str] = None, error: Optional[str] = None, request_id: str = ""):
        self.error = error
        super().__init__(message or error or "Request conflicts with the current state.", request_id)


class UnprocessableEntityException(ApiException):
    """422 - validation failed.

    Attributes:
        code: Error code returned by the API
        errors: List of ``{"field": ..., "code": ...}`` entries
    """

    status = 422

    def __init__(
        self,
        code: Optional[str] = None,
        errors: Optional[List[Dict[str, Any]]] = None,
        message: Optional[str] = None,
        request_id: str = "",
    ):
        self.code = code
        self.errors = errors or []
        if not message:
            if self.errors:
                fields = ", ".join(f"{e.get('field')}: {e.get('code')}" for e in self.errors)
                message = f"The following requirement{'s' if len(self.errors) > 1 else ''} must be met: {fields}"
            else:
                message = "Unprocessable entity"
        super().__init__(message, request_id)


class RateLimitExceededException(ApiException):
    """429 - too many requests.

    Attributes:
        retry_after: Seconds to wait before retrying, from the Retry-After header
    """

    status = 429

    def __init__(self, message: Optional[str] = None, request_id: str = "", retry_after: Optional[float] = None):
        self.retry_after = retry_after
        super().__init__(message or "Rate limit exceeded", request_id)


class OauthException(ApiException):
    """OAuth-shaped error body (``error`` / ``error_description``)."""

    def __init__(
        self,
        status: int,
        request_id: str = "",
        error: Optional[str] = None,
        error_description: Optional[str] = None,
        raw_data: Optional[Dict[str, Any]] = None,
    ):
        self.error = error
        self.error_description = error_description
        self.raw_data = raw_data or {}
        if error and error_description:
            message = f"Error: {error}\nError Description: {error_description}"
        elif error:
            message = f"Error: {error}"
        else:
            message = "An error has occurred."
        super().__init__(message, request_id, status=status)


class GenericServerException(ApiException):
    """Any other error status."""

    def __init__(self, status: int, message: Optional[str] = None, raw_data: Optional[Dict[str, Any]] = None, request_id: str = ""):
        self.raw_data = raw_data or {}
        super().__init__(message or "The request could not be completed.", request_id, status=status)
