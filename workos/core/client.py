"""Low-level HTTP client for the WorkOS API.

Handles authentication headers, bounded retries and error translation.
"""
from __future__ import annotations
import logging
from typing import Any, Dict, Optional

import requests
from requests.structures import CaseInsensitiveDict
from tenacity import (
    RetryCallState,
    before_sleep_log,
    retry,
    retry_if_exception_type,
    retry_if_result,
    stop_after_attempt,
    wait_fixed,
)

from .exceptions import (
    BadRequestException,
    ConflictException,
    GenericServerException,
    HttpClientError,
    NotFoundException,
    OauthException,
    RateLimitExceededException,
    UnauthorizedException,
    UnprocessableEntityException,
)

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 30
MAX_RETRY_ATTEMPTS = 3
RETRY_DELAY_SECONDS = 0.5
RETRY_STATUS_CODES = (429, 500, 502, 503, 504)

HEADER_AUTHORIZATION = "Authorization"
HEADER_IDEMPOTENCY_KEY = "Idempotency-Key"
HEADER_REQUEST_ID = "X-Request-ID"
HEADER_RETRY_AFTER = "Retry-After"

_fixed_wait = wait_fixed(RETRY_DELAY_SECONDS)


def _is_retryable_response(resp: requests.Response) -> bool:
    return resp.status_code in RETRY_STATUS_CODES


def _wait_retry_after(retry_state: RetryCallState) -> float:
    """Fixed delay, unless a 429 names its own ``Retry-After``."""
    outcome = retry_state.outcome
    if outcome is not None and not outcome.failed:
        resp = outcome.result()
        if resp.status_code == 429:
            delay = _retry_after_seconds(resp)
            if delay is not None:
                return delay
    return _fixed_wait(retry_state)


def _last_outcome(retry_state: RetryCallState) -> requests.Response:
    """Hand back the final response, or re-raise the final transport error."""
    return retry_state.outcome.result()


class HttpClient:
    """HTTP client for the WorkOS API.

    Features:
    - Bearer authentication and User-Agent on every request
    - Bounded fixed-delay retry on RETRY_STATUS_CODES and connection errors
    - Centralized translation of error responses into typed exceptions

    Credentials are sent per request, so a session shared with other code
    never carries the WorkOS API key.

    Usage:
        client = HttpClient("https://api.workos.com", api_key="sk_test_123")
        body = client.get("/organizations", params={"limit": 10})
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        user_agent: str = "workos-python",
        timeout: float = REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        """Initialize the HTTP client.

        Args:
            base_url: API base URL, e.g. https://api.workos.com
            api_key: Secret API key sent as a Bearer token
            user_agent: User-Agent header value
            timeout: Per-request timeout in seconds
            session: Optional pre-configured requests session (left unmodified)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.headers = {
            HEADER_AUTHORIZATION: f"Bearer {api_key}",
            "User-Agent": user_agent,
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    def get(self, path: str, params: Optional[Dict[str, Any]] = None, **kwargs) -> Any:
        """Execute GET request and return the decoded JSON body (or None)."""
        return self._request("GET", path, params=params, **kwargs)

    def post(
        self,
        path: str,
        json: Any = None,
        params: Optional[Dict[str, Any]] = None,
        idempotency_key: Optional[str] = None,
        **kwargs,
    ) -> Any:
        """Execute POST request with a JSON body."""
        headers = kwargs.pop("headers", {})
        if idempotency_key:
            headers[HEADER_IDEMPOTENCY_KEY] = idempotency_key
        return self._request("POST", path, params=params, json=json, headers=headers, **kwargs)

    def put(
        self,
        path: str,
        json: Any = None,
        params: Optional[Dict[str, Any]] = None,
        idempotency_key: Optional[str] = None,
        **kwargs,
    ) -> Any:
        """Execute PUT request with a JSON body."""
        headers = kwargs.pop("headers", {})
        if idempotency_key:
            headers[HEADER_IDEMPOTENCY_KEY] = idempotency_key
        return self._request("PUT", path, params=params, json=json, headers=headers, **kwargs)

    def delete(self, path: str, params: Optional[Dict[str, Any]] = None, **kwargs) -> None:
        """Execute DELETE request. The API returns no body."""
        self._request("DELETE", path, params=params, **kwargs)

    def _request(self, method: str, path: str, params: Optional[Dict[str, Any]] = None, **kwargs) -> Any:
        url = f"{self.base_url}{path}"
        headers = {**self.headers, **(kwargs.pop("headers", None) or {})}

        resp = self._send(method, url, params=_clean_params(params), headers=headers, **kwargs)

        if resp.status_code >= 400:
            self._handle_error(path, _to_client_error(resp))
        return _json_or_none(resp)

    @retry(
        stop=stop_after_attempt(MAX_RETRY_ATTEMPTS),
        wait=_wait_retry_after,
        retry=(
            retry_if_exception_type((requests.ConnectionError, requests.Timeout))
            | retry_if_result(_is_retryable_response)
        ),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        retry_error_callback=_last_outcome,
    )
    def _send(self, method: str, url: str, **kwargs) -> requests.Response:
        logger.debug("%s %s", method, url)
        return self.session.request(method, url, timeout=self.timeout, **kwargs)

    def _handle_error(self, path: str, error: HttpClientError) -> None:
        """Centralized translation of HTTP error responses.

        Args:
            path: Request path, carried by NotFoundException
            error: Raw transport error

        Raises:
            ApiException subclass matching the status and body
        """
        status, data, headers = error.status, error.data, error.headers
        request_id = headers.get(HEADER_REQUEST_ID, "")
        message = data.get("message")
        code = data.get("code")
        errors = data.get("errors")

        if status == 401:
            raise UnauthorizedException(request_id) from error
        if status == 409:
            raise ConflictException(message=message, error=data.get("error"), request_id=request_id) from error
        if status == 422:
            raise UnprocessableEntityException(code=code, errors=errors, message=message, request_id=request_id) from error
        if status == 404:
            raise NotFoundException(path=path, code=code, message=message, request_id=request_id) from error
        if status == 429:
            raise RateLimitExceededException(message, request_id, _parse_retry_after(headers.get(HEADER_RETRY_AFTER))) from error
        if data.get("error") or data.get("error_description"):
            raise OauthException(status, request_id, data.get("error"), data.get("error_description"), data) from error
        if code and errors:
            raise BadRequestException(code=code, errors=errors, message=message, request_id=request_id) from error
        raise GenericServerException(status, message, data, request_id) from error


def _clean_params(params: Optional[Dict[str, Any]]) -> Optional[Dict[str, str]]:
    """Drop None/empty values and render booleans the way the API expects."""
    if not params:
        return None
    cleaned = {}
    for key, value in params.items():
        if value is None or value == "":
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        cleaned[key] = value
    return cleaned


def _json_or_none(resp: requests.Response) -> Any:
    if not resp.content:
        return None
    try:
        return resp.json()
    except ValueError:
        return None


def _to_client_error(resp: requests.Response) -> HttpClientError:
    data = _json_or_none(resp)
    if not isinstance(data, dict):
        data = {}
    return HttpClientError(resp.status_code, CaseInsensitiveDict(resp.headers), data)


def _parse_retry_after(value: Optional[str]) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def _retry_after_seconds(resp: requests.Response) -> Optional[float]:
    return _parse_retry_after(resp.headers.get(HEADER_RETRY_AFTER))
