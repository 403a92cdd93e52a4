"""WorkOS client entry point.

Wires configuration, the HTTP transport, the webhooks/actions façades and
the paginated list helper.
"""
from __future__ import annotations
import logging
from typing import Any, Callable, Dict, Optional, TypeVar

import requests

from workos.actions import Actions
from workos.config.settings import ClientConfig, load_settings
from workos.core.client import HttpClient
from workos.core.exceptions import NoApiKeyProvidedException
from workos.core.pagination import DEFAULT_PAGE_DELAY_SECONDS, AutoPaginatable, WorkOSList
from workos.core.serializers import deserialize_list
from workos.core.signature import SignatureProvider
from workos.webhooks import Webhooks

logger = logging.getLogger(__name__)

VERSION = "0.1.0"
DEFAULT_ORDER = "desc"

T = TypeVar("T")


class WorkOS:
    """Client for the WorkOS API.

    Usage:
        workos = WorkOS("sk_test_123", client_id="client_123")
        event = workos.webhooks.construct_event(payload=body, sig_header=header, secret=secret)

    Args:
        api_key: Secret API key (falls back to WORKOS_API_KEY)
        client_id: Client ID (falls back to WORKOS_CLIENT_ID)
        session: Optional requests session shared with the transport
        **options: Any ClientConfig field (api_hostname, https, port,
            request_timeout, app_info)

    Raises:
        NoApiKeyProvidedException: If no API key is available
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        client_id: Optional[str] = None,
        session: Optional[requests.Session] = None,
        **options: Any,
    ):
        self.config: ClientConfig = load_settings(api_key=api_key, client_id=client_id, **options)
        if not self.config.api_key:
            raise NoApiKeyProvidedException()

        self.client = HttpClient(
            self.config.base_url,
            self.config.api_key,
            user_agent=self.user_agent,
            timeout=self.config.request_timeout,
            session=session,
        )
        self.webhooks = Webhooks(SignatureProvider())
        self.actions = Actions(SignatureProvider())

    @property
    def base_url(self) -> str:
        return self.config.base_url

    @property
    def client_id(self) -> Optional[str]:
        return self.config.client_id

    @property
    def version(self) -> str:
        return VERSION

    @property
    def user_agent(self) -> str:
        agent = f"workos-python/{VERSION}"
        app_info = self.config.app_info
        if app_info.get("name") and app_info.get("version"):
            agent += f" {app_info['name']}: {app_info['version']}"
        return agent

    def get(self, path: str, params: Optional[Dict[str, Any]] = None, **kwargs) -> Any:
        return self.client.get(path, params=params, **kwargs)

    def post(self, path: str, json: Any = None, **kwargs) -> Any:
        return self.client.post(path, json=json, **kwargs)

    def put(self, path: str, json: Any = None, **kwargs) -> Any:
        return self.client.put(path, json=json, **kwargs)

    def delete(self, path: str, params: Optional[Dict[str, Any]] = None, **kwargs) -> None:
        self.client.delete(path, params=params, **kwargs)

    def fetch_and_deserialize(
        self,
        path: str,
        deserializer: Callable[[Dict[str, Any]], T],
        params: Optional[Dict[str, Any]] = None,
        page_delay: float = DEFAULT_PAGE_DELAY_SECONDS,
    ) -> AutoPaginatable[T]:
        """Fetch the first page of a list endpoint.

        Args:
            path: List endpoint path, e.g. "/directory_users"
            deserializer: Mapper applied to every item
            params: Query parameters; ``order`` defaults to "desc"
            page_delay: Pause between pages when draining

        Returns:
            AutoPaginatable over the result set; later pages reuse ``params``
            with the ``after`` cursor swapped in
        """
        query = {**(params or {})}
        query.setdefault("order", DEFAULT_ORDER)

        def fetch_page(page_params: Dict[str, Any]) -> WorkOSList[T]:
            body = self.client.get(path, params=page_params)
            if not isinstance(body, dict):
                raise ValueError(f"Received malformed list response from {path}")
            return deserialize_list(body, deserializer)

        first_page = fetch_page(query)
        logger.debug("Fetched %d item(s) from %s", len(first_page.data), path)
        return AutoPaginatable(first_page, fetch_page, query, page_delay=page_delay)
