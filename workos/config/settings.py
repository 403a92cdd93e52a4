"""Client settings loaded from environment variables and Docker secrets."""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_HOSTNAME = "api.workos.com"
DEFAULT_REQUEST_TIMEOUT = 30.0


def _load_secret_from_file(secret_name: str, env_var: str | None = None) -> str | None:
    """
    Load secret from /run/secrets (Docker secrets pattern).

    Priority:
    1. /run/secrets/{secret_name} (Docker secrets mount)
    2. Environment variable (fallback)

    Args:
        secret_name: Name of the secret file in /run/secrets
        env_var: Optional environment variable name to check as fallback

    Returns:
        Secret value or None if not found
    """
    secret_file = Path("/run/secrets") / secret_name

    if secret_file.exists() and secret_file.is_file():
        try:
            secret_value = secret_file.read_text().strip()
            if secret_value:
                logger.debug("Loaded %s from /run/secrets", secret_name)
                return secret_value
        except OSError as e:
            logger.warning("Failed to read /run/secrets/%s: %s", secret_name, e)

    if env_var:
        secret_value = os.getenv(env_var)
        if secret_value:
            return secret_value

    return None


def _env_bool(var_name: str, default: bool) -> bool:
    value = os.environ.get(var_name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_number(var_name: str, default: Optional[float], cast=float):
    value = os.environ.get(var_name)
    if value is None or not value.strip():
        return default
    try:
        return cast(value)
    except ValueError:
        raise RuntimeError(f"Environment variable {var_name} must be a number, got {value!r}.")


@dataclass
class ClientConfig:
    """WorkOS client configuration container."""
    api_key: Optional[str] = None
    client_id: Optional[str] = None

    # Transport
    api_hostname: str = DEFAULT_HOSTNAME
    https: bool = True
    port: Optional[int] = None
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    # User-Agent suffix: {"name": ..., "version": ...}
    app_info: dict[str, str] = field(default_factory=dict)

    @property
    def base_url(self) -> str:
        """Build ``scheme://host[:port]`` from hostname, https flag and port."""
        protocol = "https" if self.https else "http"
        url = f"{protocol}://{self.api_hostname}"
        if self.port:
            url = f"{url}:{self.port}"
        return url


def load_settings(**overrides) -> ClientConfig:
    """Load client settings from the environment; keyword arguments win.

    Environment:
        WORKOS_API_KEY (or /run/secrets/workos_api_key)
        WORKOS_CLIENT_ID
        WORKOS_API_HOSTNAME
        WORKOS_HTTPS
        WORKOS_PORT
        WORKOS_REQUEST_TIMEOUT
    """
    config = ClientConfig(
        api_key=_load_secret_from_file("workos_api_key", "WORKOS_API_KEY"),
        client_id=os.environ.get("WORKOS_CLIENT_ID") or None,
        api_hostname=os.environ.get("WORKOS_API_HOSTNAME") or DEFAULT_HOSTNAME,
        https=_env_bool("WORKOS_HTTPS", True),
        port=_env_number("WORKOS_PORT", None, int),
        request_timeout=_env_number("WORKOS_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT),
    )

    known = {f.name for f in fields(ClientConfig)}
    for key, value in overrides.items():
        if key not in known:
            raise TypeError(f"Unknown client setting: {key}")
        if value is not None:
            setattr(config, key, value)

    logger.debug("WorkOS settings: base_url=%s, client_id=%s", config.base_url, config.client_id or "-")
    return config
