"""Pytest shared fixtures for SDK tests."""
import hashlib
import hmac
import json
import pathlib
import sys
from typing import Any, Dict, List, Optional

# Add project root to Python path
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from workos import WorkOS
from workos.core.signature import SignatureProvider

FIXTURES_DIR = ROOT / "tests" / "fixtures"
NOW_MS = 1_700_000_000_000
SECRET = "secret"

WORKOS_ENV_VARS = (
    "WORKOS_API_KEY",
    "WORKOS_CLIENT_ID",
    "WORKOS_API_HOSTNAME",
    "WORKOS_HTTPS",
    "WORKOS_PORT",
    "WORKOS_REQUEST_TIMEOUT",
)


def load_fixture(name: str) -> Dict[str, Any]:
    return json.loads((FIXTURES_DIR / name).read_text(encoding="utf-8"))


def sign(payload: Any, secret: str = SECRET, timestamp: int = NOW_MS) -> str:
    """Build a signature header independently of the SDK code under test."""
    body = payload if isinstance(payload, str) else json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
    digest = hmac.new(secret.encode(), f"{timestamp}.{body}".encode(), hashlib.sha256).hexdigest()
    return f"t={timestamp}, v1={digest}"


def make_response(status_code: int = 200, payload: Any = None, headers: Optional[Dict[str, str]] = None) -> requests.Response:
    resp = requests.Response()
    resp.status_code = status_code
    resp.headers = CaseInsensitiveDict(headers or {})
    resp._content = b"" if payload is None else json.dumps(payload).encode("utf-8")
    resp.encoding = "utf-8"
    return resp


class StubSession:
    """Stands in for requests.Session: replays queued responses and records calls."""

    def __init__(self, responses: Optional[List[Any]] = None):
        self.headers: Dict[str, str] = {}
        self.responses = list(responses or [])
        self.calls: List[Dict[str, Any]] = []

    def queue(self, *responses: Any) -> None:
        self.responses.extend(responses)

    def request(self, method, url, params=None, **kwargs):
        self.calls.append({"method": method, "url": url, "params": params, **kwargs})
        if not self.responses:
            raise RuntimeError(f"Unexpected HTTP {method} in unit test: {url}")
        result = self.responses.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


# ─────────────────────────────────────────────────────────────────────────────
# Network Guard Rails
# ─────────────────────────────────────────────────────────────────────────────
@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch):
    """Keep host WORKOS_* variables and real HTTP out of unit tests."""
    for var in WORKOS_ENV_VARS:
        monkeypatch.delenv(var, raising=False)

    def _no_network(self, method, url, *args, **kwargs):
        raise RuntimeError(f"Unexpected HTTP {method} in unit test: {url}")

    monkeypatch.setattr(requests.Session, "request", _no_network)


@pytest.fixture()
def fixture_data():
    """Loader for JSON files in tests/fixtures."""
    return load_fixture


@pytest.fixture()
def sign_header():
    return sign


@pytest.fixture()
def response_factory():
    return make_response


@pytest.fixture()
def clock():
    """Mutable fixed clock in epoch milliseconds."""
    class _Clock:
        now = NOW_MS

        def __call__(self) -> int:
            return self.now

    return _Clock()


@pytest.fixture()
def signature_provider(clock):
    return SignatureProvider(clock=clock)


@pytest.fixture()
def stub_session():
    return StubSession()


@pytest.fixture()
def workos(stub_session):
    return WorkOS("sk_test_Sz3IQjepeSWaI4cMS4ms4sMuU", session=stub_session)
