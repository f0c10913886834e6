"""Pytest configuration and fixtures for snap CLI tests."""

import base64
import io
import json
import threading
from typing import Dict, List, Optional

import httpx
import pytest
from aiohttp.test_utils import unused_port
from rich.console import Console

from config.session import SnapConfig
from utils.storage import ConfigStore

SESSION_ENV_VARS = [
    "SNAP_ACCESSTOKEN",
    "SNAP_NAME",
    "SNAP_EMAIL",
    "SNAP_APIURL",
    "SNAP_CLIENTID",
    "SNAP_AUTHDOMAIN",
    "SNAP_REDIRECTURL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep SNAP_* overrides from the developer's shell out of the tests."""
    for name in SESSION_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def make_jwt(claims: Dict) -> str:
    """Build an unsigned JWT carrying the given claims."""
    def encode(part: Dict) -> str:
        raw = json.dumps(part).encode()
        return base64.urlsafe_b64encode(raw).rstrip(b"=").decode()

    return f"{encode({'alg': 'RS256', 'typ': 'JWT'})}.{encode(claims)}.c2lnbmF0dXJl"


@pytest.fixture
def store(tmp_path) -> ConfigStore:
    return ConfigStore(str(tmp_path / "snap" / "config.json"))


@pytest.fixture
def port() -> int:
    return unused_port()


@pytest.fixture
def snap_config(port) -> SnapConfig:
    return SnapConfig(
        api_url="https://api.example.com",
        client_id="client-123",
        auth_domain="auth.example.com",
        redirect_url=f"http://127.0.0.1:{port}",
    )


@pytest.fixture
def console() -> Console:
    return Console(file=io.StringIO(), width=200)


def console_text(console: Console) -> str:
    return console.file.getvalue()


class TokenEndpoint:
    """Stub identity provider token endpoint for httpx.MockTransport."""

    def __init__(self, status_code: int = 200, body: Optional[Dict] = None, text: Optional[str] = None):
        self.status_code = status_code
        self.body = body
        self.text = text
        self.requests: List[httpx.Request] = []
        self.transport = httpx.MockTransport(self)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, json=self.body or {})

    def form(self, index: int = 0) -> Dict[str, str]:
        pairs = httpx.QueryParams(self.requests[index].content.decode())
        return dict(pairs)


class FakeBrowser:
    """Stands in for webbrowser.open: follows the redirect back to the CLI.

    The request runs in a thread, like a real browser would, so the event
    loop serving the callback keeps running.
    """

    def __init__(self, callback_url: Optional[str], opened: bool = True):
        self.callback_url = callback_url
        self.opened = opened
        self.urls: List[str] = []
        self.response: Optional[httpx.Response] = None
        self._thread: Optional[threading.Thread] = None

    def __call__(self, url: str) -> bool:
        self.urls.append(url)
        if self.callback_url:
            self._thread = threading.Thread(target=self._follow_redirect, daemon=True)
            self._thread.start()
        return self.opened

    def _follow_redirect(self):
        with httpx.Client(trust_env=False, timeout=10) as client:
            self.response = client.get(self.callback_url)

    def join(self):
        if self._thread:
            self._thread.join(timeout=10)


class FakeAccountAPI:
    """Records account/profile calls made during provisioning."""

    def __init__(
        self,
        account: str = "",
        valid_names: Optional[List[str]] = None,
        create_status: str = "success",
        profile_status: str = "success",
    ):
        self.account = account
        self.valid_names = valid_names or []
        self.create_status = create_status
        self.profile_status = profile_status
        self.validated: List[str] = []
        self.created: List[str] = []
        self.profiles: List[Dict] = []

    def get_account(self) -> str:
        return self.account

    def validate_account(self, account: str) -> bool:
        self.validated.append(account)
        return account in self.valid_names

    def create_account(self, account: str) -> str:
        self.created.append(account)
        return self.create_status

    def store_profile(self, profile: Dict) -> str:
        self.profiles.append(profile)
        return self.profile_status


def scripted_input(lines: List[str]):
    """input() replacement returning the given lines, then EOF."""
    remaining = list(lines)
    prompts: List[str] = []

    def fake_input(prompt: str = "") -> str:
        prompts.append(prompt)
        if not remaining:
            raise EOFError
        return remaining.pop(0)

    fake_input.prompts = prompts
    return fake_input
