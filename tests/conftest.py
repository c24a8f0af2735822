"""Pytest configuration and fixtures."""

import asyncio
import json
from typing import AsyncGenerator, List, Optional

import httpx
import pytest

from shortly.api_client import ShortlyAPIClient
from shortly.client import ShortlyClient
from shortly.config import ClientConfig
from shortly.errors import AuthError
from shortly.identity import IdentityProvider
from shortly.models import Principal
from shortly.verification import VerificationWidget
from shortly.common.logging_config import setup_logging

SHORTEN_URL = "https://api.s.ly/shorten"
HISTORY_URL = "https://api.s.ly/user/"


class FakeBackend:
    """Stands in for the shortening backend behind an httpx.MockTransport.

    Responses are queued per endpoint; an ``asyncio.Event`` in ``gate``
    holds requests until the test releases it.
    """

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.shorten_responses: List = []
        self.history_responses: List = []
        self.gate: Optional[asyncio.Event] = None

    @property
    def shorten_calls(self) -> List[httpx.Request]:
        return [r for r in self.requests if str(r.url) == SHORTEN_URL]

    @property
    def history_calls(self) -> List[httpx.Request]:
        return [r for r in self.requests if str(r.url).startswith(HISTORY_URL)]

    def shorten_bodies(self) -> List[dict]:
        return [json.loads(r.content) for r in self.shorten_calls]

    async def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.gate is not None:
            await self.gate.wait()

        queue = self.shorten_responses if str(request.url) == SHORTEN_URL else self.history_responses
        outcome = queue.pop(0) if queue else httpx.Response(500, json={"error": "no response queued"})
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class FakeIdentityProvider(IdentityProvider):
    def __init__(self, principal: Optional[Principal] = None, fail_sign_out: bool = False):
        self.principal = principal
        self.fail_sign_out = fail_sign_out
        self.sign_ins = 0
        self.sign_outs = 0
        self.gate: Optional[asyncio.Event] = None

    async def sign_in(self) -> Principal:
        self.sign_ins += 1
        if self.gate is not None:
            await self.gate.wait()
        if self.principal is None:
            raise AuthError("popup closed by user")
        return self.principal

    async def sign_out(self) -> None:
        self.sign_outs += 1
        if self.fail_sign_out:
            raise AuthError("network unavailable")


class FakeWidget(VerificationWidget):
    def __init__(self, tokens: Optional[List[str]] = None):
        super().__init__("test-site-key")
        self.tokens = list(tokens or [])
        self.resets = 0

    async def request_token(self) -> str:
        return self.tokens.pop(0)

    def reset(self) -> None:
        self.resets += 1


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def config() -> ClientConfig:
    """Create test configuration."""
    return ClientConfig(
        shorten_url=SHORTEN_URL,
        history_url=HISTORY_URL,
        backend_base_url="https://s.ly/",
        redirect_base_url="https://api.s.ly/",
        widget_site_key="test-site-key",
    )


@pytest.fixture
def backend() -> FakeBackend:
    """Create the fake shortening backend."""
    return FakeBackend()


@pytest.fixture
def alice() -> Principal:
    """Create a signed-in test user."""
    return Principal(email="alice@example.com", display_name="Alice", avatar_url="https://img.example.com/a.png")


@pytest.fixture
def provider(alice) -> FakeIdentityProvider:
    """Create an identity provider that signs in as alice."""
    return FakeIdentityProvider(principal=alice)


@pytest.fixture
def widget() -> FakeWidget:
    """Create a widget holding three tokens."""
    return FakeWidget(tokens=["tok-1", "tok-2", "tok-3"])


@pytest.fixture
async def api(config, backend, logger) -> AsyncGenerator[ShortlyAPIClient, None]:
    """Create an API client backed by the fake backend."""
    http = httpx.AsyncClient(transport=httpx.MockTransport(backend.handle))
    client = ShortlyAPIClient(config, http_client=http, logger=logger)

    yield client

    await http.aclose()


@pytest.fixture
async def client(config, provider, widget, api, logger) -> ShortlyClient:
    """Create the client under test."""
    return ShortlyClient(config, provider, widget, api=api, logger=logger)


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]
