"""
Shared fixtures: fake browser sessions standing in for Chromium.
"""

import asyncio

import pytest
from fastapi.testclient import TestClient

from pagesnap.config import Settings
from pagesnap.server.app import create_app


PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32

TEST_SECRET = "test-proxy-secret"
TEST_HOST = "pagesnap.p.rapidapi.com"


class FakeSession:
    """Records calls and injects faults at chosen steps."""

    def __init__(
        self,
        image: bytes = PNG_BYTES,
        goto_error: Exception | None = None,
        screenshot_error: Exception | None = None,
        close_error: Exception | None = None,
        goto_delay: float = 0.0,
        screenshot_delay: float = 0.0,
    ):
        self.image = image
        self.goto_error = goto_error
        self.screenshot_error = screenshot_error
        self.close_error = close_error
        self.goto_delay = goto_delay
        self.screenshot_delay = screenshot_delay
        self.visited: list[str] = []
        self.full_page_requests: list[bool] = []
        self.close_count = 0

    async def goto(self, url: str, timeout: float) -> None:
        self.visited.append(url)
        if self.goto_delay:
            await asyncio.sleep(self.goto_delay)
        if self.goto_error:
            raise self.goto_error

    async def screenshot(self, full_page: bool) -> bytes:
        self.full_page_requests.append(full_page)
        if self.screenshot_delay:
            await asyncio.sleep(self.screenshot_delay)
        if self.screenshot_error:
            raise self.screenshot_error
        return self.image

    async def close(self) -> None:
        self.close_count += 1
        if self.close_error:
            raise self.close_error


class FakeSessionFactory:
    """Session factory that hands out a new FakeSession per capture."""

    def __init__(self, open_error: Exception | None = None, **session_kwargs):
        self.open_error = open_error
        self.session_kwargs = session_kwargs
        self.viewports = []
        self.sessions: list[FakeSession] = []

    async def __call__(self, viewport):
        self.viewports.append(viewport)
        if self.open_error:
            raise self.open_error
        session = FakeSession(**self.session_kwargs)
        self.sessions.append(session)
        return session

    @property
    def call_count(self) -> int:
        return len(self.viewports)


@pytest.fixture
def fake_factory():
    """The FakeSessionFactory class, for building factories with injected faults."""
    return FakeSessionFactory


@pytest.fixture
def settings():
    return Settings(
        rapidapi_proxy_secret=TEST_SECRET,
        rapidapi_host=TEST_HOST,
        navigation_timeout=5.0,
        capture_timeout=5.0,
    )


@pytest.fixture
def rapidapi_headers():
    return {
        "X-RapidAPI-Key": "user-key",
        "X-RapidAPI-Host": TEST_HOST,
        "X-RapidAPI-Proxy-Secret": TEST_SECRET,
        "X-RapidAPI-User": "alice",
        "X-RapidAPI-Subscription": "BASIC",
    }


@pytest.fixture
def make_client(settings):
    """Build a TestClient around an app using the given session factory."""

    def _make(factory=None, app_settings=None):
        factory = factory or FakeSessionFactory()
        app = create_app(app_settings or settings, session_factory=factory)
        return TestClient(app), factory

    return _make
