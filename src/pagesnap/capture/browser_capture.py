"""
Screenshot capture using Pyppeteer.

Every capture gets its own Chromium process. Nothing is pooled or reused, so
cookies, cache and storage never leak between untrusted targets. The browser
is closed on every exit path: success, navigation timeout, capture timeout,
network failure or any unexpected error.
"""

import asyncio
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from pyppeteer import launch
from pyppeteer.browser import Browser
from pyppeteer.errors import TimeoutError as PyppeteerTimeoutError
from pyppeteer.page import Page

from ..safety.url_validator import ValidatedUrl, validate_url
from ..safety.viewport import ViewportSpec, normalize_viewport
from .errors import CaptureFailure, FailureKind, infer_failure_kind


DEFAULT_NAVIGATION_TIMEOUT = 30.0  # seconds
DEFAULT_CAPTURE_TIMEOUT = 30.0  # seconds

# Container-compatible Chromium flags
CHROMIUM_ARGS = [
    '--no-sandbox',
    '--disable-setuid-sandbox',
    '--disable-dev-shm-usage',
    '--disable-accelerated-2d-canvas',
    '--no-first-run',
    '--no-zygote',
    '--disable-gpu',
]


@dataclass(frozen=True)
class CaptureRequest:
    """A validated capture job."""
    url: ValidatedUrl
    viewport: ViewportSpec
    full_page: bool = False


@dataclass
class CaptureResult:
    """A rendered screenshot."""
    image: bytes  # PNG
    duration_ms: int
    viewport: ViewportSpec
    full_page: bool


class PyppeteerSession:
    """One Chromium process with a single page."""

    def __init__(self, browser: Browser, page: Page):
        self.browser = browser
        self.page = page

    async def goto(self, url: str, timeout: float) -> None:
        # networkidle0: no network connections for at least 500 ms
        await self.page.goto(url, {
            'waitUntil': 'networkidle0',
            'timeout': int(timeout * 1000),
        })

    async def screenshot(self, full_page: bool) -> bytes:
        return await self.page.screenshot({
            'type': 'png',
            'fullPage': full_page,
        })

    async def close(self) -> None:
        await self.browser.close()


# A session factory opens a fresh session sized to the viewport. Sessions must
# provide goto(url, timeout), screenshot(full_page) and close().
SessionFactory = Callable[[ViewportSpec], Awaitable[PyppeteerSession]]


def pyppeteer_session_factory(
    executable_path: Optional[str] = None,
    headless: bool = True,
) -> SessionFactory:
    """
    Build a factory that launches headless Chromium for each capture.

    Args:
        executable_path: Chromium binary (None uses pyppeteer's default)
        headless: Run browser in headless mode
    """

    async def open_session(viewport: ViewportSpec) -> PyppeteerSession:
        options = {
            'headless': headless,
            'args': CHROMIUM_ARGS,
            'handleSIGINT': False,
            'handleSIGTERM': False,
            'handleSIGHUP': False,
        }
        if executable_path:
            options['executablePath'] = executable_path

        browser = await launch(**options)

        # The browser is ours until the session is handed back
        try:
            page: Page = await browser.newPage()
            await page.setViewport({
                'width': viewport.width,
                'height': viewport.height,
            })
        except BaseException:
            await browser.close()
            raise

        return PyppeteerSession(browser, page)

    return open_session


class ScreenshotCapturer:
    """Drive one isolated browser session per capture."""

    def __init__(
        self,
        session_factory: SessionFactory | None = None,
        navigation_timeout: float = DEFAULT_NAVIGATION_TIMEOUT,
        capture_timeout: float = DEFAULT_CAPTURE_TIMEOUT,
    ):
        self.session_factory = session_factory or pyppeteer_session_factory()
        self.navigation_timeout = navigation_timeout
        self.capture_timeout = capture_timeout

    async def capture(
        self,
        request: CaptureRequest,
        timeout: float | None = None,
    ) -> CaptureResult:
        """
        Render a validated URL to PNG.

        Args:
            request: Validated URL, normalized viewport and fullPage flag
            timeout: Optional deadline (seconds) overriding both the navigation
                and the capture deadline for this call

        Returns:
            CaptureResult with PNG bytes and elapsed wall-clock time

        Raises:
            CaptureFailure: On any non-success path, after the browser is closed
        """
        navigation_timeout = timeout or self.navigation_timeout
        capture_timeout = timeout or self.capture_timeout
        viewport = request.viewport
        href = request.url.href

        session = None
        start = time.monotonic()

        try:
            print(f"[Capture] Launching browser ({viewport.width}x{viewport.height})...", flush=True)
            session = await self.session_factory(viewport)

            print(f"[Capture] Navigating to {href}...", flush=True)
            await self._with_deadline(
                session.goto(href, navigation_timeout),
                navigation_timeout,
                "Navigation",
            )

            image = await self._with_deadline(
                session.screenshot(request.full_page),
                capture_timeout,
                "Screenshot",
            )

            duration_ms = int((time.monotonic() - start) * 1000)
            print(f"[Capture] Captured {len(image)} bytes in {duration_ms}ms", flush=True)

            return CaptureResult(
                image=image,
                duration_ms=duration_ms,
                viewport=viewport,
                full_page=request.full_page,
            )

        except CaptureFailure as e:
            print(f"[Capture] Capture failed: {e.raw_message}", flush=True)
            raise

        except PyppeteerTimeoutError as e:
            print(f"[Capture] Capture failed: {e}", flush=True)
            raise CaptureFailure(str(e) or "Timeout exceeded", kind=FailureKind.TIMEOUT) from e

        except Exception as e:
            message = str(e) or e.__class__.__name__
            print(f"[Capture] Capture failed: {message}", flush=True)
            raise CaptureFailure(message, kind=infer_failure_kind(message)) from e

        finally:
            if session is not None:
                await self._close(session)

    async def capture_url(
        self,
        url: str,
        width: int | None = None,
        height: int | None = None,
        full_page: bool = False,
    ) -> bytes:
        """
        Validate, normalize and capture in one call.

        Raises:
            UrlValidationError: If the URL is refused (no browser is launched)
            CaptureFailure: If the capture fails
        """
        request = CaptureRequest(
            url=validate_url(url),
            viewport=normalize_viewport(width, height),
            full_page=full_page,
        )
        result = await self.capture(request)
        return result.image

    async def _with_deadline(self, awaitable, timeout: float, step: str):
        try:
            return await asyncio.wait_for(awaitable, timeout=timeout)
        except (asyncio.TimeoutError, PyppeteerTimeoutError) as e:
            raise CaptureFailure(
                f"{step} timeout of {int(timeout * 1000)} ms exceeded",
                kind=FailureKind.TIMEOUT,
            ) from e

    async def _close(self, session) -> None:
        try:
            await session.close()
        except Exception as e:
            # A close error must not mask the capture outcome
            print(f"[Capture] WARNING: browser close failed: {e}", flush=True)
        else:
            print("[Capture] Browser closed", flush=True)
