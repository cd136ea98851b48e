"""
Public API for pagesnap.

This is the primary interface for programmatic use. The HTTP server, the CLI,
and other tools should use these functions rather than wiring the validator,
viewport policy and capturer together themselves.

Example usage:
    import asyncio
    from pagesnap.api import capture_screenshot

    result = asyncio.run(capture_screenshot("https://example.com", full_page=True))
    Path("example.png").write_bytes(result.image)
    print(f"Captured {result.width}x{result.height} in {result.duration_ms}ms")
"""

from dataclasses import dataclass

from .capture.browser_capture import CaptureRequest, ScreenshotCapturer
from .safety.url_validator import UrlValidationError, validate_url
from .safety.viewport import normalize_viewport, parse_full_page
from .tiers import get_tier_limits


# ============================================================================
# Public Data Classes
# ============================================================================


@dataclass
class ScreenshotResult:
    """Result of a screenshot capture."""

    url: str  # normalized href that was rendered
    image: bytes  # PNG
    width: int
    height: int
    full_page: bool
    duration_ms: int


@dataclass
class UrlCheckResult:
    """Result of checking a URL against the safety rules."""

    url: str
    is_valid: bool
    href: str | None = None
    hostname: str | None = None
    code: str | None = None
    message: str | None = None


# ============================================================================
# Main Public API Functions
# ============================================================================


async def capture_screenshot(
    url: str,
    *,
    width=None,
    height=None,
    full_page=False,
    tier: str | None = None,
    timeout: float | None = None,
    capturer: ScreenshotCapturer | None = None,
) -> ScreenshotResult:
    """
    Capture a screenshot of a URL.

    Validates the URL, normalizes the viewport, then renders the page in a
    fresh browser. A refused URL never reaches the browser.

    Args:
        url: URL to capture (http or https)
        width: Viewport width; unparsable values fall back to 1366
        height: Viewport height; unparsable values fall back to 768
        full_page: Capture the full scrollable page instead of the viewport
        tier: Optional subscription tier whose viewport limits apply
        timeout: Optional per-step deadline in seconds
        capturer: Capturer to use (defaults to headless Chromium)

    Returns:
        ScreenshotResult with PNG bytes and the dimensions used

    Raises:
        UrlValidationError: If the URL is refused
        CaptureFailure: If the capture fails
    """
    target = validate_url(url)
    limits = get_tier_limits(tier) if tier else None
    request = CaptureRequest(
        url=target,
        viewport=normalize_viewport(width, height, limits),
        full_page=parse_full_page(full_page),
    )

    capturer = capturer or ScreenshotCapturer()
    result = await capturer.capture(request, timeout=timeout)

    return ScreenshotResult(
        url=target.href,
        image=result.image,
        width=result.viewport.width,
        height=result.viewport.height,
        full_page=result.full_page,
        duration_ms=result.duration_ms,
    )


def check_url(url) -> UrlCheckResult:
    """
    Check whether a URL would be accepted for capture.

    Never raises; rejections are reported in the result.
    """
    try:
        target = validate_url(url)
    except UrlValidationError as e:
        return UrlCheckResult(
            url=url if isinstance(url, str) else repr(url),
            is_valid=False,
            code=e.code,
            message=e.message,
        )

    return UrlCheckResult(
        url=url,
        is_valid=True,
        href=target.href,
        hostname=target.hostname,
    )
