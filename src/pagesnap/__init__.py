"""
pagesnap - Capture web page screenshots behind an SSRF-safe URL validator.

Usage:
    from pagesnap import capture_screenshot, check_url

    result = await capture_screenshot("https://example.com", width=1280)
"""

__version__ = "1.0.0"

# Public API exports
from .api import (
    capture_screenshot,
    check_url,
    ScreenshotResult,
    UrlCheckResult,
)

from .safety.url_validator import UrlValidationError
from .capture.errors import CaptureFailure

__all__ = [
    # Version
    "__version__",
    # Main functions
    "capture_screenshot",
    "check_url",
    # Result types
    "ScreenshotResult",
    "UrlCheckResult",
    # Exceptions
    "UrlValidationError",
    "CaptureFailure",
]
