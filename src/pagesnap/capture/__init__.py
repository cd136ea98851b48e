"""
Capture module for pagesnap.

Provides browser-based screenshot capture using Pyppeteer and the
classification of capture failures into API error codes.
"""

from .errors import (
    CaptureFailure,
    ClassifiedError,
    FailureKind,
    classify_failure,
    infer_failure_kind,
)
from .browser_capture import (
    CaptureRequest,
    CaptureResult,
    PyppeteerSession,
    ScreenshotCapturer,
    SessionFactory,
    pyppeteer_session_factory,
    DEFAULT_NAVIGATION_TIMEOUT,
    DEFAULT_CAPTURE_TIMEOUT,
)

__all__ = [
    'CaptureFailure',
    'ClassifiedError',
    'FailureKind',
    'classify_failure',
    'infer_failure_kind',
    'CaptureRequest',
    'CaptureResult',
    'PyppeteerSession',
    'ScreenshotCapturer',
    'SessionFactory',
    'pyppeteer_session_factory',
    'DEFAULT_NAVIGATION_TIMEOUT',
    'DEFAULT_CAPTURE_TIMEOUT',
]
