"""
HTTP API for pagesnap.

Provides:
- GET /health - Health check
- GET /screenshot - Public endpoint (no auth, can be disabled)
- GET /v1/screenshot - RapidAPI endpoint (authenticated, tier-limited)
- GET /v1/info - API information and subscription limits
"""

from fastapi import Depends, FastAPI, Query, Request
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from .. import __version__
from ..capture.browser_capture import (
    CaptureRequest,
    ScreenshotCapturer,
    SessionFactory,
    pyppeteer_session_factory,
)
from ..capture.errors import CaptureFailure, classify_failure
from ..config import Settings, get_settings
from ..safety.url_validator import UrlValidationError, validate_url
from ..safety.viewport import (
    DEFAULT_HEIGHT,
    DEFAULT_WIDTH,
    MAX_SIZE,
    MIN_SIZE,
    normalize_viewport,
    parse_full_page,
)
from ..tiers import get_tier_limits
from .errors import ApiError
from .rapidapi import RapidAPIContext, rate_limit_headers, require_rapidapi


SUPPORTED_FORMATS = ["png"]


def create_app(
    settings: Settings | None = None,
    session_factory: SessionFactory | None = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Configuration (defaults to the process settings)
        session_factory: Browser session factory (defaults to headless
            Chromium via Pyppeteer)
    """
    settings = settings or get_settings()

    capturer = ScreenshotCapturer(
        session_factory=session_factory
        or pyppeteer_session_factory(executable_path=settings.chromium_executable),
        navigation_timeout=settings.navigation_timeout,
        capture_timeout=settings.capture_timeout,
    )

    web_app = FastAPI(
        title="pagesnap",
        description="Capture web page screenshots",
        version=__version__,
    )
    web_app.state.settings = settings
    web_app.state.capturer = capturer

    if not settings.rapidapi_proxy_secret:
        print("[Config] WARNING: RAPIDAPI_PROXY_SECRET is not set - /v1 endpoints will return 500", flush=True)

    @web_app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=exc.headers)

    @web_app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (404, 405):
            error = ApiError(404, "NOT_FOUND", "Endpoint not found")
        else:
            error = ApiError(exc.status_code, "HTTP_ERROR", str(exc.detail))
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    @web_app.get("/health")
    async def health():
        return {"ok": True, "service": "pagesnap", "version": __version__}

    # ========================================================================
    # Public endpoint (no auth)
    # ========================================================================

    if settings.enable_public_endpoint:

        @web_app.get("/screenshot")
        async def screenshot(
            url: str | None = None,
            full_page: str | None = Query(default=None, alias="fullPage"),
            w: str | None = None,
            h: str | None = None,
        ):
            try:
                target = validate_url(url)
            except UrlValidationError as e:
                return JSONResponse(status_code=400, content={"error": e.message})

            request = CaptureRequest(
                url=target,
                viewport=normalize_viewport(w, h),
                full_page=parse_full_page(full_page),
            )

            try:
                result = await capturer.capture(request)
            except CaptureFailure as e:
                print(f"[API] Screenshot capture failed: {e.raw_message}", flush=True)
                return JSONResponse(
                    status_code=500,
                    content={"error": "Screenshot capture failed", "details": e.raw_message},
                )

            return Response(content=result.image, media_type="image/png")

    # ========================================================================
    # RapidAPI endpoints (authenticated)
    # ========================================================================

    @web_app.get("/v1/screenshot")
    async def screenshot_v1(
        url: str | None = None,
        width: str | None = None,
        height: str | None = None,
        full_page: str | None = None,
        image_format: str | None = Query(default=None, alias="format"),
        caller: RapidAPIContext = Depends(require_rapidapi),
    ):
        headers = rate_limit_headers(caller.subscription)
        limits = get_tier_limits(caller.subscription)

        try:
            target = validate_url(url)
        except UrlValidationError as e:
            raise ApiError(400, "INVALID_URL", e.message, reason=e.code, headers=headers)

        viewport = normalize_viewport(width, height, limits)
        capture_full_page = parse_full_page(full_page)

        if image_format and image_format not in SUPPORTED_FORMATS:
            raise ApiError(400, "INVALID_FORMAT", "Only PNG format is supported", headers=headers)

        request = CaptureRequest(url=target, viewport=viewport, full_page=capture_full_page)

        try:
            result = await capturer.capture(request)
        except CaptureFailure as e:
            print(f"[RapidAPI] Screenshot failed for {caller.user}: {e.raw_message}", flush=True)
            error = classify_failure(e)
            raise ApiError(
                error.http_status,
                error.code,
                error.message,
                details=error.details,
                headers=headers,
            )

        print(
            f"[RapidAPI] User: {caller.user}, Subscription: {caller.subscription}, "
            f"URL: {target.href}, Duration: {result.duration_ms}ms",
            flush=True,
        )

        return Response(
            content=result.image,
            media_type="image/png",
            headers={
                **headers,
                "X-Screenshot-Width": str(viewport.width),
                "X-Screenshot-Height": str(viewport.height),
                "X-Screenshot-FullPage": "true" if capture_full_page else "false",
                "X-Processing-Time": f"{result.duration_ms}ms",
            },
        )

    @web_app.get("/v1/info")
    async def info(caller: RapidAPIContext = Depends(require_rapidapi)):
        limits = get_tier_limits(caller.subscription)
        return {
            "success": True,
            "data": {
                "version": __version__,
                "subscription": caller.subscription,
                "limits": {
                    "maxViewportWidth": limits.max_viewport_width,
                    "maxViewportHeight": limits.max_viewport_height,
                    "requestsPerMonth": limits.requests_per_month,
                },
                "supportedFormats": SUPPORTED_FORMATS,
                "endpoints": _endpoint_catalogue(),
            },
        }

    return web_app


def _endpoint_catalogue() -> list[dict]:
    return [
        {
            "path": "/v1/screenshot",
            "method": "GET",
            "description": "Capture a screenshot of a web page",
            "parameters": [
                {"name": "url", "required": True, "description": "URL to capture (http or https)"},
                {
                    "name": "width",
                    "required": False,
                    "default": DEFAULT_WIDTH,
                    "description": f"Viewport width ({MIN_SIZE}-{MAX_SIZE})",
                },
                {
                    "name": "height",
                    "required": False,
                    "default": DEFAULT_HEIGHT,
                    "description": f"Viewport height ({MIN_SIZE}-{MAX_SIZE})",
                },
                {
                    "name": "full_page",
                    "required": False,
                    "default": False,
                    "description": "Capture full page (true/false)",
                },
                {"name": "format", "required": False, "default": "png", "description": "Output format (png only)"},
            ],
        },
        {
            "path": "/v1/info",
            "method": "GET",
            "description": "Get API information and your subscription limits",
        },
    ]
