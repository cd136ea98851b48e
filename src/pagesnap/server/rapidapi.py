"""
RapidAPI gateway authentication.

RapidAPI headers:
- X-RapidAPI-Key: User's API key (required)
- X-RapidAPI-Host: The API's host on RapidAPI (required)
- X-RapidAPI-User: User's RapidAPI username
- X-RapidAPI-Subscription: Subscription level (BASIC, PRO, ULTRA, MEGA)
- X-RapidAPI-Proxy-Secret: Secret proving the request came through RapidAPI
"""

from dataclasses import dataclass
import hmac

from fastapi import Request

from ..config import Settings
from ..tiers import DEFAULT_TIER, get_tier_limits
from .errors import ApiError


@dataclass(frozen=True)
class RapidAPIContext:
    """Caller identity extracted from RapidAPI headers."""
    key: str
    host: str
    user: str
    subscription: str


def require_rapidapi(request: Request) -> RapidAPIContext:
    """FastAPI dependency that authenticates a request proxied by RapidAPI."""
    settings: Settings = request.app.state.settings
    return authenticate(request.headers, settings)


def authenticate(headers, settings: Settings) -> RapidAPIContext:
    """
    Check RapidAPI headers against the configured host and proxy secret.

    Raises:
        ApiError: 500 if no proxy secret is configured, 401 for missing
            headers, 403 for a host or secret mismatch
    """
    if not settings.rapidapi_proxy_secret:
        print("[RapidAPI] RAPIDAPI_PROXY_SECRET is not configured", flush=True)
        raise ApiError(500, "CONFIGURATION_ERROR", "Server is not configured for RapidAPI requests.")

    api_key = headers.get("x-rapidapi-key")
    api_host = headers.get("x-rapidapi-host")
    proxy_secret = headers.get("x-rapidapi-proxy-secret") or ""

    if not api_key:
        raise ApiError(401, "UNAUTHORIZED", "Missing X-RapidAPI-Key header. Subscribe to this API on RapidAPI.")

    if not api_host:
        raise ApiError(401, "UNAUTHORIZED", "Missing X-RapidAPI-Host header. Requests must come through RapidAPI.")

    if settings.rapidapi_host and api_host != settings.rapidapi_host:
        raise ApiError(403, "FORBIDDEN", "Invalid X-RapidAPI-Host header.")

    if not hmac.compare_digest(proxy_secret.encode(), settings.rapidapi_proxy_secret.encode()):
        raise ApiError(403, "FORBIDDEN", "Invalid proxy secret. Requests must come through RapidAPI.")

    return RapidAPIContext(
        key=api_key,
        host=api_host,
        user=headers.get("x-rapidapi-user") or "unknown",
        subscription=headers.get("x-rapidapi-subscription") or DEFAULT_TIER,
    )


def rate_limit_headers(subscription: str) -> dict[str, str]:
    """Informational rate-limit header for a subscription."""
    limits = get_tier_limits(subscription)
    return {"X-RateLimit-Limit": str(limits.requests_per_month)}
