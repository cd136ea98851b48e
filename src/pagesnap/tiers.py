"""
Subscription tier limits.

These are informational - RapidAPI enforces the actual request quotas.
The viewport maxima are applied by the viewport policy on gateway routes.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class TierLimits:
    """Limits attached to a subscription tier."""
    requests_per_month: int
    max_viewport_width: int
    max_viewport_height: int


DEFAULT_TIER = "BASIC"

TIER_LIMITS: dict[str, TierLimits] = {
    "BASIC": TierLimits(requests_per_month=100, max_viewport_width=1920, max_viewport_height=1080),
    "PRO": TierLimits(requests_per_month=1000, max_viewport_width=2560, max_viewport_height=1440),
    "ULTRA": TierLimits(requests_per_month=10000, max_viewport_width=3000, max_viewport_height=3000),
    "MEGA": TierLimits(requests_per_month=100000, max_viewport_width=3000, max_viewport_height=3000),
}


def get_tier_limits(tier: str | None) -> TierLimits:
    """Look up limits for a tier name, falling back to BASIC for anything unknown."""
    return TIER_LIMITS.get(tier or DEFAULT_TIER, TIER_LIMITS[DEFAULT_TIER])
