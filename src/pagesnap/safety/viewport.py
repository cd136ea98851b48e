"""
Viewport normalization.

Requested dimensions are never rejected: unparsable values fall back to the
default for that axis and everything is clamped into range.
"""

from dataclasses import dataclass
import math
import re

from ..tiers import TierLimits


MIN_SIZE = 200
MAX_SIZE = 3000
DEFAULT_WIDTH = 1366
DEFAULT_HEIGHT = 768

# parseInt-style: optional whitespace and sign, then leading digits
_LEADING_INT = re.compile(r"\s*([+-]?)([0-9]+)")

# Longer digit runs saturate; only their sign matters after clamping
_MAX_DIGITS = 6


@dataclass(frozen=True)
class ViewportSpec:
    """Render dimensions in CSS pixels."""
    width: int
    height: int


def normalize_viewport(
    raw_width=None,
    raw_height=None,
    limits: TierLimits | None = None,
) -> ViewportSpec:
    """
    Parse and clamp requested viewport dimensions.

    Args:
        raw_width: Requested width (query string value, int, or None)
        raw_height: Requested height
        limits: Optional tier limits that tighten the upper bound

    Returns:
        ViewportSpec with both axes inside [200, 3000] or the tier maximum
    """
    max_width = MAX_SIZE
    max_height = MAX_SIZE
    if limits is not None:
        max_width = min(MAX_SIZE, limits.max_viewport_width)
        max_height = min(MAX_SIZE, limits.max_viewport_height)

    width = _parse_int(raw_width)
    height = _parse_int(raw_height)

    if width is None:
        width = DEFAULT_WIDTH
    if height is None:
        height = DEFAULT_HEIGHT

    return ViewportSpec(
        width=_clamp(width, MIN_SIZE, max_width),
        height=_clamp(height, MIN_SIZE, max_height),
    )


def parse_full_page(value) -> bool:
    """Interpret a fullPage flag from a query string or a bool."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return value in ("true", "1")


def _parse_int(value) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if not isinstance(value, str):
        return None

    match = _LEADING_INT.match(value)
    if not match:
        return None
    sign, digits = match.groups()
    digits = digits.lstrip("0") or "0"
    if len(digits) > _MAX_DIGITS:
        digits = "9" * _MAX_DIGITS
    return int(sign + digits)


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))
