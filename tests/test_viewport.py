"""
Tests for viewport normalization and the fullPage flag.
"""

import pytest

from pagesnap.safety.viewport import (
    normalize_viewport,
    parse_full_page,
    ViewportSpec,
)
from pagesnap.tiers import get_tier_limits


def test_defaults_when_unspecified():
    assert normalize_viewport(None, None) == ViewportSpec(width=1366, height=768)
    assert normalize_viewport() == ViewportSpec(width=1366, height=768)


def test_clamped_up_to_minimum():
    assert normalize_viewport("50", "50") == ViewportSpec(width=200, height=200)


def test_clamped_down_to_maximum():
    assert normalize_viewport("5000", "5000") == ViewportSpec(width=3000, height=3000)


def test_each_axis_falls_back_independently():
    """An unparsable width does not affect a valid height, and vice versa."""
    assert normalize_viewport("abc", "900") == ViewportSpec(width=1366, height=900)
    assert normalize_viewport("1024", "") == ViewportSpec(width=1024, height=768)


@pytest.mark.parametrize("raw, expected", [
    ("800px", 800),
    ("  640", 640),
    ("+1280", 1280),
    ("1.5e3", 200),  # parses as 1
    ("-500", 200),
    ("0", 200),
    (1920, 1920),
    (1024.9, 1024),
])
def test_leading_integer_parsing(raw, expected):
    assert normalize_viewport(raw, None).width == expected


@pytest.mark.parametrize("raw", [True, False, float("nan"), float("inf"), [800], "px800", " ", object()])
def test_unparsable_values_use_default(raw):
    assert normalize_viewport(raw, raw) == ViewportSpec(width=1366, height=768)


@pytest.mark.parametrize("raw_width, raw_height", [
    (None, None),
    ("", ""),
    ("-99999999", "99999999"),
    ("199", "3001"),
    ("200", "3000"),
    ("nan", "Infinity"),
    (10**12, -(10**12)),
    ("2999.99", "200.01"),
])
def test_always_within_bounds(raw_width, raw_height):
    spec = normalize_viewport(raw_width, raw_height)

    assert 200 <= spec.width <= 3000
    assert 200 <= spec.height <= 3000


def test_tier_limits_tighten_maximum():
    basic = get_tier_limits("BASIC")

    spec = normalize_viewport("2500", "2000", basic)

    assert spec == ViewportSpec(width=1920, height=1080)


def test_tier_limits_never_exceed_absolute_maximum():
    ultra = get_tier_limits("ULTRA")

    assert normalize_viewport("5000", "5000", ultra) == ViewportSpec(width=3000, height=3000)


def test_tier_limits_keep_minimum_and_defaults():
    pro = get_tier_limits("PRO")

    assert normalize_viewport("10", None, pro) == ViewportSpec(width=200, height=768)


@pytest.mark.parametrize("value, expected", [
    (None, False),
    (True, True),
    (False, False),
    ("true", True),
    ("1", True),
    ("false", False),
    ("0", False),
    ("yes", False),
    ("TRUE", False),
    ("", False),
])
def test_parse_full_page(value, expected):
    assert parse_full_page(value) is expected


@pytest.mark.parametrize("raw, expected", [
    ("9" * 5000, 3000),
    ("-" + "9" * 5000, 200),
    ("0" * 5000 + "800", 800),
    ("12345678901234567890px", 3000),
])
def test_very_long_digit_runs_clamp(raw, expected):
    assert normalize_viewport(raw, raw) == ViewportSpec(width=expected, height=expected)


@pytest.mark.parametrize("raw", ["١٢٣٤", "１２３４", "²"])
def test_non_ascii_digits_are_unparsable(raw):
    """Only ASCII digits count, as with parseInt."""
    assert normalize_viewport(raw, None).width == 1366
