from pagesnap.tiers import DEFAULT_TIER, TIER_LIMITS, get_tier_limits


def test_known_tiers():
    assert get_tier_limits("PRO").max_viewport_width == 2560
    assert get_tier_limits("MEGA").requests_per_month == 100000


def test_unknown_tier_falls_back_to_basic():
    assert get_tier_limits("ENTERPRISE") == TIER_LIMITS["BASIC"]
    assert get_tier_limits(None) == TIER_LIMITS[DEFAULT_TIER]
    assert get_tier_limits("") == TIER_LIMITS["BASIC"]


def test_tier_names_are_case_sensitive():
    assert get_tier_limits("pro") == TIER_LIMITS["BASIC"]


def test_tier_maxima_never_exceed_absolute_maximum():
    for limits in TIER_LIMITS.values():
        assert limits.max_viewport_width <= 3000
        assert limits.max_viewport_height <= 3000
