"""Default monthly tuition by grade tier, taken from academy settings."""
from typing import Mapping, Optional

TIER_SETTING_KEYS = {
    "elementary": "fee_elementary",
    "middle": "fee_middle",
    "high": "fee_high",
}

# Korean grade labels carry the school level as a marker: 초5, 중2, 고1
_TIER_MARKERS = (
    ("elementary", ("초", "elementary")),
    ("middle", ("중", "middle")),
    ("high", ("고", "high")),
)


def grade_tier(grade: Optional[str]) -> Optional[str]:
    if not grade:
        return None
    text = grade.strip().lower()
    for tier, markers in _TIER_MARKERS:
        if any(m in text for m in markers):
            return tier
    return None


def _to_int(value) -> int:
    try:
        return max(int(str(value).strip()), 0)
    except (TypeError, ValueError):
        return 0


def standard_fee(grade: Optional[str], settings: Mapping[str, str]) -> int:
    """Configured fee for the grade's tier, 0 when the tier or fee is unknown"""
    tier = grade_tier(grade)
    if tier is None:
        return 0
    return _to_int(settings.get(TIER_SETTING_KEYS[tier]))
