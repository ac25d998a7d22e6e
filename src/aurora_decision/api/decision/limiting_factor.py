"""
Limiting Factor Detection

Identifies the primary constraint preventing better aurora viewing for a
forecast window, using a fixed decision hierarchy so results are consistent
and auditable.
"""

from __future__ import annotations

from aurora_decision.api.core.constants import (
    CIVIL_TWILIGHT_DEGREES,
    CLOUD_COVER_LIMIT_PERCENT,
    LOW_KP_THRESHOLD,
)
from aurora_decision.api.core.enums import LimitingFactor


__all__ = [
    "describe_limiting_factor",
    "detect_limiting_factor",
    "get_limiting_factor_advice",
]


def detect_limiting_factor(cloud_cover: float, kp_index: float, solar_elevation: float) -> LimitingFactor:
    """
    Determine the primary limiting factor for a forecast window.

    Decision hierarchy (first match wins):
    1. Solar elevation above -6° -> too_bright. Aurora is physically invisible,
       so no other factor matters.
    2. Cloud cover above 60% -> cloud_cover
    3. Kp below 3 -> low_kp
    4. Otherwise -> mixed_conditions

    Args:
        cloud_cover: Cloud cover percentage (0-100)
        kp_index: Kp index (0-9)
        solar_elevation: Solar elevation in degrees

    Returns:
        The limiting factor for the window
    """
    if solar_elevation > CIVIL_TWILIGHT_DEGREES:
        return LimitingFactor.TOO_BRIGHT
    if cloud_cover > CLOUD_COVER_LIMIT_PERCENT:
        return LimitingFactor.CLOUD_COVER
    if kp_index < LOW_KP_THRESHOLD:
        return LimitingFactor.LOW_KP
    return LimitingFactor.MIXED_CONDITIONS


def describe_limiting_factor(factor: LimitingFactor) -> str:
    """Short description of a limiting factor for explanation templates."""
    match factor:
        case LimitingFactor.CLOUD_COVER:
            return "too many clouds"
        case LimitingFactor.LOW_KP:
            return "weak geomagnetic activity"
        case LimitingFactor.TOO_BRIGHT:
            return "not dark enough"
        case LimitingFactor.MIXED_CONDITIONS:
            return "mixed conditions"
    raise ValueError(f"Unknown limiting factor: {factor!r}")


def get_limiting_factor_advice(factor: LimitingFactor) -> str:
    """Longer sentence telling the user what to wait for."""
    match factor:
        case LimitingFactor.CLOUD_COVER:
            return "Too many clouds are blocking the view. Clear skies are needed."
        case LimitingFactor.LOW_KP:
            return "Geomagnetic activity is too weak. Stronger solar wind is needed."
        case LimitingFactor.TOO_BRIGHT:
            return "The sky is not dark enough. Wait for it to get darker."
        case LimitingFactor.MIXED_CONDITIONS:
            return "Multiple factors are preventing ideal conditions."
    raise ValueError(f"Unknown limiting factor: {factor!r}")
