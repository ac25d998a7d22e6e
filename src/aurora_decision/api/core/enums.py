"""
Common Enums

Enumerations used throughout the Aurora Decision API.
"""

from enum import Enum


class Classification(str, Enum):
    """Classification of a single window's Aurora Decision Score."""

    EXCELLENT = "excellent"  # ADS >= 70
    GOOD = "good"  # ADS >= 50
    MODERATE = "moderate"  # ADS >= 30
    POOR = "poor"  # ADS < 30


class GlobalState(str, Enum):
    """Verdict for a whole forecast horizon."""

    EXCELLENT = "excellent"
    POSSIBLE = "possible"
    UNLIKELY = "unlikely"


class KpTrend(str, Enum):
    """Direction of the Kp index across the forecast."""

    INCREASING = "increasing"
    STABLE = "stable"
    DECREASING = "decreasing"


class LimitingFactor(str, Enum):
    """Dominant obstacle to aurora visibility for a window."""

    CLOUD_COVER = "cloud_cover"
    LOW_KP = "low_kp"
    TOO_BRIGHT = "too_bright"
    MIXED_CONDITIONS = "mixed_conditions"


class TwilightPhase(str, Enum):
    """Twilight phase derived from solar elevation."""

    DAY = "day"  # Sun above horizon
    CIVIL_TWILIGHT = "civil_twilight"  # 0° to -6°
    NAUTICAL_TWILIGHT = "nautical_twilight"  # -6° to -12°
    ASTRONOMICAL_TWILIGHT = "astronomical_twilight"  # -12° to -18°
    NIGHT = "night"  # Below -18°


class DarknessStatus(str, Enum):
    """Coarse darkness state used for user-facing messages."""

    DAYLIGHT = "daylight"
    CIVIL_TWILIGHT = "civil_twilight"
    AURORA_VISIBLE = "aurora_visible"


class MasterStatus(str, Enum):
    """At-a-glance badge status."""

    GO = "GO"
    WAIT = "WAIT"
    NO = "NO"
