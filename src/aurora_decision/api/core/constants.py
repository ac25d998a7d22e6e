"""
Decision Engine Constants

Weights, thresholds and astronomical boundaries shared by the decision
components. Several components reference the same score boundaries, so they
live here rather than inline.
"""

from typing import Final


__all__ = [
    "ADS_EXCELLENT_THRESHOLD",
    "ADS_GOOD_THRESHOLD",
    "ADS_MODERATE_THRESHOLD",
    "ASTRONOMICAL_TWILIGHT_DEGREES",
    "BEST_WINDOW_DURATION_MINUTES",
    "CIVIL_TWILIGHT_DEGREES",
    "CLOUD_COVER_LIMIT_PERCENT",
    "CLOUD_WEIGHT",
    "DARKNESS_WEIGHT",
    "IMMINENCE_WINDOW_MINUTES",
    "KP_MAX",
    "KP_WEIGHT",
    "LOW_KP_THRESHOLD",
    "NAUTICAL_TWILIGHT_DEGREES",
    "TREND_BONUS_POINTS",
    "UI_HIDE_GRID_THRESHOLD",
]


# Aurora Decision Score weights
KP_WEIGHT: Final[float] = 0.35
"""Share of the normalized Kp reading (kp / 9 * 100) in the score."""

CLOUD_WEIGHT: Final[float] = 0.35
"""Share of the inverted cloud cover (100 - cloud) in the score."""

DARKNESS_WEIGHT: Final[float] = 0.25
"""Share of the 0-100 darkness factor in the score."""

TREND_BONUS_POINTS: Final[float] = 5.0
"""Flat bonus for increasing/stable Kp, subtracted for decreasing Kp."""

KP_MAX: Final[float] = 9.0
"""Upper bound of the planetary Kp index."""

# Score classification boundaries
ADS_EXCELLENT_THRESHOLD: Final[float] = 70.0
ADS_GOOD_THRESHOLD: Final[float] = 50.0
ADS_MODERATE_THRESHOLD: Final[float] = 30.0

UI_HIDE_GRID_THRESHOLD: Final[float] = 20.0
"""Below this maximum score the forecast grid is not worth showing."""

# Solar elevation boundaries (degrees)
CIVIL_TWILIGHT_DEGREES: Final[float] = -6.0
NAUTICAL_TWILIGHT_DEGREES: Final[float] = -12.0
ASTRONOMICAL_TWILIGHT_DEGREES: Final[float] = -18.0

# Limiting factor thresholds
CLOUD_COVER_LIMIT_PERCENT: Final[float] = 60.0
LOW_KP_THRESHOLD: Final[float] = 3.0

# Global state timing
IMMINENCE_WINDOW_MINUTES: Final[float] = 30.0
"""A best window further away than this is capped at 'possible'."""

BEST_WINDOW_DURATION_MINUTES: Final[int] = 60
