"""
Kp Trend Detection

Derives the Kp trend direction from the hourly forecast when the caller does
not supply one. The trend feeds the ±5 point ADS adjustment.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from aurora_decision.api.core.enums import KpTrend
from aurora_decision.api.core.models import ForecastWindow


__all__ = [
    "MIN_WINDOWS_FOR_TREND",
    "TREND_TOLERANCE",
    "detect_kp_trend",
    "get_kp_trend_label",
]


MIN_WINDOWS_FOR_TREND = 6
TREND_TOLERANCE = 0.3


def detect_kp_trend(windows: Sequence[ForecastWindow] | None) -> KpTrend:
    """
    Detect the Kp trend by comparing the first and last thirds of the forecast.

    Fewer than 6 windows is not enough data and reports STABLE. A difference
    in mean Kp within ±0.3 is also STABLE.

    Args:
        windows: Forecast windows in time order

    Returns:
        Detected trend
    """
    if not windows or len(windows) < MIN_WINDOWS_FOR_TREND:
        return KpTrend.STABLE

    third = math.ceil(len(windows) / 3)
    first_avg = sum(w.kp_index for w in windows[:third]) / third
    last_avg = sum(w.kp_index for w in windows[-third:]) / third

    difference = last_avg - first_avg
    if difference > TREND_TOLERANCE:
        return KpTrend.INCREASING
    if difference < -TREND_TOLERANCE:
        return KpTrend.DECREASING
    return KpTrend.STABLE


def get_kp_trend_label(trend: KpTrend) -> str:
    """Display label for a Kp trend."""
    match trend:
        case KpTrend.INCREASING:
            return "Increasing (favorable)"
        case KpTrend.DECREASING:
            return "Decreasing (less favorable)"
        case KpTrend.STABLE:
            return "Stable"
    raise ValueError(f"Unknown Kp trend: {trend!r}")
