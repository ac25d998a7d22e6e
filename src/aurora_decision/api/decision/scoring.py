"""
Aurora Decision Score (ADS)

Computes a deterministic 0-100 score for each forecast window from:
- Kp index (geomagnetic activity): 35% weight
- Cloud cover (visibility): 35% weight
- Darkness (twilight phase): 25% weight
- Kp trend: ±5 point bonus/penalty

Identical inputs always produce identical scores.
"""

from __future__ import annotations

import logging
from datetime import date

import deal

from aurora_decision.api.core.constants import (
    ADS_EXCELLENT_THRESHOLD,
    ADS_GOOD_THRESHOLD,
    ADS_MODERATE_THRESHOLD,
    CLOUD_WEIGHT,
    DARKNESS_WEIGHT,
    KP_MAX,
    KP_WEIGHT,
    TREND_BONUS_POINTS,
)
from aurora_decision.api.core.enums import Classification, KpTrend
from aurora_decision.api.core.models import ADSBreakdown, ADSResult
from aurora_decision.api.core.utils import clamp
from aurora_decision.api.decision.darkness import solar_elevation_to_darkness


logger = logging.getLogger(__name__)


__all__ = [
    "classify_ads",
    "compute_ads",
    "trend_bonus",
]


def classify_ads(score: float) -> Classification:
    """Classify an ADS value without computing a breakdown."""
    if score >= ADS_EXCELLENT_THRESHOLD:
        return Classification.EXCELLENT
    if score >= ADS_GOOD_THRESHOLD:
        return Classification.GOOD
    if score >= ADS_MODERATE_THRESHOLD:
        return Classification.MODERATE
    return Classification.POOR


def trend_bonus(kp_trend: KpTrend) -> float:
    """Flat score adjustment for the Kp trend."""
    match kp_trend:
        case KpTrend.INCREASING | KpTrend.STABLE:
            return TREND_BONUS_POINTS
        case KpTrend.DECREASING:
            return -TREND_BONUS_POINTS
    raise ValueError(f"Unknown Kp trend: {kp_trend!r}")


@deal.post(lambda result: 0.0 <= result.score <= 100.0, message="ADS must be 0-100")
def compute_ads(
    kp_index: float,
    cloud_cover: float,
    solar_elevation: float,
    kp_trend: KpTrend,
    on_date: date,
) -> ADSResult:
    """
    Compute the Aurora Decision Score for a single forecast window.

    Out-of-range Kp and cloud readings are clamped rather than rejected, since
    upstream data occasionally drifts slightly out of bounds.

    Args:
        kp_index: Kp index (clamped to 0-9)
        cloud_cover: Cloud cover percentage (clamped to 0-100)
        solar_elevation: Solar elevation in degrees
        kp_trend: Direction of the Kp index
        on_date: Calendar date of the window (seasonal darkness overrides)

    Returns:
        ADSResult with score, classification, and component breakdown
    """
    kp = clamp(kp_index, 0.0, KP_MAX)
    cloud = clamp(cloud_cover, 0.0, 100.0)
    if kp != kp_index or cloud != cloud_cover:
        logger.debug(f"Clamped out-of-range input: kp {kp_index} -> {kp}, cloud {cloud_cover} -> {cloud}")

    kp_component = (kp / KP_MAX) * 100.0 * KP_WEIGHT
    cloud_component = (100.0 - cloud) * CLOUD_WEIGHT
    darkness_component = solar_elevation_to_darkness(solar_elevation, on_date) * DARKNESS_WEIGHT
    bonus = trend_bonus(kp_trend)

    raw_score = kp_component + cloud_component + darkness_component + bonus
    score = clamp(raw_score, 0.0, 100.0)

    return ADSResult(
        score=score,
        classification=classify_ads(score),
        breakdown=ADSBreakdown(
            kp_component=kp_component,
            cloud_component=cloud_component,
            darkness_component=darkness_component,
            trend_bonus=bonus,
            raw_score=raw_score,
        ),
    )
