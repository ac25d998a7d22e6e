"""
Aurora Visibility Probability

Combines Kp index, cloud cover, temperature, latitude and moon phase into a
0-100 viewing probability, gated by a day/night visibility check.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

import deal

from aurora_decision.api.calculations.sun import (
    calculate_sun_elevation,
    find_best_time_tonight,
    find_next_dark_time,
    is_dark_enough,
)
from aurora_decision.api.core.constants import KP_MAX
from aurora_decision.api.core.utils import clamp


logger = logging.getLogger(__name__)


__all__ = [
    "AuroraInputs",
    "ProbabilityFactors",
    "ProbabilityResult",
    "calculate_aurora_probability",
    "calculate_simple_probability",
    "get_probability_description",
]


# Probability weights
PROBABILITY_WEIGHTS = {
    "kp_index": 0.40,  # Geomagnetic activity
    "clouds": 0.35,  # Clouds are decisive for seeing anything
    "temperature": 0.10,  # Colder air is usually clearer
    "latitude": 0.10,  # Further north is closer to the auroral oval
    "moon": 0.05,  # Moonlight washes out faint aurora
}


@dataclass(frozen=True)
class AuroraInputs:
    """Inputs for the probability calculation."""

    kp_index: float  # 0-9
    cloud_coverage: float  # 0-100 (%), cloud and fog combined
    temperature: float  # Celsius
    latitude: float  # Degrees north
    longitude: float | None = None  # Needed to compute sun elevation
    when: datetime | None = None  # Needed to compute sun elevation
    moon_phase: float | None = None  # 0-1 (0 = new, 0.5 = full)
    sun_elevation: float | None = None  # Degrees, overrides the computed value


@dataclass(frozen=True)
class ProbabilityFactors:
    """Per-factor scores (0-100) before weighting."""

    kp_index: float
    clouds: float
    temperature: float
    latitude: float
    moon: float


@dataclass(frozen=True)
class ProbabilityResult:
    """Result of the probability calculation."""

    probability: int  # 0-100 (%)
    score: float  # Weighted score before rounding
    can_view: bool  # False when it is too bright to see aurora
    factors: ProbabilityFactors
    reason: str | None = None  # Why it cannot be viewed (e.g., "daylight")
    next_viewable_time: datetime | None = None  # Next dark time, when too bright
    best_time_tonight: datetime | None = None  # Darkest moment of the coming night


_ZERO_FACTORS = ProbabilityFactors(kp_index=0, clouds=0, temperature=0, latitude=0, moon=0)


def _cloud_score(cloud_coverage: float) -> float:
    # Steep penalty: clouds decide whether anything is visible at all
    if cloud_coverage < 30:
        return 100.0
    if cloud_coverage < 50:
        return 80.0
    if cloud_coverage < 70:
        return 40.0
    if cloud_coverage < 90:
        return 15.0
    return 0.0


def _temperature_score(temperature: float) -> float:
    if temperature < -10:
        return 100.0
    if temperature < 0:
        return 80.0
    if temperature < 10:
        return 50.0
    return 20.0


def _latitude_score(latitude: float) -> float:
    if latitude > 68:
        return 100.0
    if latitude > 66:
        return 80.0
    if latitude > 64:
        return 60.0
    return 40.0


def _moon_score(moon_phase: float | None) -> float:
    if moon_phase is None:
        return 50.0
    # New moon (0 or 1) = 100, full moon (0.5) = 0
    return abs(clamp(moon_phase, 0.0, 1.0) - 0.5) * 2 * 100


def _best_time(inputs: AuroraInputs) -> datetime | None:
    if inputs.longitude is None or inputs.when is None:
        return None
    return find_best_time_tonight(inputs.latitude, inputs.longitude, inputs.when)


def _resolve_sun_elevation(inputs: AuroraInputs) -> float | None:
    if inputs.sun_elevation is not None:
        return inputs.sun_elevation
    if inputs.longitude is not None and inputs.when is not None:
        return calculate_sun_elevation(inputs.latitude, inputs.longitude, inputs.when)
    return None


@deal.post(lambda result: 0 <= result.probability <= 100, message="Probability must be 0-100")
def calculate_aurora_probability(inputs: AuroraInputs) -> ProbabilityResult:
    """
    Calculate the aurora viewing probability.

    The daylight check runs first: when the sun elevation is known and the sun
    is not below -6°, the probability is 0 regardless of activity.

    Args:
        inputs: Kp, weather, location and optional sun/moon data

    Returns:
        ProbabilityResult with probability, weighted score and factor breakdown
    """
    sun_elevation = _resolve_sun_elevation(inputs)
    best_time = _best_time(inputs)
    if sun_elevation is not None and not is_dark_enough(sun_elevation):
        logger.debug(f"Sun elevation {sun_elevation:.1f}° is too high for aurora")
        next_time = None
        if inputs.longitude is not None and inputs.when is not None:
            next_time = find_next_dark_time(inputs.latitude, inputs.longitude, inputs.when)
        return ProbabilityResult(
            probability=0,
            score=0.0,
            can_view=False,
            factors=_ZERO_FACTORS,
            reason="daylight",
            next_viewable_time=next_time,
            best_time_tonight=best_time,
        )

    factors = ProbabilityFactors(
        kp_index=min(100.0, max(0.0, inputs.kp_index) / KP_MAX * 100),
        clouds=_cloud_score(inputs.cloud_coverage),
        temperature=_temperature_score(inputs.temperature),
        latitude=_latitude_score(inputs.latitude),
        moon=_moon_score(inputs.moon_phase),
    )

    weighted = (
        factors.kp_index * PROBABILITY_WEIGHTS["kp_index"]
        + factors.clouds * PROBABILITY_WEIGHTS["clouds"]
        + factors.temperature * PROBABILITY_WEIGHTS["temperature"]
        + factors.latitude * PROBABILITY_WEIGHTS["latitude"]
        + factors.moon * PROBABILITY_WEIGHTS["moon"]
    )

    return ProbabilityResult(
        probability=round(clamp(weighted, 0.0, 100.0)),
        score=round(weighted, 2),
        can_view=True,
        factors=factors,
        best_time_tonight=best_time,
    )


def calculate_simple_probability(kp_index: float) -> float:
    """
    Rough probability from the Kp index alone.

    - Kp 0-3: 10-19%
    - Kp 3-5: 20-40%
    - Kp 5-7: 40-60%
    - Kp 7-9: 60-90%
    """
    if kp_index <= 3:
        return 10 + kp_index * 3
    if kp_index <= 5:
        return 20 + (kp_index - 3) * 10
    if kp_index <= 7:
        return 40 + (kp_index - 5) * 10
    return 60 + (kp_index - 7) * 15


def get_probability_description(probability: float) -> str:
    """Short description of a probability value."""
    if probability >= 80:
        return "Excellent"
    if probability >= 60:
        return "Good conditions"
    if probability >= 40:
        return "Moderate"
    if probability >= 20:
        return "Poor"
    return "Slim chance"
