"""
Master Aurora Status

Reduces probability, cloud cover and darkness to a single at-a-glance
GO / WAIT / NO badge.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from aurora_decision.api.calculations.sun import calculate_sun_elevation, is_dark_enough
from aurora_decision.api.core.enums import MasterStatus


logger = logging.getLogger(__name__)


__all__ = [
    "MasterStatusFactors",
    "MasterStatusInput",
    "MasterStatusResult",
    "calculate_master_status",
]


@dataclass(frozen=True)
class MasterStatusInput:
    """Inputs for the master status."""

    probability: float  # 0-100 from calculate_aurora_probability
    cloud_coverage: float  # 0-100 (%)
    kp_index: float  # 0-9
    sun_elevation: float | None = None  # Degrees, negative = below horizon
    latitude: float | None = None  # Used with longitude/when if sun_elevation is missing
    longitude: float | None = None
    when: datetime | None = None


@dataclass(frozen=True)
class MasterStatusFactors:
    """Inputs echoed back alongside the status."""

    is_dark: bool
    cloud_coverage: float
    probability: float
    kp_index: float


@dataclass(frozen=True)
class MasterStatusResult:
    """Badge status with copy and confidence."""

    status: MasterStatus
    message: str
    subtext: str
    confidence: int  # 0-100
    factors: MasterStatusFactors


def _resolve_is_dark(inputs: MasterStatusInput) -> bool:
    sun_elevation = inputs.sun_elevation
    if sun_elevation is None and None not in (inputs.latitude, inputs.longitude, inputs.when):
        sun_elevation = calculate_sun_elevation(inputs.latitude, inputs.longitude, inputs.when)  # type: ignore[arg-type]
    if sun_elevation is None:
        # Northern Norway in aurora season: assume dark without sun data
        logger.debug("No sun elevation available; assuming dark")
        return True
    return is_dark_enough(sun_elevation)


def calculate_master_status(inputs: MasterStatusInput) -> MasterStatusResult:
    """
    Calculate the master aurora status.

    Decision order:
    1. Not dark: NO
    2. Heavy overcast (> 80% clouds): NO
    3. Probability >= 30 and clouds < 30%: GO
    4. Probability >= 20 and clouds >= 30%: WAIT (activity, but cloudy)
    5. Clouds < 50% and probability >= 10: WAIT (clear, but low activity)
    6. Otherwise: NO

    Args:
        inputs: Probability, cloud cover, Kp and darkness data

    Returns:
        MasterStatusResult with status, copy, confidence and factors
    """
    probability = inputs.probability
    clouds = inputs.cloud_coverage
    factors = MasterStatusFactors(
        is_dark=_resolve_is_dark(inputs),
        cloud_coverage=clouds,
        probability=probability,
        kp_index=inputs.kp_index,
    )

    if not factors.is_dark:
        return MasterStatusResult(
            status=MasterStatus.NO,
            message="Not dark enough",
            subtext="Aurora is only visible when it is dark. Wait until night falls.",
            confidence=100,
            factors=factors,
        )

    if clouds > 80:
        return MasterStatusResult(
            status=MasterStatus.NO,
            message="Too cloudy",
            subtext="Thick cloud cover is blocking the view. Check again later.",
            confidence=round(min(90, clouds)),
            factors=factors,
        )

    if probability >= 30 and clouds < 30:
        return MasterStatusResult(
            status=MasterStatus.GO,
            message="Go outside!",
            subtext="Good aurora conditions right now.",
            confidence=round(min(95, probability)),
            factors=factors,
        )

    if probability >= 20 and clouds >= 30:
        return MasterStatusResult(
            status=MasterStatus.WAIT,
            message="Activity, but cloudy",
            subtext="Solar activity is high. Check the map for clear skies.",
            confidence=round((probability + (100 - clouds)) / 2),
            factors=factors,
        )

    if clouds < 50 and probability >= 10:
        return MasterStatusResult(
            status=MasterStatus.WAIT,
            message="Clear, but low activity",
            subtext="Clear skies. Waiting for activity to pick up.",
            confidence=round(probability * 0.8),
            factors=factors,
        )

    return MasterStatusResult(
        status=MasterStatus.NO,
        message="Unlikely",
        subtext="Low solar activity right now. Relax and try again later.",
        confidence=round(max(10, 100 - probability)),
        factors=factors,
    )
