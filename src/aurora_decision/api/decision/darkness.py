"""
Darkness Conversion

Converts solar elevation angle (degrees) to a 0-100 darkness factor based on
the twilight phases relevant to aurora viewing, and gates windows on whether
it is dark enough to see aurora at all.

Arctic-aware: accounts for polar night (Nov 21 - Jan 21) and midnight sun
(May 19 - Jul 23) at Tromsø (69.7°N). Seasonal overrides depend only on the
calendar date passed by the caller, never on the wall clock.

Twilight phase definitions (from highest to lowest sun position):
- Civil twilight: sun between -6° and 0°
- Nautical twilight: sun between -12° and -6°
- Astronomical twilight: sun between -18° and -12°
- Astronomical night: sun below -18°
"""

from __future__ import annotations

import logging
from datetime import date

import deal

from aurora_decision.api.core.constants import (
    ASTRONOMICAL_TWILIGHT_DEGREES,
    CIVIL_TWILIGHT_DEGREES,
    NAUTICAL_TWILIGHT_DEGREES,
)
from aurora_decision.api.core.enums import DarknessStatus, TwilightPhase


logger = logging.getLogger(__name__)


__all__ = [
    "POLAR_NIGHT_BONUS",
    "get_darkness_explanation",
    "get_darkness_status",
    "get_twilight_phase",
    "is_dark_enough_for_aurora",
    "is_midnight_sun",
    "is_polar_night",
    "solar_elevation_to_darkness",
]


POLAR_NIGHT_BONUS = 10.0

# (upper elevation, lower elevation, darkness at upper, darkness at lower)
_TWILIGHT_BANDS: tuple[tuple[float, float, float, float], ...] = (
    (0.0, CIVIL_TWILIGHT_DEGREES, 0.0, 10.0),
    (CIVIL_TWILIGHT_DEGREES, NAUTICAL_TWILIGHT_DEGREES, 10.0, 40.0),
    (NAUTICAL_TWILIGHT_DEGREES, ASTRONOMICAL_TWILIGHT_DEGREES, 40.0, 80.0),
)


def is_polar_night(day: date) -> bool:
    """
    Check whether a date falls within the Tromsø polar night period.

    Polar night runs from November 21 through January 21 (both inclusive).

    Args:
        day: Calendar date to check (datetimes are accepted too)

    Returns:
        True if within polar night
    """
    if day.month == 11 and day.day >= 21:
        return True
    if day.month == 12:
        return True
    return day.month == 1 and day.day <= 21


def is_midnight_sun(day: date) -> bool:
    """
    Check whether a date falls within the Tromsø midnight sun period.

    Midnight sun runs from May 19 through July 23 (both inclusive).

    Args:
        day: Calendar date to check (datetimes are accepted too)

    Returns:
        True if within midnight sun
    """
    if day.month == 5 and day.day >= 19:
        return True
    if day.month == 6:
        return True
    return day.month == 7 and day.day <= 23


def get_twilight_phase(solar_elevation: float) -> TwilightPhase:
    """Determine the twilight phase name for a given solar elevation."""
    if solar_elevation > 0:
        return TwilightPhase.DAY
    if solar_elevation > CIVIL_TWILIGHT_DEGREES:
        return TwilightPhase.CIVIL_TWILIGHT
    if solar_elevation > NAUTICAL_TWILIGHT_DEGREES:
        return TwilightPhase.NAUTICAL_TWILIGHT
    if solar_elevation > ASTRONOMICAL_TWILIGHT_DEGREES:
        return TwilightPhase.ASTRONOMICAL_TWILIGHT
    return TwilightPhase.NIGHT


def _base_darkness(solar_elevation: float) -> float:
    if solar_elevation > 0:
        return 0.0
    for upper, lower, dark_upper, dark_lower in _TWILIGHT_BANDS:
        if solar_elevation > lower:
            # Linear interpolation within the band
            fraction = (upper - solar_elevation) / (upper - lower)
            return dark_upper + (dark_lower - dark_upper) * fraction
    return 100.0


@deal.post(lambda result: 0.0 <= result <= 100.0, message="Darkness must be 0-100")
def solar_elevation_to_darkness(solar_elevation: float, on_date: date) -> float:
    """
    Convert solar elevation to a darkness factor (0-100).

    Args:
        solar_elevation: Solar elevation angle in degrees
            - Positive values: sun above horizon (daytime)
            - 0°: sun at horizon (sunrise/sunset)
            - -6°: civil twilight boundary
            - -12°: nautical twilight boundary
            - -18°: astronomical twilight boundary
        on_date: Calendar date of the window, used only for seasonal overrides

    Returns:
        Darkness factor (0-100)
            - 0: Full daylight (elevation > 0°)
            - 0-10: Civil twilight
            - 10-40: Nautical twilight
            - 40-80: Astronomical twilight
            - 100: Astronomical night (elevation <= -18°)
            - Midnight sun: always 0
            - Polar night: base darkness + 10, clamped to 100
    """
    if is_midnight_sun(on_date):
        return 0.0

    darkness = _base_darkness(solar_elevation)

    if is_polar_night(on_date):
        darkness = min(100.0, darkness + POLAR_NIGHT_BONUS)

    return darkness


def is_dark_enough_for_aurora(solar_elevation: float) -> bool:
    """
    Determine if it is dark enough to observe aurora.

    Aurora needs the sun at or below the civil twilight boundary (-6°).
    Above that the sky is too bright regardless of activity or weather.

    Examples:
        >>> is_dark_enough_for_aurora(10)
        False
        >>> is_dark_enough_for_aurora(-3)
        False
        >>> is_dark_enough_for_aurora(-6)
        True
    """
    return solar_elevation <= CIVIL_TWILIGHT_DEGREES


def get_darkness_status(solar_elevation: float) -> DarknessStatus:
    """Coarse darkness state for user-facing messages."""
    if solar_elevation > 0:
        return DarknessStatus.DAYLIGHT
    if solar_elevation > CIVIL_TWILIGHT_DEGREES:
        return DarknessStatus.CIVIL_TWILIGHT
    return DarknessStatus.AURORA_VISIBLE


def get_darkness_explanation(solar_elevation: float) -> str | None:
    """
    Explain why aurora is not visible at this solar elevation.

    Returns:
        User-facing explanation, or None when it is dark enough
    """
    match get_darkness_status(solar_elevation):
        case DarknessStatus.DAYLIGHT:
            return "The sun is still above the horizon. Aurora is invisible during daylight."
        case DarknessStatus.CIVIL_TWILIGHT:
            return "The sky is still too bright (civil twilight). Wait until full darkness for aurora visibility."
        case DarknessStatus.AURORA_VISIBLE:
            return None
