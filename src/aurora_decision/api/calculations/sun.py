"""
Sun Position for Aurora Visibility

Solar altitude from Astropy (``get_sun`` transformed to the observer's
AltAz frame) for callers that have coordinates but no precomputed
elevation. On top of it: the next time it is dark enough for aurora, the
darkest time tonight (solar nadir) and a countdown until darkness.
"""

from __future__ import annotations

import logging
import warnings
from datetime import UTC, datetime, timedelta

import deal
import numpy as np
from astropy import units as u
from astropy.coordinates import AltAz, EarthLocation, get_sun
from astropy.time import Time
from astropy.utils import iers

from aurora_decision.api.core.constants import CIVIL_TWILIGHT_DEGREES, NAUTICAL_TWILIGHT_DEGREES
from aurora_decision.api.core.utils import ensure_aware


logger = logging.getLogger(__name__)


__all__ = [
    "calculate_sun_elevation",
    "configure_astropy_iers",
    "find_best_time_tonight",
    "find_next_dark_time",
    "format_time_until_dark",
    "is_dark_enough",
    "is_optimal_aurora_time",
    "minutes_until_dark",
]


def configure_astropy_iers() -> None:
    """
    Configure Astropy IERS (International Earth Rotation Service) data handling.

    Uses the IERS tables bundled with Astropy instead of downloading them, and
    silences the warnings for times past the end of those tables. Precision
    drops to the arcsecond level there, far below what the -6° gate needs.
    """
    iers.conf.auto_download = False
    iers.conf.iers_degraded_accuracy = "warn"

    warnings.filterwarnings(
        "ignore",
        message=".*Tried to get polar motions for times after IERS data is valid.*",
        category=UserWarning,
    )
    warnings.filterwarnings(
        "ignore",
        message=".*times are outside of range covered by IERS table.*",
    )
    logger.debug("Astropy IERS configuration applied")


configure_astropy_iers()


@deal.pre(lambda latitude, longitude: -90 <= latitude <= 90, message="Latitude must be -90 to +90")
@deal.pre(lambda latitude, longitude: -180 <= longitude <= 180, message="Longitude must be -180 to +180")
def _earth_location(latitude: float, longitude: float) -> EarthLocation:
    return EarthLocation.from_geodetic(lon=longitude * u.deg, lat=latitude * u.deg, height=0 * u.m)


def _to_time(when: datetime) -> Time:
    utc = ensure_aware(when).astimezone(UTC).replace(tzinfo=None)
    return Time(utc, scale="utc")


def _sun_altitudes(latitude: float, longitude: float, start: datetime, offsets_minutes: np.ndarray) -> np.ndarray:
    """Sun altitude in degrees at start + each offset, in one vectorized transform."""
    times = _to_time(start) + offsets_minutes * u.min
    frame = AltAz(obstime=times, location=_earth_location(latitude, longitude))
    return np.asarray(get_sun(times).transform_to(frame).alt.degree)


@deal.pre(lambda latitude, longitude, when: -90 <= latitude <= 90, message="Latitude must be -90 to +90")  # type: ignore[misc,arg-type]
@deal.pre(lambda latitude, longitude, when: -180 <= longitude <= 180, message="Longitude must be -180 to +180")  # type: ignore[misc,arg-type]
@deal.post(lambda result: -90.0 <= result <= 90.0, message="Elevation must be -90 to +90 degrees")
def calculate_sun_elevation(latitude: float, longitude: float, when: datetime) -> float:
    """
    Calculate the sun's elevation angle for a location and time.

    Geometric altitude (no atmospheric refraction), which is what the
    twilight thresholds are defined against.

    Args:
        latitude: Observer latitude in degrees
        longitude: Observer longitude in degrees (east positive)
        when: Time of observation (assumed UTC if naive)

    Returns:
        Elevation in degrees, negative when the sun is below the horizon
    """
    return float(_sun_altitudes(latitude, longitude, when, np.zeros(1))[0])


def is_dark_enough(sun_elevation: float) -> bool:
    """Whether the sun is below the civil twilight boundary (strictly)."""
    return sun_elevation < CIVIL_TWILIGHT_DEGREES


def is_optimal_aurora_time(latitude: float, longitude: float, when: datetime) -> bool:
    """Whether the sun is below -12°, where even faint aurora stands out."""
    return calculate_sun_elevation(latitude, longitude, when) < NAUTICAL_TWILIGHT_DEGREES


def find_next_dark_time(
    latitude: float,
    longitude: float,
    start: datetime,
    horizon_hours: int = 48,
    step_minutes: int = 10,
) -> datetime | None:
    """
    Find the first time at or after start when it is dark enough for aurora.

    Samples every step_minutes, then narrows the crossing down to the minute.

    Args:
        latitude: Observer latitude in degrees
        longitude: Observer longitude in degrees
        start: Search start (assumed UTC if naive)
        horizon_hours: How far ahead to search
        step_minutes: Coarse search resolution

    Returns:
        First dark time found, or None (e.g., during midnight sun)
    """
    start = ensure_aware(start)
    offsets = np.arange(0, horizon_hours * 60 + 1, step_minutes)
    dark = np.flatnonzero(_sun_altitudes(latitude, longitude, start, offsets) < CIVIL_TWILIGHT_DEGREES)
    if dark.size == 0:
        logger.debug(f"No darkness within {horizon_hours} h of {start.isoformat()}")
        return None

    index = int(dark[0])
    if index == 0:
        return start

    fine = np.arange(offsets[index - 1] + 1, offsets[index] + 1)
    fine_dark = np.flatnonzero(_sun_altitudes(latitude, longitude, start, fine) < CIVIL_TWILIGHT_DEGREES)
    minutes = int(fine[fine_dark[0]]) if fine_dark.size else int(offsets[index])
    return start + timedelta(minutes=minutes)


def find_best_time_tonight(latitude: float, longitude: float, reference: datetime, step_minutes: int = 10) -> datetime:
    """
    Find the darkest moment of the coming night (the next solar nadir).

    Args:
        latitude: Observer latitude in degrees
        longitude: Observer longitude in degrees
        reference: Search start (assumed UTC if naive)
        step_minutes: Coarse search resolution

    Returns:
        Time within the next 24 hours when the sun is lowest, to the minute
    """
    reference = ensure_aware(reference)
    offsets = np.arange(0, 24 * 60 + 1, step_minutes)
    coarse = int(offsets[int(np.argmin(_sun_altitudes(latitude, longitude, reference, offsets)))])

    fine = np.arange(max(0, coarse - step_minutes), coarse + step_minutes + 1)
    lowest = int(fine[int(np.argmin(_sun_altitudes(latitude, longitude, reference, fine)))])
    return reference + timedelta(minutes=lowest)


def minutes_until_dark(latitude: float, longitude: float, now: datetime) -> int | None:
    """
    Minutes until it is dark enough for aurora.

    Returns:
        0 if it is already dark, None if no darkness comes within two days
    """
    next_dark = find_next_dark_time(latitude, longitude, now)
    if next_dark is None:
        return None
    return round((next_dark - ensure_aware(now)).total_seconds() / 60)


def format_time_until_dark(minutes: int | None) -> str:
    """
    Short countdown text for minutes_until_dark.

    Examples:
        >>> format_time_until_dark(0)
        'Now'
        >>> format_time_until_dark(135)
        'in 2h 15min'
        >>> format_time_until_dark(None)
        'No darkness today'
    """
    if minutes is None or minutes < 0:
        return "No darkness today"
    if minutes == 0:
        return "Now"
    if minutes < 60:
        return f"in {minutes} min"

    hours, remaining = divmod(minutes, 60)
    if remaining == 0:
        return f"in {hours}h"
    return f"in {hours}h {remaining}min"
