"""
Utility functions shared by the decision components.

Numeric clamping, time arithmetic and display formatting.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


logger = logging.getLogger(__name__)


__all__ = [
    "clamp",
    "ensure_aware",
    "format_clock_time",
    "format_travel_time",
    "get_timezone",
    "minutes_between",
]


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp value into the closed interval [lower, upper]."""
    return max(lower, min(upper, value))


def ensure_aware(dt: datetime) -> datetime:
    """Return dt with timezone info, assuming UTC for naive datetimes."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt


def minutes_between(start: datetime, end: datetime) -> float:
    """
    Absolute number of minutes between two datetimes.

    Args:
        start: First datetime (assumed UTC if naive)
        end: Second datetime (assumed UTC if naive)

    Returns:
        Non-negative difference in minutes
    """
    return abs((ensure_aware(end) - ensure_aware(start)).total_seconds()) / 60.0


def get_timezone(name: str | None) -> tzinfo | None:
    """
    Resolve an IANA timezone name.

    Args:
        name: Timezone name (e.g., "Europe/Oslo"), or None

    Returns:
        ZoneInfo for the name, or None if the name is empty or unknown
    """
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        logger.warning(f"Unknown timezone {name!r}: {e}")
        return None


def format_clock_time(dt: datetime, tz: tzinfo | None = None) -> str:
    """
    Format a datetime as a 24-hour "HH:MM" string.

    Args:
        dt: Datetime to format (assumed UTC if naive)
        tz: Timezone to render in; defaults to the datetime's own offset

    Returns:
        Time string such as "22:30"
    """
    dt = ensure_aware(dt)
    if tz is not None:
        dt = dt.astimezone(tz)
    return dt.strftime("%H:%M")


def format_travel_time(minutes: int, reference_city: str = "Tromsø") -> str:
    """
    Format travel time from the reference city for explanation text.

    Examples:
        >>> format_travel_time(0)
        '(from Tromsø)'
        >>> format_travel_time(45)
        '(45 min away)'
        >>> format_travel_time(90)
        '(1h 30m away)'
        >>> format_travel_time(120)
        '(2h away)'
    """
    if minutes == 0:
        return f"(from {reference_city})"
    if minutes < 60:
        return f"({minutes} min away)"
    hours, mins = divmod(minutes, 60)
    return f"({hours}h {mins}m away)" if mins > 0 else f"({hours}h away)"
