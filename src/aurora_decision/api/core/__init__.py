"""Core subpackage for shared constants, enums, models, utilities, and exceptions."""

from aurora_decision.api.core.config import EngineSettings, load_settings
from aurora_decision.api.core.utils import (
    clamp,
    format_clock_time,
    format_travel_time,
)


__all__ = [
    "EngineSettings",
    "clamp",
    "format_clock_time",
    "format_travel_time",
    "load_settings",
]
