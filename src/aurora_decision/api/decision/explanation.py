"""
Deterministic Explanation Templates

Renders the global decision into fixed-template text. There is no free-form
text generation: every possible output string comes from one of three
templates with interpolated values, so explanations are auditable and
testable.
"""

from __future__ import annotations

from datetime import datetime, tzinfo
from typing import Final

from aurora_decision.api.core.enums import GlobalState, LimitingFactor
from aurora_decision.api.core.utils import format_clock_time, format_travel_time
from aurora_decision.api.decision.limiting_factor import describe_limiting_factor


__all__ = [
    "EXPLANATION_TEMPLATES",
    "generate_explanation",
]


EXPLANATION_TEMPLATES: Final[dict[GlobalState, str]] = {
    GlobalState.EXCELLENT: (
        "Strong aurora conditions expected. Best viewing time: {time}{travel}. Confidence: {ads}/100."
    ),
    GlobalState.POSSIBLE: (
        "Limited aurora potential detected. Best window: {time}{travel}. "
        "Confidence: {ads}/100. Main limitation: {factor}."
    ),
    GlobalState.UNLIKELY: (
        "Aurora unlikely in the next 48 hours. Limiting factor: {factor}. "
        "Next possible window{next} (low confidence)."
    ),
}


def generate_explanation(
    state: GlobalState,
    best_window_ads: float,
    best_window_start: datetime,
    limiting_factor: LimitingFactor,
    next_window_start: datetime | None = None,
    travel_time_minutes: int | None = None,
    reference_city: str = "Tromsø",
    tz: tzinfo | None = None,
) -> str:
    """
    Generate the explanation text for a decision.

    Templates:
    - EXCELLENT: "Strong aurora conditions expected. Best viewing time: {time}. Confidence: {ads}/100."
    - POSSIBLE: "Limited aurora potential detected. Best window: {time}. Confidence: {ads}/100.
      Main limitation: {factor}."
    - UNLIKELY: "Aurora unlikely in the next 48 hours. Limiting factor: {factor}.
      Next possible window: {time} (low confidence)."

    Args:
        state: Global forecast state
        best_window_ads: Score of the best window (rounded for display)
        best_window_start: Start of the best window
        limiting_factor: Limiting factor of the best window
        next_window_start: Start of the next viable window, if any
        travel_time_minutes: Travel time from the reference city, if known
        reference_city: City named when travel time is zero
        tz: Display timezone for HH:MM values (defaults to each timestamp's own offset)

    Returns:
        Explanation text
    """
    travel = "" if travel_time_minutes is None else f" {format_travel_time(travel_time_minutes, reference_city)}"
    next_text = "" if next_window_start is None else f": {format_clock_time(next_window_start, tz)}"

    return EXPLANATION_TEMPLATES[state].format(
        time=format_clock_time(best_window_start, tz),
        travel=travel,
        ads=round(best_window_ads),
        factor=describe_limiting_factor(limiting_factor),
        next=next_text,
    )
