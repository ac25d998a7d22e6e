"""
Aurora Decision Engine - Orchestrator

Entry point of the decision layer. Composes darkness, scoring, limiting
factor, global state, UI directives and explanation into one pure function
from raw forecast input to a complete decision.

No I/O, no randomness and no wall clock: "now" is always passed in, so the
same input always yields the same decision (apart from ``computed_at``).
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime

import deal

from aurora_decision.api.core.config import DEFAULT_SETTINGS, EngineSettings
from aurora_decision.api.core.enums import KpTrend
from aurora_decision.api.core.exceptions import EmptyForecastError
from aurora_decision.api.core.models import Decision, ForecastInput, ForecastWindow, ScoredWindow
from aurora_decision.api.core.utils import ensure_aware, get_timezone
from aurora_decision.api.decision.darkness import is_dark_enough_for_aurora
from aurora_decision.api.decision.explanation import generate_explanation
from aurora_decision.api.decision.global_state import compute_global_state, select_best_index
from aurora_decision.api.decision.limiting_factor import detect_limiting_factor
from aurora_decision.api.decision.scoring import compute_ads
from aurora_decision.api.decision.ui_directives import generate_ui_directives


logger = logging.getLogger(__name__)


__all__ = [
    "compute_decision",
    "score_window",
]


def score_window(window: ForecastWindow, kp_trend: KpTrend) -> ScoredWindow:
    """Score one forecast window. Seasonal darkness uses the window's UTC calendar date."""
    ads = compute_ads(
        kp_index=window.kp_index,
        cloud_cover=window.cloud_cover,
        solar_elevation=window.solar_elevation,
        kp_trend=kp_trend,
        on_date=ensure_aware(window.time).astimezone(UTC).date(),
    )
    return ScoredWindow(
        time=window.time,
        ads=ads.score,
        classification=ads.classification,
        is_dark_enough=is_dark_enough_for_aurora(window.solar_elevation),
    )


@deal.raises(EmptyForecastError)
def compute_decision(
    forecast_input: ForecastInput,
    now: datetime,
    *,
    computed_at: datetime | None = None,
    settings: EngineSettings | None = None,
) -> Decision:
    """
    Compute the complete decision for a forecast.

    Steps:
    1. Score every forecast window
    2. Pick the best window (dark windows first)
    3. Detect the limiting factor from the best window's raw inputs
    4. Resolve the global state (darkness and imminence gates)
    5. Generate UI directives
    6. Render the explanation text

    Args:
        forecast_input: Hourly forecast windows plus Kp data
        now: Reference time for the imminence gate
        computed_at: Timestamp recorded on the decision (defaults to ``now``)
        settings: Reference city and display timezone for the explanation

    Returns:
        Complete decision

    Raises:
        EmptyForecastError: If the forecast has no windows
    """
    forecasts = forecast_input.hourly_forecasts
    if not forecasts:
        raise EmptyForecastError("Cannot compute a decision with no hourly forecasts")

    settings = settings or DEFAULT_SETTINGS
    now = ensure_aware(now)

    windows = tuple(score_window(window, forecast_input.kp_trend) for window in forecasts)

    best_index = select_best_index(windows)
    best_forecast = forecasts[best_index]
    limiting_factor = detect_limiting_factor(
        cloud_cover=best_forecast.cloud_cover,
        kp_index=best_forecast.kp_index,
        solar_elevation=best_forecast.solar_elevation,
    )

    global_state = compute_global_state(windows, limiting_factor, now, forecasts, best_index=best_index)
    ui_directives = generate_ui_directives(windows)

    explanation = generate_explanation(
        state=global_state.state,
        best_window_ads=global_state.best_window.ads,
        best_window_start=global_state.best_window.start,
        limiting_factor=global_state.best_window.limiting_factor,
        next_window_start=global_state.next_window.start if global_state.next_window else None,
        travel_time_minutes=forecast_input.travel_time_minutes,
        reference_city=settings.reference_city,
        tz=get_timezone(settings.timezone),
    )

    logger.info(
        f"Decision for {len(windows)} windows: {global_state.state.value} "
        f"(best ADS {global_state.best_window.ads:.1f} at {global_state.best_window.start.isoformat()})"
    )

    return Decision(
        state=global_state.state,
        best_window=global_state.best_window,
        next_window=global_state.next_window,
        windows=windows,
        ui_directives=ui_directives,
        explanation=explanation,
        computed_at=computed_at or now,
    )
