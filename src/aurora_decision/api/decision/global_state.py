"""
Global Forecast State

Determines the overall aurora forecast state (excellent / possible / unlikely)
for the whole forecast horizon, and picks the best and next viable windows.

Two gates sit in front of the score thresholds:
1. Darkness gate: a window that is not dark enough can never be better than
   unlikely, however strong the geomagnetic activity.
2. Imminence gate: a best window more than 30 minutes away from "now" is
   capped at possible, so the verdict never says "go out now" for a peak
   that happens later tonight.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime, timedelta

import deal

from aurora_decision.api.core.constants import (
    ADS_EXCELLENT_THRESHOLD,
    ADS_MODERATE_THRESHOLD,
    BEST_WINDOW_DURATION_MINUTES,
    IMMINENCE_WINDOW_MINUTES,
)
from aurora_decision.api.core.enums import GlobalState, LimitingFactor
from aurora_decision.api.core.exceptions import EmptyForecastError
from aurora_decision.api.core.models import (
    BestWindow,
    ForecastWindow,
    GlobalStateResult,
    NextWindow,
    ScoredWindow,
)
from aurora_decision.api.core.utils import minutes_between


logger = logging.getLogger(__name__)


__all__ = [
    "compute_global_state",
    "determine_state",
    "find_next_window",
    "select_best_index",
    "select_best_window",
]


def determine_state(max_ads: float) -> GlobalState:
    """Map a score to a state using thresholds only (no gates)."""
    if max_ads >= ADS_EXCELLENT_THRESHOLD:
        return GlobalState.EXCELLENT
    if max_ads >= ADS_MODERATE_THRESHOLD:
        return GlobalState.POSSIBLE
    return GlobalState.UNLIKELY


def _max_ads_index(windows: Sequence[ScoredWindow], candidates: Sequence[int]) -> int:
    # Strict comparison keeps the earliest window on ties
    best = candidates[0]
    for index in candidates[1:]:
        if windows[index].ads > windows[best].ads:
            best = index
    return best


@deal.raises(EmptyForecastError)
def select_best_index(windows: Sequence[ScoredWindow]) -> int:
    """
    Index of the best window, preferring windows that are dark enough.

    The highest-scoring dark window wins. If no window is dark enough the
    highest-scoring window overall is returned; it can never produce more
    than an unlikely verdict.

    Raises:
        EmptyForecastError: If there are no windows
    """
    if not windows:
        raise EmptyForecastError("Cannot select a best window from an empty forecast")

    dark_indexes = [i for i, w in enumerate(windows) if w.is_dark_enough]
    if dark_indexes:
        return _max_ads_index(windows, dark_indexes)

    logger.debug("No window is dark enough; falling back to the highest score overall")
    return _max_ads_index(windows, range(len(windows)))


@deal.raises(EmptyForecastError)
def select_best_window(windows: Sequence[ScoredWindow]) -> ScoredWindow:
    """Best window by the rules of select_best_index."""
    return windows[select_best_index(windows)]


def find_next_window(windows: Sequence[ScoredWindow]) -> NextWindow | None:
    """First window (in forecast order) with a viable score, if any."""
    for window in windows:
        if window.ads >= ADS_MODERATE_THRESHOLD:
            return NextWindow(start=window.time, ads=window.ads)
    return None


def _resolve_state(best: ScoredWindow, now: datetime) -> GlobalState:
    if not best.is_dark_enough:
        logger.debug(f"Best window {best.time.isoformat()} is not dark enough; state is unlikely")
        return GlobalState.UNLIKELY

    gap_minutes = minutes_between(now, best.time)
    state = determine_state(best.ads)
    if gap_minutes > IMMINENCE_WINDOW_MINUTES and state == GlobalState.EXCELLENT:
        logger.debug(f"Best window is {gap_minutes:.0f} min away; capping excellent at possible")
        return GlobalState.POSSIBLE
    return state


def _probability_for(index: int, hourly_forecasts: Sequence[ForecastWindow] | None) -> float | None:
    # Raw forecasts run parallel to the scored windows
    if not hourly_forecasts or index >= len(hourly_forecasts):
        return None
    return hourly_forecasts[index].probability


@deal.raises(EmptyForecastError)
def compute_global_state(
    windows: Sequence[ScoredWindow],
    limiting_factor_for_best: LimitingFactor,
    now: datetime,
    hourly_forecasts: Sequence[ForecastWindow] | None = None,
    best_index: int | None = None,
) -> GlobalStateResult:
    """
    Determine the global forecast state from scored windows.

    Decision logic:
    - Best window not dark enough: UNLIKELY
    - Best window more than 30 minutes from now: at most POSSIBLE
    - Otherwise: EXCELLENT (ADS >= 70), POSSIBLE (ADS >= 30), else UNLIKELY

    Args:
        windows: Scored forecast windows in forecast order
        limiting_factor_for_best: Limiting factor of the best window
        now: Reference time for the imminence gate
        hourly_forecasts: Raw forecast windows in the same order, used to echo provider probability
        best_index: Index of the best window when the caller already selected it

    Returns:
        Global state, best window, and the next viable window when unlikely

    Raises:
        EmptyForecastError: If there are no windows
    """
    if best_index is None:
        best_index = select_best_index(windows)
    best = windows[best_index]
    state = _resolve_state(best, now)

    best_window = BestWindow(
        start=best.time,
        end=best.time + timedelta(minutes=BEST_WINDOW_DURATION_MINUTES),
        ads=best.ads,
        classification=best.classification,
        limiting_factor=limiting_factor_for_best,
        probability_from_forecast=_probability_for(best_index, hourly_forecasts),
    )

    next_window = find_next_window(windows) if state == GlobalState.UNLIKELY else None

    return GlobalStateResult(state=state, best_window=best_window, next_window=next_window)
