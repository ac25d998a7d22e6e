"""
Data model definitions for the aurora decision engine.

Explicit boundaries between raw forecast input, per-window intermediate
results and the final decision. All models are immutable.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from aurora_decision.api.core.enums import Classification, GlobalState, KpTrend, LimitingFactor


__all__ = [
    "ADSBreakdown",
    "ADSResult",
    "BestWindow",
    "Decision",
    "ForecastInput",
    "ForecastWindow",
    "GlobalStateResult",
    "NextWindow",
    "ScoredWindow",
    "UIDirectives",
]


def _iso(dt: datetime) -> str:
    return dt.isoformat()


@dataclass(frozen=True)
class ForecastWindow:
    """One sampled hour of forecast data, as delivered by the forecast provider."""

    time: datetime  # Window start, unique within a forecast run
    cloud_cover: float  # Cloud cover percentage (0-100)
    solar_elevation: float  # Sun angle above (+) or below (-) the horizon in degrees
    kp_index: float  # Geomagnetic Kp index for this window (0-9)
    probability: float | None = None  # Provider-supplied viewing probability (0-100)


@dataclass(frozen=True)
class ForecastInput:
    """Complete input for one decision run."""

    hourly_forecasts: tuple[ForecastWindow, ...]
    global_kp: float  # Current Kp reading, independent of the per-window values
    kp_trend: KpTrend
    travel_time_minutes: int | None = None  # Minutes from the reference city, copy only

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the request wire shape (camelCase keys)."""
        data: dict[str, Any] = {
            "hourlyForecasts": [
                {
                    "time": _iso(w.time),
                    "cloudCover": w.cloud_cover,
                    "solarElevation": w.solar_elevation,
                    "kpIndex": w.kp_index,
                    **({"probability": w.probability} if w.probability is not None else {}),
                }
                for w in self.hourly_forecasts
            ],
            "globalKp": self.global_kp,
            "kpTrend": self.kp_trend.value,
        }
        if self.travel_time_minutes is not None:
            data["travelTimeMinutes"] = self.travel_time_minutes
        return data


@dataclass(frozen=True)
class ADSBreakdown:
    """Individual contributions to an Aurora Decision Score."""

    kp_component: float
    cloud_component: float
    darkness_component: float
    trend_bonus: float
    raw_score: float  # Sum before clamping, roughly -5 to 105


@dataclass(frozen=True)
class ADSResult:
    """Aurora Decision Score for a single window."""

    score: float  # 0-100
    classification: Classification
    breakdown: ADSBreakdown


@dataclass(frozen=True)
class ScoredWindow:
    """A forecast window with its score. Computed per run, never persisted."""

    time: datetime
    ads: float
    classification: Classification
    is_dark_enough: bool  # Solar elevation at or below the civil twilight boundary

    def to_dict(self) -> dict[str, Any]:
        return {
            "time": _iso(self.time),
            "ads": self.ads,
            "classification": self.classification.value,
            "isDarkEnough": self.is_dark_enough,
        }


@dataclass(frozen=True)
class BestWindow:
    """The single best window in the forecast period."""

    start: datetime
    end: datetime
    ads: float
    classification: Classification
    limiting_factor: LimitingFactor
    probability_from_forecast: float | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "start": _iso(self.start),
            "end": _iso(self.end),
            "ads": self.ads,
        }
        if self.probability_from_forecast is not None:
            data["probabilityFromForecast"] = self.probability_from_forecast
        data["classification"] = self.classification.value
        data["limitingFactor"] = self.limiting_factor.value
        return data


@dataclass(frozen=True)
class NextWindow:
    """First viable window reported when the overall verdict is unlikely."""

    start: datetime
    ads: float

    def to_dict(self) -> dict[str, Any]:
        return {"start": _iso(self.start), "ads": self.ads}


@dataclass(frozen=True)
class UIDirectives:
    """Display hints derived from the scored windows."""

    show_48_grid: bool
    highlight_top: int  # 0 = none, 1 = best only, up to 3
    show_best_banner: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "show48Grid": self.show_48_grid,
            "highlightTop": self.highlight_top,
            "showBestBanner": self.show_best_banner,
        }


@dataclass(frozen=True)
class GlobalStateResult:
    """Output of the global state resolver."""

    state: GlobalState
    best_window: BestWindow
    next_window: NextWindow | None = None


@dataclass(frozen=True)
class Decision:
    """
    Complete result of one decision run.

    Identical inputs produce identical decisions apart from ``computed_at``,
    which records when the decision was made, not when the forecast is valid.
    """

    state: GlobalState
    best_window: BestWindow
    windows: tuple[ScoredWindow, ...]
    ui_directives: UIDirectives
    explanation: str
    computed_at: datetime
    next_window: NextWindow | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the response wire shape (camelCase keys, optional fields omitted)."""
        data: dict[str, Any] = {
            "state": self.state.value,
            "bestWindow": self.best_window.to_dict(),
        }
        if self.next_window is not None:
            data["nextWindow"] = self.next_window.to_dict()
        data["windows"] = [w.to_dict() for w in self.windows]
        data["uiDirectives"] = self.ui_directives.to_dict()
        data["explanation"] = self.explanation
        data["computedAt"] = _iso(self.computed_at)
        return data
