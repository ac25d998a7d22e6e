"""
Aurora Decision Engine

A deterministic decision engine for Northern Lights viewing in Tromsø, Norway.
It turns hourly forecast readings (Kp index, cloud cover, solar elevation and
Kp trend) into one auditable recommendation with explanation text and UI hints.

Example:
    >>> from datetime import UTC, datetime
    >>> from aurora_decision import ForecastInput, ForecastWindow, KpTrend, compute_decision
    >>> now = datetime(2026, 1, 10, 21, 0, tzinfo=UTC)
    >>> forecast = ForecastInput(
    ...     hourly_forecasts=(ForecastWindow(time=now, cloud_cover=20, solar_elevation=-25, kp_index=7),),
    ...     global_kp=7,
    ...     kp_trend=KpTrend.STABLE,
    ... )
    >>> compute_decision(forecast, now).state
    <GlobalState.EXCELLENT: 'excellent'>
"""

from aurora_decision.api.core.enums import (
    Classification,
    GlobalState,
    KpTrend,
    LimitingFactor,
    MasterStatus,
    TwilightPhase,
)
from aurora_decision.api.core.exceptions import (
    AuroraDecisionError,
    ConfigurationError,
    EmptyForecastError,
    ForecastFormatError,
    InvalidForecastError,
)
from aurora_decision.api.core.models import (
    BestWindow,
    Decision,
    ForecastInput,
    ForecastWindow,
    NextWindow,
    ScoredWindow,
    UIDirectives,
)
from aurora_decision.api.decision.cache import DecisionCache
from aurora_decision.api.decision.engine import compute_decision


__version__ = "0.1.0"

__all__ = [
    "AuroraDecisionError",
    "BestWindow",
    "Classification",
    "ConfigurationError",
    "Decision",
    "DecisionCache",
    "EmptyForecastError",
    "ForecastFormatError",
    "ForecastInput",
    "ForecastWindow",
    "GlobalState",
    "InvalidForecastError",
    "KpTrend",
    "LimitingFactor",
    "MasterStatus",
    "NextWindow",
    "ScoredWindow",
    "TwilightPhase",
    "UIDirectives",
    "compute_decision",
]
