"""
Forecast Serialization

Converts between the JSON wire shapes and the engine's models. Parsing is
the only place where malformed input is reported; once a ForecastInput
exists, the engine only rejects an empty window list.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any

import deal
from returns.result import Failure, Result, Success

from aurora_decision.api.core.enums import KpTrend
from aurora_decision.api.core.exceptions import ForecastFormatError
from aurora_decision.api.core.models import Decision, ForecastInput, ForecastWindow
from aurora_decision.api.core.utils import ensure_aware
from aurora_decision.api.decision.kp_trend import detect_kp_trend


logger = logging.getLogger(__name__)


__all__ = [
    "decision_to_json",
    "load_forecast_input",
    "parse_forecast_input",
    "parse_forecast_window",
]


def _parse_time(value: Any) -> datetime:
    if not isinstance(value, str):
        raise ValueError(f"timestamp must be a string, got {type(value).__name__}")
    return ensure_aware(datetime.fromisoformat(value))


def _parse_number(row: dict[str, Any], key: str) -> float:
    value = row[key]
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise ValueError(f"{key} must be a number, got {value!r}")
    return float(value)


def parse_forecast_window(row: dict[str, Any]) -> Result[ForecastWindow, str]:
    """
    Parse one hourly forecast entry.

    Returns:
        Success with the window, or Failure with an error message
    """
    try:
        probability = row.get("probability")
        return Success(
            ForecastWindow(
                time=_parse_time(row["time"]),
                cloud_cover=_parse_number(row, "cloudCover"),
                solar_elevation=_parse_number(row, "solarElevation"),
                kp_index=_parse_number(row, "kpIndex"),
                probability=None if probability is None else _parse_number(row, "probability"),
            )
        )
    except KeyError as e:
        return Failure(f"Missing key {e.args[0]!r} in forecast window")
    except (TypeError, ValueError) as e:
        return Failure(f"Invalid forecast window: {e}")


def parse_forecast_input(data: dict[str, Any]) -> Result[ForecastInput, str]:
    """
    Parse a request payload into a ForecastInput.

    Expected keys: ``hourlyForecasts`` (list), ``globalKp``, ``kpTrend``
    (optional, detected from the windows when absent) and
    ``travelTimeMinutes`` (optional). An empty window list parses
    successfully; the engine rejects it.

    Returns:
        Success with the input, or Failure with an error message
    """
    if not isinstance(data, dict):
        return Failure("Forecast payload must be a JSON object")

    rows = data.get("hourlyForecasts")
    if not isinstance(rows, list):
        return Failure("hourlyForecasts must be a list")

    windows: list[ForecastWindow] = []
    for index, row in enumerate(rows):
        if not isinstance(row, dict):
            return Failure(f"hourlyForecasts[{index}] must be an object")
        parsed = parse_forecast_window(row)
        if isinstance(parsed, Failure):
            return Failure(f"hourlyForecasts[{index}]: {parsed.failure()}")
        windows.append(parsed.unwrap())

    try:
        global_kp = _parse_number(data, "globalKp")
    except KeyError:
        return Failure("Missing key 'globalKp'")
    except ValueError as e:
        return Failure(str(e))

    raw_trend = data.get("kpTrend")
    if raw_trend is None:
        kp_trend = detect_kp_trend(windows)
        logger.debug(f"No kpTrend supplied; detected {kp_trend.value}")
    else:
        try:
            kp_trend = KpTrend(raw_trend)
        except ValueError:
            return Failure(f"Invalid kpTrend {raw_trend!r} (expected increasing, stable or decreasing)")

    travel = data.get("travelTimeMinutes")
    if travel is not None and (isinstance(travel, bool) or not isinstance(travel, int) or travel < 0):
        return Failure(f"travelTimeMinutes must be a non-negative integer, got {travel!r}")

    return Success(
        ForecastInput(
            hourly_forecasts=tuple(windows),
            global_kp=global_kp,
            kp_trend=kp_trend,
            travel_time_minutes=travel,
        )
    )


@deal.raises(ForecastFormatError)
def load_forecast_input(path: Path) -> ForecastInput:
    """
    Load a forecast input from a JSON file.

    Args:
        path: Path to the JSON file

    Returns:
        Parsed forecast input

    Raises:
        ForecastFormatError: If the file cannot be read or parsed
    """
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise ForecastFormatError(f"Cannot read forecast file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ForecastFormatError(f"Forecast file {path} is not valid JSON: {e}") from e

    result = parse_forecast_input(data)
    if isinstance(result, Failure):
        raise ForecastFormatError(f"{path}: {result.failure()}")
    forecast: ForecastInput = result.unwrap()
    logger.debug(f"Loaded {len(forecast.hourly_forecasts)} forecast windows from {path}")
    return forecast


def decision_to_json(decision: Decision, indent: int | None = 2) -> str:
    """Serialize a decision to its JSON response shape."""
    return json.dumps(decision.to_dict(), indent=indent, ensure_ascii=False)
