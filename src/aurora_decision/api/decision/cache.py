"""
Decision Cache

Short-lived cache for decisions, keyed by a hash of the forecast input and
the minute of "now". Because the engine is deterministic, a cached decision
is exactly what a fresh computation would return within that minute.

The cache is an explicit object owned by the caller (e.g., a request handler)
and passed where needed. There is no module-level instance.
"""

from __future__ import annotations

import hashlib
import json
import logging
import time
from collections.abc import Callable
from datetime import datetime

from cachetools import TTLCache

from aurora_decision.api.core.config import DEFAULT_SETTINGS, EngineSettings
from aurora_decision.api.core.models import Decision, ForecastInput
from aurora_decision.api.core.utils import ensure_aware
from aurora_decision.api.decision.engine import compute_decision


logger = logging.getLogger(__name__)


__all__ = [
    "DecisionCache",
    "forecast_cache_key",
]


def forecast_cache_key(forecast_input: ForecastInput, now: datetime) -> str:
    """
    Build the cache key for a forecast input at a given time.

    Args:
        forecast_input: Forecast input to hash
        now: Reference time, truncated to the minute

    Returns:
        Hex digest identifying the input and minute
    """
    canonical = json.dumps(forecast_input.to_dict(), sort_keys=True, separators=(",", ":"))
    minute = ensure_aware(now).replace(second=0, microsecond=0).isoformat()
    return hashlib.sha256(f"{canonical}|{minute}".encode()).hexdigest()


class DecisionCache:
    """TTL cache of decisions for identical forecast inputs."""

    def __init__(
        self,
        settings: EngineSettings | None = None,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self.settings = settings or DEFAULT_SETTINGS
        self._cache: TTLCache[str, Decision] = TTLCache(
            maxsize=self.settings.cache_max_entries,
            ttl=self.settings.cache_ttl_seconds,
            timer=timer,
        )

    def __len__(self) -> int:
        return len(self._cache)

    def get(self, forecast_input: ForecastInput, now: datetime) -> Decision | None:
        """Return the cached decision, or None on a miss."""
        return self._cache.get(forecast_cache_key(forecast_input, now))

    def get_or_compute(self, forecast_input: ForecastInput, now: datetime) -> Decision:
        """
        Return the cached decision for this input, computing it on a miss.

        Raises:
            EmptyForecastError: If the forecast has no windows
        """
        key = forecast_cache_key(forecast_input, now)
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug(f"Decision cache hit: {key[:12]}")
            return cached

        logger.debug(f"Decision cache miss: {key[:12]}")
        decision = compute_decision(forecast_input, now, settings=self.settings)
        self._cache[key] = decision
        return decision

    def clear(self) -> None:
        """Drop all cached decisions."""
        self._cache.clear()
