"""
Engine Settings Management

Manages the reference location and runtime settings used when rendering
decisions (city name for travel copy, display timezone, cache policy).
Settings are stored as JSON in the user's config directory and can be
overridden by environment variables.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, replace
from pathlib import Path

import deal

from aurora_decision.api.core.exceptions import ConfigurationError


logger = logging.getLogger(__name__)


__all__ = [
    "DEFAULT_SETTINGS",
    "EngineSettings",
    "get_config_path",
    "load_settings",
    "save_settings",
]


@dataclass(frozen=True)
class EngineSettings:
    """Runtime settings for the decision engine and its callers."""

    reference_city: str = "Tromsø"  # Name used in "(from <city>)" travel copy
    reference_latitude: float = 69.6492  # Degrees north
    reference_longitude: float = 18.9553  # Degrees east
    timezone: str = "Europe/Oslo"  # IANA zone for HH:MM rendering
    cache_ttl_seconds: int = 1800  # Decision cache time-to-live
    cache_max_entries: int = 128  # Decision cache capacity


DEFAULT_SETTINGS = EngineSettings()

# Environment variable -> (field name, converter)
_ENV_OVERRIDES: dict[str, tuple[str, type]] = {
    "AURORA_REFERENCE_CITY": ("reference_city", str),
    "AURORA_TIMEZONE": ("timezone", str),
    "AURORA_CACHE_TTL": ("cache_ttl_seconds", int),
}


def get_config_path() -> Path:
    """Get path to the settings file."""
    # Store in user's home directory
    config_dir = Path.home() / ".config" / "aurora-decision"
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir / "settings.json"


def _validate(settings: EngineSettings) -> EngineSettings:
    for name in EngineSettings.__dataclass_fields__:
        value = getattr(settings, name)
        expected = type(getattr(DEFAULT_SETTINGS, name))
        allowed = (int, float) if expected is float else expected
        if isinstance(value, bool) or not isinstance(value, allowed):
            raise ConfigurationError(f"Invalid {name}: {value!r} (expected {expected.__name__})")
    if not -90 <= settings.reference_latitude <= 90:
        raise ConfigurationError(f"Invalid latitude: {settings.reference_latitude} (must be -90 to 90)")
    if not -180 <= settings.reference_longitude <= 180:
        raise ConfigurationError(f"Invalid longitude: {settings.reference_longitude} (must be -180 to 180)")
    if settings.cache_ttl_seconds <= 0:
        raise ConfigurationError(f"Invalid cache TTL: {settings.cache_ttl_seconds} (must be positive)")
    if settings.cache_max_entries <= 0:
        raise ConfigurationError(f"Invalid cache size: {settings.cache_max_entries} (must be positive)")
    return settings


def _apply_env_overrides(settings: EngineSettings) -> EngineSettings:
    overrides: dict[str, object] = {}
    for env_name, (field_name, converter) in _ENV_OVERRIDES.items():
        raw = os.environ.get(env_name)
        if raw is None or raw == "":
            continue
        try:
            overrides[field_name] = converter(raw)
        except ValueError as e:
            raise ConfigurationError(f"Invalid value for {env_name}: {raw!r}") from e
    if overrides:
        logger.debug(f"Applying environment overrides: {sorted(overrides)}")
        settings = replace(settings, **overrides)  # type: ignore[arg-type]
    return settings


@deal.raises(ConfigurationError)
@deal.post(lambda result: result is None, message="Save must complete")
def save_settings(settings: EngineSettings, path: Path | None = None) -> None:
    """
    Save engine settings to the config file.

    Args:
        settings: Settings to save
        path: Override for the config file location
    """
    _validate(settings)
    config_path = path or get_config_path()
    logger.info(f"Saving settings for {settings.reference_city} to {config_path}")

    with config_path.open("w", encoding="utf-8") as f:
        json.dump(asdict(settings), f, indent=2, ensure_ascii=False)


@deal.raises(ConfigurationError)
@deal.post(lambda result: result is not None, message="Settings must be returned")
def load_settings(path: Path | None = None, apply_env: bool = True) -> EngineSettings:
    """
    Load engine settings from the config file.

    Missing or corrupted files fall back to the defaults. Environment variable
    overrides are applied last.

    Args:
        path: Override for the config file location
        apply_env: Whether to apply AURORA_* environment overrides

    Returns:
        Effective settings

    Raises:
        ConfigurationError: If an environment override is invalid
    """
    config_path = path or get_config_path()
    settings = DEFAULT_SETTINGS

    if config_path.exists():
        try:
            with config_path.open("r", encoding="utf-8") as f:
                data = json.load(f)
            known = {k: v for k, v in data.items() if k in EngineSettings.__dataclass_fields__}
            settings = _validate(EngineSettings(**known))
            logger.debug(f"Loaded settings from {config_path}")
        except (json.JSONDecodeError, TypeError, AttributeError, ConfigurationError) as e:
            # If config is corrupted or invalid, use defaults
            logger.warning(f"Failed to load settings from {config_path}: {e}. Using defaults.")
            settings = DEFAULT_SETTINGS
    else:
        logger.debug(f"No saved settings found at {config_path}")

    if apply_env:
        settings = _apply_env_overrides(settings)

    return _validate(settings)
