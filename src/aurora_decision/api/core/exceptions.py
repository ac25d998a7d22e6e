"""
Custom exception classes for the aurora decision engine.

This module defines specific exceptions for the few conditions the engine
cannot absorb on its own.
"""

from __future__ import annotations


__all__ = [
    # Base exception
    "AuroraDecisionError",
    # Configuration exceptions
    "ConfigurationError",
    # Forecast input exceptions
    "EmptyForecastError",
    "ForecastFormatError",
    "InvalidForecastError",
]


class AuroraDecisionError(Exception):
    """
    Base exception for all aurora decision errors.

    All custom exceptions in this library inherit from this base class,
    making it easy to catch all engine-related errors.
    """

    pass


# ============================================================================
# Forecast Input Exceptions
# ============================================================================


class InvalidForecastError(AuroraDecisionError):
    """
    Raised when a forecast input violates a precondition of the engine.

    Noisy values (Kp or cloud cover slightly out of range) are clamped and
    never raise this error.
    """

    pass


class EmptyForecastError(InvalidForecastError):
    """
    Raised when a forecast contains no windows.

    There is no meaningful best window over zero windows, so the engine
    fails immediately instead of returning a degraded decision.
    """

    pass


class ForecastFormatError(AuroraDecisionError):
    """
    Raised when a serialized forecast cannot be parsed.

    This can occur when:
    - The file does not exist or is not valid JSON
    - Required keys are missing
    - Timestamps or numbers cannot be parsed
    """

    pass


# ============================================================================
# Configuration Exceptions
# ============================================================================


class ConfigurationError(AuroraDecisionError):
    """Raised when engine settings are invalid."""

    pass
