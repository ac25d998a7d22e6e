"""Decision subpackage: per-window scoring through to the final decision."""

from aurora_decision.api.decision.engine import compute_decision


__all__ = [
    "compute_decision",
]
