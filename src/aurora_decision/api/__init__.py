"""
Aurora Decision API - Business Logic Layer

This package contains the decision engine and its supporting calculators,
separated from CLI presentation concerns.

The API is organized into logical subpackages:
- core: Constants, enums, exceptions, models, configuration
- decision: Darkness, scoring, limiting factor, global state, UI directives,
  explanation text and the orchestrator
- calculations: Sun elevation, visibility probability and master status
"""

# Activate deal contracts for runtime validation
import deal


deal.activate()

__all__ = [
    # Package is organized into subpackages - import directly from them:
    # from aurora_decision.api.decision.engine import ...
    # from aurora_decision.api.calculations.probability import ...
    # etc.
]
