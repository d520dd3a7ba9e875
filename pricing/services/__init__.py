from pricing.services.event_builder_service import (
    EventBuilderService,
    EventBuilderSession,
    MutationResult,
    SessionResult,
)
from pricing.services.pipeline import DerivedTotals, recompute

__all__ = [
    "EventBuilderService",
    "EventBuilderSession",
    "MutationResult",
    "SessionResult",
    "DerivedTotals",
    "recompute",
]
