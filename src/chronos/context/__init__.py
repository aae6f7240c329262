"""Smart context selection.

Picks the relevance-ranked, budget-bounded set of narrative entities that
serve as background context for drafting one event.

Usage:
    from chronos.context import ContextBuilder

    builder = ContextBuilder(entities, relationships)
    report = builder.build("event-42")
    print(report.render())
"""

from chronos.context.budget import allocate
from chronos.context.causal import trace_causal_chain
from chronos.context.engine import ContextBuilder, build_smart_context
from chronos.context.models import (
    ContextBreakdown,
    ContextReport,
    ExclusionReason,
    TokenEstimator,
)
from chronos.context.scoring import score_entity
from chronos.context.selector import select_candidates

__all__ = [
    "ContextBreakdown",
    "ContextBuilder",
    "ContextReport",
    "ExclusionReason",
    "TokenEstimator",
    "allocate",
    "build_smart_context",
    "score_entity",
    "select_candidates",
    "trace_causal_chain",
]
