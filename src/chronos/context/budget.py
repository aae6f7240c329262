"""Token budget allocation and report building.

Allocation walks the entity collection in its original order, not in
priority order: an earlier low-priority candidate can use up budget that a
later mandatory one needed. The anchor itself can be starved this way.
"""

from __future__ import annotations

from collections.abc import Collection, Sequence
from itertools import accumulate
from typing import NamedTuple

from chronos.config import DEFAULT_MAX_TOKENS
from chronos.context.models import (
    ContextBreakdown,
    ContextReport,
    ExclusionReason,
    TokenEstimator,
)
from chronos.graph.models import Entity


class _Step(NamedTuple):
    tokens: int  # Running total after this entity
    accepted: bool


def _allocate_one(
    prev: _Step, entity: Entity, candidate_ids: Collection[str], max_tokens: int
) -> _Step:
    if entity.id in candidate_ids:
        cost = TokenEstimator.estimate_entity(entity)
        if prev.tokens + cost <= max_tokens:
            return _Step(prev.tokens + cost, True)
    return _Step(prev.tokens, False)


def allocate(
    all_entities: Sequence[Entity],
    candidate_ids: Collection[str],
    max_tokens: int = DEFAULT_MAX_TOKENS,
) -> ContextReport:
    """Accept candidates in collection order while the running total fits the budget.

    Every entity ends up in exactly one of included/excluded.
    """
    candidate_ids = set(candidate_ids)
    steps = list(accumulate(
        all_entities,
        lambda prev, entity: _allocate_one(prev, entity, candidate_ids, max_tokens),
        initial=_Step(0, False),
    ))[1:]

    included = [e for e, step in zip(all_entities, steps) if step.accepted]
    excluded = [e for e, step in zip(all_entities, steps) if not step.accepted]
    total = steps[-1].tokens if steps else 0

    exclusion_reasons = {
        e.id: (
            ExclusionReason.OVER_BUDGET if e.id in candidate_ids
            else ExclusionReason.NOT_SELECTED
        )
        for e in excluded
    }

    return ContextReport(
        included_entities=included,
        excluded_entities=excluded,
        estimated_tokens=total,
        token_budget=max_tokens,
        breakdown=ContextBreakdown.from_entities(included),
        candidates_considered=len(candidate_ids),
        exclusion_reasons=exclusion_reasons,
    )
