"""Smart context selection.

Given an anchor event, the full entity/relationship graph and a token
budget, decide which entities go into the generator's background context:

  1. Trace the causal chain from the anchor (BFS, bounded depth)
  2. Collect the mandatory tiers (anchor, direct neighbours, causal chain)
  3. Score everything else and keep the top optional candidates
  4. Walk the collection in order, accepting candidates within budget

The result is a pure function of the inputs; nothing is cached between
calls.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from chronos.config import ContextSettings
from chronos.context.budget import allocate
from chronos.context.causal import trace_causal_chain
from chronos.context.models import ContextReport
from chronos.context.selector import select_candidates
from chronos.exceptions import EntityNotFoundError
from chronos.graph.index import RelationshipIndex
from chronos.graph.models import Entity, Relationship
from chronos.graph.store import GraphSnapshot

logger = logging.getLogger("chronos.context")


def build_smart_context(
    anchor: Entity,
    entities: Sequence[Entity],
    relationships: RelationshipIndex | Iterable[Relationship],
    settings: ContextSettings | None = None,
) -> ContextReport:
    """Select the context entities for `anchor` within the token budget.

    Args:
        anchor: The focal event.
        entities: The full entity collection; its order drives allocation.
        relationships: All relationships (or a prebuilt index over them).
        settings: Depth, concept filter and budget. Defaults apply if omitted.

    Returns:
        A ContextReport partitioning `entities` into included and excluded.
    """
    settings = settings or ContextSettings()
    index = RelationshipIndex.of(relationships)

    depth_map = trace_causal_chain(anchor.id, index, settings.causal_chain_depth)
    candidates = select_candidates(anchor, entities, index, depth_map, settings)
    report = allocate(entities, candidates.ids, settings.max_tokens)

    included_ids = {e.id for e in report.included_entities}
    reasons = {
        entity_id: reason
        for entity_id, reason in candidates.reasons.items()
        if entity_id in included_ids
    }

    logger.debug(
        "Context for %s: %d included, %d excluded, ~%d/%d tokens",
        anchor.id,
        len(report.included_entities),
        len(report.excluded_entities),
        report.estimated_tokens,
        settings.max_tokens,
    )
    if anchor.id not in included_ids:
        logger.debug("Anchor %s did not fit the token budget", anchor.id)

    return report.model_copy(update={"anchor_id": anchor.id, "inclusion_reasons": reasons})


class ContextBuilder:
    """Builds smart context reports over one graph snapshot.

    Usage:
        builder = ContextBuilder(entities, relationships, settings)
        report = builder.build("event-42")
        payload = report.render()
    """

    def __init__(
        self,
        entities: Sequence[Entity],
        relationships: Iterable[Relationship],
        settings: ContextSettings | None = None,
    ) -> None:
        self.entities = list(entities)
        self.settings = settings or ContextSettings()
        self.index = RelationshipIndex(relationships)
        self._by_id = {e.id: e for e in self.entities}

    @classmethod
    def from_snapshot(
        cls, snapshot: GraphSnapshot, settings: ContextSettings | None = None
    ) -> ContextBuilder:
        return cls(snapshot.entities, snapshot.relationships, settings)

    def build(
        self, anchor: Entity | str, settings: ContextSettings | None = None
    ) -> ContextReport:
        """Build the report for an anchor entity (or its id)."""
        if isinstance(anchor, str):
            if anchor not in self._by_id:
                raise EntityNotFoundError(anchor)
            anchor = self._by_id[anchor]
        return build_smart_context(anchor, self.entities, self.index, settings or self.settings)
