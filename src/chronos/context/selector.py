"""Tiered candidate selection.

Mandatory tiers bypass scoring entirely:
  Tier 0: the anchor
  Tier 1: entities with any relationship to the anchor
  Tier 2: the causal chain, up to the configured depth

Every other entity competes for a fixed number of optional slots by
relevance score.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence

from chronos.config import ContextSettings
from chronos.context.models import CandidateSet, ScoredEntity
from chronos.context.scoring import score_signals
from chronos.graph.index import RelationshipIndex
from chronos.graph.models import SCIENTIFIC_CONCEPT, Entity, Relationship

logger = logging.getLogger("chronos.context")

# Optional candidates must score strictly above this
MIN_OPTIONAL_SCORE = 50
MAX_OPTIONAL = 20


def is_scientific_concept(entity: Entity) -> bool:
    return entity.entity_type == "note" and entity.prop("note_type") == SCIENTIFIC_CONCEPT


def mandatory_tiers(
    anchor: Entity,
    index: RelationshipIndex,
    depth_map: Mapping[str, int],
    causal_chain_depth: int,
) -> dict[str, str]:
    """Ids that are always candidates, mapped to the tier that put them there."""
    mandatory: dict[str, str] = {anchor.id: "anchor"}

    for entity_id in sorted(index.neighbors(anchor.id)):
        mandatory.setdefault(entity_id, "direct relationship")

    for entity_id, depth in depth_map.items():
        if depth <= causal_chain_depth:
            mandatory.setdefault(entity_id, f"causal chain (depth {depth})")

    return mandatory


def rank_optional(
    anchor: Entity,
    entities: Sequence[Entity],
    index: RelationshipIndex,
    depth_map: Mapping[str, int],
    exclude_ids: Iterable[str],
    include_scientific_concepts: bool = True,
) -> list[ScoredEntity]:
    """Score the remaining entities and keep the best above the threshold.

    Ties keep their original collection order (sort is stable).
    """
    skip = set(exclude_ids) | {anchor.id}
    pool = [e for e in entities if e.id not in skip]
    if not include_scientific_concepts:
        pool = [e for e in pool if not is_scientific_concept(e)]

    survivors: list[ScoredEntity] = []
    for entity in pool:
        signals = score_signals(entity, anchor, index, depth_map)
        score = sum(points for _, points in signals)
        if score > MIN_OPTIONAL_SCORE:
            survivors.append(ScoredEntity(entity=entity, score=score, signals=signals))

    survivors.sort(key=lambda s: s.score, reverse=True)
    return survivors[:MAX_OPTIONAL]


def select_candidates(
    anchor: Entity,
    entities: Sequence[Entity],
    relationships: RelationshipIndex | Iterable[Relationship],
    depth_map: Mapping[str, int],
    settings: ContextSettings | None = None,
) -> CandidateSet:
    """Merge the mandatory tiers with the top-scoring optional entities."""
    settings = settings or ContextSettings()
    index = RelationshipIndex.of(relationships)

    mandatory = mandatory_tiers(anchor, index, depth_map, settings.causal_chain_depth)
    optional = rank_optional(
        anchor,
        entities,
        index,
        depth_map,
        exclude_ids=mandatory,
        include_scientific_concepts=settings.include_scientific_concepts,
    )

    logger.debug(
        "Selected %d mandatory and %d optional candidates for %s",
        len(mandatory), len(optional), anchor.id,
    )
    return CandidateSet(mandatory=mandatory, optional=optional)
