"""Relevance scoring of candidate entities against the anchor.

The score is additive over independent signals; every signal is evaluated
regardless of which others fired.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from chronos.graph.index import RelationshipIndex
from chronos.graph.models import Entity, Relationship

# Signal name -> points
SIGNAL_WEIGHTS: dict[str, int] = {
    "direct": 100,
    "timeline": 50,
    "location": 40,
    "temporal": 30,
    "pov": 30,
    "causal_depth_2": 20,
    "causal_depth_3": 10,
    "theme": 10,
}

# Events closer than this in sort order count as temporally close
TEMPORAL_WINDOW = 7

# Shared-reference signals: property key -> signal name
_SHARED_PROPERTIES: tuple[tuple[str, str], ...] = (
    ("timeline_id", "timeline"),
    ("location_id", "location"),
    ("pov_character_id", "pov"),
)


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _shares_property(candidate: Entity, anchor: Entity, key: str) -> bool:
    value = candidate.prop(key)
    return bool(value) and value == anchor.prop(key)


def _temporally_close(candidate: Entity, anchor: Entity) -> bool:
    if not (candidate.is_event and anchor.is_event):
        return False
    if not (_is_number(candidate.sort_order) and _is_number(anchor.sort_order)):
        return False
    return abs(candidate.sort_order - anchor.sort_order) < TEMPORAL_WINDOW


def score_signals(
    candidate: Entity,
    anchor: Entity,
    relationships: RelationshipIndex | Iterable[Relationship],
    depth_map: Mapping[str, int],
) -> list[tuple[str, int]]:
    """List the signals that fire for `candidate`, with their points."""
    index = RelationshipIndex.of(relationships)
    fired: list[str] = []

    if index.are_connected(candidate.id, anchor.id):
        fired.append("direct")

    for key, signal in _SHARED_PROPERTIES:
        if _shares_property(candidate, anchor, key):
            fired.append(signal)

    if _temporally_close(candidate, anchor):
        fired.append("temporal")

    # Depth 1 is already covered by "direct"; beyond 3 earns nothing
    depth = depth_map.get(candidate.id)
    if depth == 2:
        fired.append("causal_depth_2")
    elif depth == 3:
        fired.append("causal_depth_3")

    if index.share_neighbor(candidate.id, anchor.id):
        fired.append("theme")

    return [(signal, SIGNAL_WEIGHTS[signal]) for signal in fired]


def score_entity(
    candidate: Entity,
    anchor: Entity,
    relationships: RelationshipIndex | Iterable[Relationship],
    depth_map: Mapping[str, int],
) -> int:
    """Relevance score of `candidate` relative to `anchor` (never negative)."""
    return sum(points for _, points in score_signals(candidate, anchor, relationships, depth_map))
