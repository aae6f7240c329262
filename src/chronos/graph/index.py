"""Adjacency lookups over the relationship list.

Relationships are directed in storage but treated as undirected here: an
entity is adjacent to the other endpoint of every relationship touching it.
"""

from __future__ import annotations

from collections.abc import Collection, Iterable

import networkx as nx

from chronos.graph.models import Relationship


def neighbors(
    entity_id: str,
    relationships: Iterable[Relationship],
    kinds: Collection[str] | None = None,
) -> set[str]:
    """Ids on the other side of every relationship touching `entity_id`.

    When `kinds` is given, only relationships whose type is in it count.
    """
    result: set[str] = set()
    for rel in relationships:
        if kinds is not None and rel.relationship_type not in kinds:
            continue
        other = rel.other_side(entity_id)
        if other is not None:
            result.add(other)
    return result


class RelationshipIndex:
    """Per-invocation adjacency index over a relationship list.

    Builds an undirected multigraph once so repeated lookups don't rescan the
    whole list. Answers are identical to `neighbors()`.
    """

    def __init__(self, relationships: Iterable[Relationship]) -> None:
        self.graph = nx.MultiGraph()
        for rel in relationships:
            self.graph.add_edge(
                rel.from_entity_id, rel.to_entity_id, kind=rel.relationship_type
            )

    @classmethod
    def of(
        cls, relationships: RelationshipIndex | Iterable[Relationship]
    ) -> RelationshipIndex:
        """Reuse an existing index or build one from a relationship list."""
        if isinstance(relationships, RelationshipIndex):
            return relationships
        return cls(relationships)

    def neighbors(
        self, entity_id: str, kinds: Collection[str] | None = None
    ) -> set[str]:
        """Adjacent ids, optionally restricted to relationship kinds."""
        if not self.graph.has_node(entity_id):
            return set()
        if kinds is None:
            return set(self.graph.adj[entity_id])
        return {
            other
            for other, edges in self.graph.adj[entity_id].items()
            if any(data.get("kind") in kinds for data in edges.values())
        }

    def are_connected(self, a: str, b: str) -> bool:
        """Whether any relationship links `a` and `b` (either direction)."""
        return self.graph.has_edge(a, b)

    def share_neighbor(self, a: str, b: str) -> bool:
        """Whether `a` and `b` each have a relationship to a common id."""
        return not self.neighbors(a).isdisjoint(self.neighbors(b))

