"""Narrative entity graph: models, adjacency index and snapshot store."""

from chronos.graph.index import RelationshipIndex, neighbors
from chronos.graph.models import CAUSAL_RELATIONSHIP_TYPES, Entity, Relationship
from chronos.graph.store import GraphSnapshot, load_snapshot, save_snapshot

__all__ = [
    "CAUSAL_RELATIONSHIP_TYPES",
    "Entity",
    "GraphSnapshot",
    "Relationship",
    "RelationshipIndex",
    "load_snapshot",
    "neighbors",
    "save_snapshot",
]
