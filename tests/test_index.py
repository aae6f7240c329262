"""Tests for relationship adjacency lookups."""

from __future__ import annotations

from chronos.graph.index import RelationshipIndex, neighbors
from chronos.graph.models import CAUSAL_RELATIONSHIP_TYPES


class TestNeighbors:
    def test_both_directions(self, make_rel):
        rels = [make_rel("A", "B"), make_rel("C", "A")]
        assert neighbors("A", rels) == {"B", "C"}

    def test_untouched_id(self, make_rel):
        rels = [make_rel("A", "B")]
        assert neighbors("Z", rels) == set()

    def test_empty_list(self):
        assert neighbors("A", []) == set()

    def test_kind_filter(self, make_rel):
        rels = [
            make_rel("A", "B", "causes"),
            make_rel("A", "C", "involves"),
            make_rel("D", "A", "triggered_by"),
        ]
        assert neighbors("A", rels, CAUSAL_RELATIONSHIP_TYPES) == {"B", "D"}

    def test_duplicate_edges(self, make_rel):
        rels = [make_rel("A", "B"), make_rel("A", "B"), make_rel("B", "A")]
        assert neighbors("A", rels) == {"B"}

    def test_self_loop(self, make_rel):
        rels = [make_rel("A", "A")]
        assert neighbors("A", rels) == {"A"}


class TestRelationshipIndex:
    def test_matches_scanning_helper(self, story):
        rels = story["relationships"]
        index = RelationshipIndex(rels)
        for entity in story["entities"]:
            assert index.neighbors(entity.id) == neighbors(entity.id, rels)
            assert index.neighbors(entity.id, CAUSAL_RELATIONSHIP_TYPES) == neighbors(
                entity.id, rels, CAUSAL_RELATIONSHIP_TYPES
            )

    def test_unknown_id(self, make_rel):
        index = RelationshipIndex([make_rel("A", "B")])
        assert index.neighbors("Z") == set()
        assert index.neighbors("Z", {"causes"}) == set()

    def test_mixed_kinds_between_same_pair(self, make_rel):
        index = RelationshipIndex([
            make_rel("A", "B", "involves"),
            make_rel("B", "A", "leads_to"),
        ])
        assert index.neighbors("A", {"leads_to"}) == {"B"}
        assert index.neighbors("A", {"causes"}) == set()

    def test_are_connected(self, make_rel):
        index = RelationshipIndex([make_rel("A", "B")])
        assert index.are_connected("A", "B")
        assert index.are_connected("B", "A")
        assert not index.are_connected("A", "C")
        assert not index.are_connected("X", "Y")

    def test_share_neighbor(self, make_rel):
        index = RelationshipIndex([
            make_rel("A", "T"),
            make_rel("B", "T"),
            make_rel("C", "U"),
        ])
        assert index.share_neighbor("A", "B")
        assert not index.share_neighbor("A", "C")
        assert not index.share_neighbor("A", "missing")

    def test_of_reuses_index(self, make_rel):
        index = RelationshipIndex([make_rel("A", "B")])
        assert RelationshipIndex.of(index) is index
        built = RelationshipIndex.of([make_rel("A", "B")])
        assert isinstance(built, RelationshipIndex)
        assert built.neighbors("A") == {"B"}

    def test_does_not_mutate_input(self, make_rel):
        rels = [make_rel("A", "B"), make_rel("B", "C")]
        snapshot = [r.model_dump() for r in rels]
        RelationshipIndex(rels).neighbors("B")
        assert [r.model_dump() for r in rels] == snapshot
