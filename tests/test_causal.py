"""Tests for causal chain tracing."""

from __future__ import annotations

import pytest

from chronos.context.causal import trace_causal_chain
from chronos.graph.index import RelationshipIndex


class TestTraceCausalChain:
    def test_depth_zero_only_anchor(self, story):
        assert trace_causal_chain("E0", story["relationships"], 0) == {"E0": 0}

    def test_depth_two(self, story):
        depth_map = trace_causal_chain("E0", story["relationships"], 2)
        assert depth_map == {"E0": 0, "E1": 1, "E2": 2}

    def test_depth_three_reaches_reverse_edge(self, story):
        # E3 --triggers--> E2 is followed backwards from E2
        depth_map = trace_causal_chain("E0", story["relationships"], 3)
        assert depth_map == {"E0": 0, "E1": 1, "E2": 2, "E3": 3}

    def test_ignores_non_causal_edges(self, story):
        depth_map = trace_causal_chain("E0", story["relationships"], 5)
        assert "C1" not in depth_map
        assert "T1" not in depth_map

    @pytest.mark.parametrize("max_depth", [0, 1, 2, 3, 4])
    def test_depth_bound(self, make_rel, max_depth):
        chain = [make_rel(f"N{i}", f"N{i + 1}", "causes") for i in range(10)]
        depth_map = trace_causal_chain("N0", chain, max_depth)
        assert max(depth_map.values()) == max_depth
        assert len(depth_map) == max_depth + 1

    def test_shorter_path_wins(self, make_rel):
        # Long way: A -> B -> C -> D ; short way: A -> D
        rels = [
            make_rel("A", "B", "causes"),
            make_rel("B", "C", "leads_to"),
            make_rel("C", "D", "triggers"),
            make_rel("D", "A", "triggered_by"),
        ]
        depth_map = trace_causal_chain("A", rels, 3)
        assert depth_map["D"] == 1
        assert depth_map["C"] == 2

    def test_shorter_path_wins_regardless_of_edge_order(self, make_rel):
        rels = [
            make_rel("A", "B", "causes"),
            make_rel("B", "C", "causes"),
            make_rel("C", "D", "causes"),
            make_rel("A", "D", "causes"),
        ]
        forward = trace_causal_chain("A", rels, 3)
        backward = trace_causal_chain("A", list(reversed(rels)), 3)
        assert forward == backward
        assert forward["D"] == 1

    def test_anchor_without_relationships(self, make_rel):
        assert trace_causal_chain("lonely", [make_rel("A", "B", "causes")], 3) == {"lonely": 0}

    def test_cycle_terminates(self, make_rel):
        rels = [
            make_rel("A", "B", "causes"),
            make_rel("B", "C", "causes"),
            make_rel("C", "A", "causes"),
        ]
        assert trace_causal_chain("A", rels, 10) == {"A": 0, "B": 1, "C": 1}

    def test_accepts_prebuilt_index(self, story):
        index = RelationshipIndex(story["relationships"])
        assert trace_causal_chain("E0", index, 2) == trace_causal_chain(
            "E0", story["relationships"], 2
        )

    def test_repeatable(self, story):
        first = trace_causal_chain("E0", story["relationships"], 3)
        second = trace_causal_chain("E0", story["relationships"], 3)
        assert first == second
        assert list(first) == list(second)
