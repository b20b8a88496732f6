"""Tests for traversal.find_cycles()."""

from __future__ import annotations

import pytest

from netexplorer.graph import Graph, build_graph
from netexplorer.model import CycleResult, DfsAction
from netexplorer.traversal import find_cycles


def _assert_simple_cycle(graph: Graph, cycle: list[str]) -> None:
    assert cycle[0] == cycle[-1]
    inner = cycle[:-1]
    assert len(inner) >= 3
    assert len(set(inner)) == len(inner)
    for a, b in zip(cycle, cycle[1:]):
        assert b in graph.neighbors(a), f"{a} -> {b} is not an edge"


def _assert_balanced(result: CycleResult) -> None:
    visits = [s.node for s in result.steps if s.action == DfsAction.VISIT]
    backtracks = [s.node for s in result.steps if s.action == DfsAction.BACKTRACK]
    assert sorted(visits) == sorted(backtracks)


class TestTriangle:
    def test_single_cycle(self, triangle_graph: Graph) -> None:
        result = find_cycles(triangle_graph, 5)
        assert result.count == 1
        assert len(result.cycles) == 1
        assert set(result.cycles[0]) == {"A", "B", "C"}
        assert result.cycles[0] == ["A", "B", "C", "A"]
        assert result.quota_reached is False

    def test_first_root_trace(self, triangle_graph: Graph) -> None:
        result = find_cycles(triangle_graph, 5)
        first_root = [(s.action, s.node) for s in result.steps[:7]]
        assert first_root == [
            (DfsAction.VISIT, "A"),
            (DfsAction.VISIT, "B"),
            (DfsAction.VISIT, "C"),
            (DfsAction.CYCLE_FOUND, "C"),
            (DfsAction.BACKTRACK, "C"),
            (DfsAction.BACKTRACK, "B"),
            (DfsAction.BACKTRACK, "A"),
        ]

    def test_cycle_found_step(self, triangle_graph: Graph) -> None:
        result = find_cycles(triangle_graph, 5)
        found = [s for s in result.steps if s.action == DfsAction.CYCLE_FOUND]
        assert len(found) == 1
        assert found[0].cycle == ["A", "B", "C", "A"]
        assert found[0].path == ["A", "B", "C"]
        assert found[0].stack == ["A", "B", "C"]

    def test_every_root_explored(self, triangle_graph: Graph) -> None:
        result = find_cycles(triangle_graph, 5)
        roots = [s.node for s in result.steps if s.action == DfsAction.VISIT and len(s.path) == 1]
        assert roots == ["A", "B", "C"]

    def test_stack_snapshots(self, triangle_graph: Graph) -> None:
        result = find_cycles(triangle_graph, 5)
        assert result.steps[0].stack == ["A"]
        assert result.steps[2].stack == ["A", "B", "C"]
        assert result.steps[6].stack == []
        assert result.steps[6].visited == ["A", "B", "C"]


class TestQuota:
    def test_quota_one_stops_immediately(self, triangle_graph: Graph) -> None:
        result = find_cycles(triangle_graph, 1)
        assert result.count == 1
        assert result.quota_reached is True
        assert len(result.steps) == 7
        _assert_balanced(result)
        assert "more may exist" in result.message

    def test_quota_interrupts_neighbor_iteration(self, squares_graph: Graph) -> None:
        result = find_cycles(squares_graph, 2)
        assert result.cycles == [
            ["A", "B", "C", "D", "A"],
            ["B", "C", "F", "E", "B"],
        ]
        assert result.quota_reached is True
        # Everything after the second loop is unwinding.
        last_found = max(
            i for i, s in enumerate(result.steps) if s.action == DfsAction.CYCLE_FOUND
        )
        tail = result.steps[last_found + 1:]
        assert all(s.action == DfsAction.BACKTRACK for s in tail)
        assert [s.node for s in tail] == ["E", "F", "C", "B", "A"]

    def test_never_exceeds_quota(self, social_graph: Graph) -> None:
        for quota in (1, 2, 3, 5, 8):
            result = find_cycles(social_graph, quota)
            assert result.count <= quota
            assert result.count == len(result.cycles)

    def test_default_network_fills_quota(self, social_graph: Graph) -> None:
        result = find_cycles(social_graph)
        assert result.quota == 5
        assert result.count == 5
        assert result.quota_reached is True

    @pytest.mark.parametrize("quota", [0, -1])
    def test_non_positive_quota_rejected(self, triangle_graph: Graph, quota: int) -> None:
        with pytest.raises(ValueError, match="positive integer"):
            find_cycles(triangle_graph, quota)

    def test_bool_quota_rejected(self, triangle_graph: Graph) -> None:
        with pytest.raises(ValueError):
            find_cycles(triangle_graph, True)


class TestCycleShape:
    def test_cycles_are_simple_and_follow_edges(self, social_graph: Graph) -> None:
        result = find_cycles(social_graph, 20)
        assert result.cycles
        for cycle in result.cycles:
            _assert_simple_cycle(social_graph, cycle)

    def test_vertex_sets_distinct(self, social_graph: Graph) -> None:
        result = find_cycles(social_graph, 20)
        keys = [frozenset(c[:-1]) for c in result.cycles]
        assert len(keys) == len(set(keys))

    def test_squares_cycles(self, squares_graph: Graph) -> None:
        result = find_cycles(squares_graph, 10)
        keys = {frozenset(c[:-1]) for c in result.cycles}
        assert frozenset("ABCD") in keys
        assert frozenset("BCEF") in keys
        assert frozenset("ABCDEF") in keys
        for cycle in result.cycles:
            _assert_simple_cycle(squares_graph, cycle)

    def test_trace_balanced(self, social_graph: Graph) -> None:
        _assert_balanced(find_cycles(social_graph, 5))


class TestNoCycles:
    def test_tree(self) -> None:
        graph = build_graph({"A": ["B", "C"], "B": ["A"], "C": ["A", "D"], "D": ["C"]})
        result = find_cycles(graph, 5)
        assert result.cycles == []
        assert result.count == 0
        assert result.quota_reached is False
        assert "No friend loops" in result.message
        _assert_balanced(result)

    def test_self_loop_ignored(self) -> None:
        graph = build_graph({"A": ["A", "B"], "B": ["A"]})
        assert find_cycles(graph, 5).cycles == []

    def test_empty_graph(self) -> None:
        result = find_cycles(build_graph({}), 5)
        assert result.cycles == []
        assert result.steps == []

    def test_disconnected_pairs(self, disconnected_graph: Graph) -> None:
        result = find_cycles(disconnected_graph, 5)
        assert result.cycles == []
        roots = [s.node for s in result.steps if s.action == DfsAction.VISIT and len(s.path) == 1]
        assert roots == ["A", "B", "C", "D"]
