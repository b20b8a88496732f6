"""Tests for the Markdown renderers."""

from __future__ import annotations

from pathlib import Path

from netexplorer.graph import Graph, build_graph
from netexplorer.outputs.output_markdown import render_cycles_markdown, render_path_markdown
from netexplorer.traversal import find_cycles, shortest_path

RUN_META = {"timestamp_utc": "2026-01-01T00:00:00Z", "command": "test", "config_path": ""}


class TestMermaidLabels:
    def test_quote_in_name_is_escaped(self, tmp_path: Path) -> None:
        graph = build_graph({'Ann "Jo"': ["Bob"], "Bob": ['Ann "Jo"']})
        result = shortest_path(graph, 'Ann "Jo"', "Bob")
        text = render_path_markdown(result, tmp_path, RUN_META).read_text(encoding="utf-8")
        assert 'Ann__Jo_["Ann #quot;Jo#quot;"] --- Bob["Bob"]' in text
        assert '["Ann "Jo""]' not in text

    def test_no_mermaid(self, tmp_path: Path) -> None:
        graph = build_graph({"A": ["B"], "B": ["A"]})
        result = shortest_path(graph, "A", "B")
        text = render_path_markdown(
            result, tmp_path, RUN_META, include_mermaid=False
        ).read_text(encoding="utf-8")
        assert "```mermaid" not in text
        assert "## BFS Trace" in text


class TestCyclesReport:
    def test_trace_and_quota_note(self, tmp_path: Path, triangle_graph: Graph) -> None:
        result = find_cycles(triangle_graph, 1)
        out = render_cycles_markdown(result, tmp_path, RUN_META)
        assert out.name == "cycles.md"
        text = out.read_text(encoding="utf-8")
        assert "**Loop 1** (3 people): A → B → C → A" in text
        assert "3 visit(s), 1 loop(s) found, 3 backtrack(s)" in text
        assert "Other loops may exist" in text
