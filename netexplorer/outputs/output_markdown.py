"""Markdown output — path.md and cycles.md reports."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

from netexplorer.model import CycleResult, DfsAction, PathResult


def render_path_markdown(
    result: PathResult,
    out_path: Path,
    run_meta: dict[str, str],
    include_mermaid: bool = True,
) -> Path:
    """Write path.md to *out_path* and return the written path."""
    lines: list[str] = []
    lines.append(f"# Shortest Path: {result.source} to {result.target}\n")

    _run_metadata_section(lines, run_meta)

    lines.append("## Result\n")
    if result.found:
        lines.append(f"**Path** ({result.length} hop(s)): {' → '.join(result.path)}\n")
        if include_mermaid and len(result.path) > 1:
            lines.extend(_mermaid_chain(result.path))
            lines.append("")
    else:
        lines.append("No path connects these users.\n")
    lines.append(f"{result.message}\n")

    lines.append("## BFS Trace\n")
    lines.append("| Level | Exploring | Queue | Visited | Found |")
    lines.append("|------:|-----------|------:|--------:|:-----:|")
    for step in result.steps:
        exploring = step.current if step.found else ", ".join(step.exploring)
        lines.append(
            f"| {step.level} | {exploring or '-'} | {len(step.queue)} "
            f"| {len(step.visited)} | {'✓' if step.found else ''} |"
        )
    lines.append("")

    _methodology_section(lines)
    return _write(out_path, "path.md", lines)


def render_cycles_markdown(
    result: CycleResult,
    out_path: Path,
    run_meta: dict[str, str],
    include_mermaid: bool = True,
) -> Path:
    """Write cycles.md to *out_path* and return the written path."""
    lines: list[str] = []
    lines.append("# Friend Loops\n")

    _run_metadata_section(lines, run_meta)

    lines.append("## Result\n")
    lines.append(f"{result.message}\n")
    if result.quota_reached:
        lines.append(
            f"> The search stops after {result.quota} loop(s). "
            "Other loops may exist in the network.\n"
        )

    for i, cycle in enumerate(result.cycles, 1):
        lines.append(f"**Loop {i}** ({len(cycle) - 1} people): {' → '.join(cycle)}\n")
        if include_mermaid:
            lines.extend(_mermaid_chain(cycle))
            lines.append("")

    counts = {action: 0 for action in DfsAction}
    for step in result.steps:
        counts[step.action] += 1
    lines.append("## DFS Trace\n")
    lines.append(
        f"{counts[DfsAction.VISIT]} visit(s), "
        f"{counts[DfsAction.CYCLE_FOUND]} loop(s) found, "
        f"{counts[DfsAction.BACKTRACK]} backtrack(s)\n"
    )
    lines.append("| # | Action | Node | Stack |")
    lines.append("|--:|--------|------|-------|")
    for i, step in enumerate(result.steps, 1):
        lines.append(
            f"| {i} | {step.action.value} | {step.node} | {' > '.join(step.stack)} |"
        )
    lines.append("")

    _methodology_section(lines)
    return _write(out_path, "cycles.md", lines)


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------

def _run_metadata_section(lines: list[str], run_meta: dict[str, str]) -> None:
    lines.append("## Run Metadata\n")
    lines.append(f"- Timestamp (UTC): {run_meta.get('timestamp_utc', 'unknown')}")
    lines.append(f"- Command: `{run_meta.get('command', 'unknown')}`")
    lines.append(f"- Config: `{run_meta.get('config_path') or 'built-in network'}`")
    lines.append("")


def _mermaid_chain(nodes: list[str]) -> list[str]:
    lines = ["```mermaid", "graph LR"]
    for src, dst in zip(nodes, nodes[1:]):
        lines.append(
            f"    {_mermaid_node_id(src)}{_mermaid_label(src)} --- "
            f"{_mermaid_node_id(dst)}{_mermaid_label(dst)}"
        )
    lines.append("```")
    return lines


def _mermaid_node_id(node_id: str) -> str:
    return "".join(ch if ch.isalnum() else "_" for ch in node_id)


def _mermaid_label(node_id: str) -> str:
    return '["' + node_id.replace('"', "#quot;") + '"]'


def _methodology_section(lines: list[str]) -> None:
    lines.append("## Methodology\n")
    lines.append(
        "Shortest paths come from a breadth-first search that expands one level "
        "at a time, so the first path to reach the target has the fewest hops. "
        "Friend loops come from a depth-first search started at every user; a "
        "connection back to someone still on the current search path closes a "
        "loop. Loops with the same members are reported once, and the search "
        "stops at the configured quota, so the list is a sample rather than a "
        "complete enumeration.\n"
    )


def _write(out_path: Path, filename: str, lines: list[str]) -> Path:
    from pathlib import Path as _Path

    _Path(str(out_path)).mkdir(parents=True, exist_ok=True)
    out_file = _Path(str(out_path), filename)
    out_file.write_text("\n".join(lines), encoding="utf-8")
    return out_file
