"""Traced traversals — level-batched BFS shortest path and bounded DFS cycle search.

Both engines are pure functions of a read-only ``Graph``: all working state
(queue, visited set, recursion stack, trace) is local to the call, and every
emitted step holds copies of that state, never live references.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from netexplorer.logger import logger
from netexplorer.model import (
    DEFAULT_CYCLE_QUOTA,
    BfsStep,
    CycleResult,
    DfsAction,
    DfsStep,
    PathResult,
)

if TYPE_CHECKING:
    from netexplorer.graph import Graph

# A back-edge to the DFS parent (or a self-loop) closes a "loop" of one or two
# vertices; in an undirected graph that is just the edge itself.
_MIN_CYCLE_VERTICES = 3


def _arrow(nodes: list[str]) -> str:
    return " -> ".join(nodes)


# ---------------------------------------------------------------------------
# BFS
# ---------------------------------------------------------------------------

def shortest_path(graph: Graph, source: str, target: str) -> PathResult:
    """Shortest path by edge count, with one trace step per BFS level.

    The queue holds whole paths rather than bare nodes so each frontier entry
    keeps its provenance. Nodes are marked visited when dequeued, not when
    enqueued, so a node may sit in the queue more than once; the duplicate is
    skipped when it comes up. Among equal-length paths the first one dequeued
    wins, which follows declared neighbor order.

    Raises ``UnknownNodeError`` if either endpoint is not in the graph.
    """
    graph.require(source)
    graph.require(target)

    if source == target:
        step = BfsStep(
            level=0,
            queue=[[source]],
            visited=[],
            current=source,
            path=[source],
            found=True,
            message="Source and destination are the same user",
        )
        return PathResult(
            source=source,
            target=target,
            path=[source],
            length=0,
            steps=[step],
            message="Source and destination are the same user",
        )

    queue: deque[list[str]] = deque([[source]])
    visited: dict[str, None] = {}  # insertion-ordered set
    steps: list[BfsStep] = []
    level = 0

    while queue:
        exploring: list[str] = []

        # Drain exactly one level; entries appended below belong to the next.
        for _ in range(len(queue)):
            path = queue.popleft()
            current = path[-1]

            if current == target:
                steps.append(
                    BfsStep(
                        level=level,
                        queue=_snapshot_queue(queue),
                        visited=list(visited),
                        current=current,
                        path=list(path),
                        found=True,
                        message=f"Target found! Path: {_arrow(path)}",
                    )
                )
                length = len(path) - 1
                logger.debug(
                    "BFS %s -> %s: found length %d after %d level(s)",
                    source, target, length, level,
                )
                return PathResult(
                    source=source,
                    target=target,
                    path=list(path),
                    length=length,
                    steps=steps,
                    message=f"Shortest path found with {length} degree(s) of separation",
                )

            if current in visited:
                continue
            visited[current] = None
            exploring.append(current)

            for neighbor in graph.neighbors(current):
                if neighbor not in visited:
                    queue.append([*path, neighbor])

        steps.append(
            BfsStep(
                level=level,
                queue=_snapshot_queue(queue),
                visited=list(visited),
                exploring=exploring,
                found=False,
                message=(
                    f"Level {level}: Exploring {', '.join(exploring)}"
                    if exploring
                    else f"Level {level}: no unvisited nodes"
                ),
            )
        )
        level += 1

    logger.debug("BFS %s -> %s: no path, %d node(s) visited", source, target, len(visited))
    return PathResult(
        source=source,
        target=target,
        path=[],
        length=None,
        steps=steps,
        message="No path found between the specified users",
    )


def _snapshot_queue(queue: deque[list[str]]) -> list[list[str]]:
    return [list(path) for path in queue]


# ---------------------------------------------------------------------------
# DFS cycle search
# ---------------------------------------------------------------------------

@dataclass
class _Frame:
    """One level of the explicit DFS stack."""

    node: str
    path: list[str]
    neighbors: tuple[str, ...]
    cursor: int = 0


@dataclass
class _CycleSearch:
    """Accumulated state shared by every DFS root of one ``find_cycles`` call."""

    quota: int
    cycles: list[list[str]] = field(default_factory=list)
    keys: set[tuple[str, ...]] = field(default_factory=set)
    steps: list[DfsStep] = field(default_factory=list)

    @property
    def quota_reached(self) -> bool:
        return len(self.cycles) >= self.quota

    def offer(self, cycle: list[str]) -> bool:
        """Accept *cycle* unless it is degenerate, a duplicate, or over quota."""
        key = tuple(sorted(set(cycle[:-1])))
        if len(key) < _MIN_CYCLE_VERTICES or key in self.keys:
            return False
        if self.quota_reached:
            return False
        self.keys.add(key)
        self.cycles.append(cycle)
        return True


def find_cycles(graph: Graph, quota: int = DEFAULT_CYCLE_QUOTA) -> CycleResult:
    """Find up to *quota* distinct simple cycles, tracing every DFS move.

    A DFS is started from each node in load order, each with its own
    visited set and recursion stack. A neighbor that is already on the
    recursion stack closes a cycle. Cycles are identified by their vertex
    set, so rotations and reversals of an accepted cycle are dropped.

    Known limitation: this is not an enumeration of all cycles. The search
    stops as soon as *quota* cycles have been accepted, and only cycles
    closed by a back-edge in this particular DFS order are ever seen.

    Quota policy is check-before-append: once the quota is met no further
    candidate is accepted and every open DFS frame unwinds immediately,
    emitting its backtrack step.
    """
    if isinstance(quota, bool) or not isinstance(quota, int) or quota < 1:
        raise ValueError(f"quota must be a positive integer, got {quota!r}")

    search = _CycleSearch(quota=quota)
    consumed_roots: set[str] = set()

    for root in graph.all_nodes():
        if search.quota_reached:
            break
        if root in consumed_roots:
            continue
        _dfs_from(graph, root, search)
        consumed_roots.add(root)

    count = len(search.cycles)
    if count == 0:
        message = "No friend loops detected in the network"
    elif search.quota_reached:
        message = f"Found {count} friend loop(s) (stopped at quota; more may exist)"
    else:
        message = f"Found {count} friend loop(s)"

    logger.debug(
        "DFS cycle search: %d cycle(s), %d step(s), %d root(s), quota %d",
        count, len(search.steps), len(consumed_roots), quota,
    )
    return CycleResult(
        quota=quota,
        cycles=[list(c) for c in search.cycles],
        count=count,
        quota_reached=search.quota_reached,
        steps=search.steps,
        message=message,
    )


@dataclass
class _DfsWalk:
    """Per-root DFS state: visited set, recursion stack and open frames."""

    graph: Graph
    search: _CycleSearch
    visited: dict[str, None] = field(default_factory=dict)
    on_stack: dict[str, None] = field(default_factory=dict)  # root first
    frames: list[_Frame] = field(default_factory=list)

    def enter(self, node: str, path: list[str]) -> None:
        self.visited[node] = None
        self.on_stack[node] = None
        self.frames.append(
            _Frame(node=node, path=path, neighbors=self.graph.neighbors(node))
        )
        self._emit(
            DfsAction.VISIT, node, path,
            message=f"Visiting {node}, current path: {_arrow(path)}",
        )

    def leave(self) -> None:
        frame = self.frames.pop()
        del self.on_stack[frame.node]
        self._emit(
            DfsAction.BACKTRACK, frame.node, frame.path,
            message=f"Backtracking from {frame.node}",
        )

    def close_cycle(self, frame: _Frame, ancestor: str) -> None:
        start = frame.path.index(ancestor)
        cycle = [*frame.path[start:], ancestor]
        if self.search.offer(cycle):
            self._emit(
                DfsAction.CYCLE_FOUND, frame.node, frame.path,
                cycle=cycle,
                message=f"Cycle detected: {_arrow(cycle)}",
            )

    def _emit(
        self,
        action: DfsAction,
        node: str,
        path: list[str],
        message: str,
        cycle: list[str] | None = None,
    ) -> None:
        self.search.steps.append(
            DfsStep(
                action=action,
                node=node,
                path=list(path),
                visited=list(self.visited),
                stack=list(self.on_stack),
                cycle=list(cycle) if cycle is not None else None,
                message=message,
            )
        )


def _dfs_from(graph: Graph, root: str, search: _CycleSearch) -> None:
    """Run one DFS from *root*, recording steps and cycles into *search*."""
    walk = _DfsWalk(graph=graph, search=search)
    walk.enter(root, [root])

    while walk.frames:
        frame = walk.frames[-1]

        if search.quota_reached or frame.cursor >= len(frame.neighbors):
            walk.leave()
            continue

        neighbor = frame.neighbors[frame.cursor]
        frame.cursor += 1

        if neighbor not in walk.visited:
            walk.enter(neighbor, [*frame.path, neighbor])
        elif neighbor in walk.on_stack:
            walk.close_cycle(frame, neighbor)
