"""Descriptive statistics and the node/edge view of the graph."""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

from netexplorer.model import DegreeSummary, EdgeView, GraphStats, GraphView, NodeView

if TYPE_CHECKING:
    from netexplorer.graph import Graph


def unique_edges(graph: Graph) -> list[EdgeView]:
    """Undirected edges, each unordered pair once, in first-seen order."""
    seen: set[frozenset[str]] = set()
    edges: list[EdgeView] = []
    for node in graph.all_nodes():
        for neighbor in graph.neighbors(node):
            key = frozenset((node, neighbor))
            if key not in seen:
                seen.add(key)
                edges.append(EdgeView(from_id=node, to_id=neighbor))
    return edges


def node_views(graph: Graph) -> list[NodeView]:
    return [
        NodeView(id=node, connections=graph.degree(node), neighbors=list(graph.neighbors(node)))
        for node in graph.all_nodes()
    ]


def compute_stats(graph: Graph) -> GraphStats:
    """Counts, average degree, degree extremes and degree distribution.

    Degree is the length of a node's declared adjacency list. Ties for the
    most and least connected node go to the node loaded first.
    """
    nodes = graph.all_nodes()
    total_connections = len(unique_edges(graph))
    if not nodes:
        return GraphStats(total_users=0, total_connections=0, average_connections=0.0)

    most = max(nodes, key=graph.degree)
    least = min(nodes, key=graph.degree)
    distribution = Counter(graph.degree(node) for node in nodes)

    return GraphStats(
        total_users=len(nodes),
        total_connections=total_connections,
        average_connections=round(total_connections * 2 / len(nodes), 2),
        most_connected=DegreeSummary(user=most, connections=graph.degree(most)),
        least_connected=DegreeSummary(user=least, connections=graph.degree(least)),
        connection_distribution=dict(sorted(distribution.items())),
    )


def graph_view(graph: Graph) -> GraphView:
    return GraphView(
        graph=graph.as_dict(),
        nodes=node_views(graph),
        edges=unique_edges(graph),
        stats=compute_stats(graph),
    )
