"""Graph store — immutable adjacency lists loaded once at startup."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType

from netexplorer.logger import logger


class NetworkError(Exception):
    """Base class for graph store errors."""


class GraphConfigError(NetworkError):
    """Raised when the configured adjacency is malformed."""


class UnknownNodeError(NetworkError, KeyError):
    """Raised when a query names a node that is not in the graph."""

    def __init__(self, node: str) -> None:
        super().__init__(node)
        self.node = node

    def __str__(self) -> str:
        return f"User '{self.node}' not found in the network"


@dataclass(frozen=True)
class Graph:
    """Read-only adjacency store.

    Neighbor order is kept exactly as declared; traversal tie-breaks depend
    on it. Edges are undirected in meaning but nothing here assumes the
    adjacency lists mirror each other.
    """

    adjacency: Mapping[str, tuple[str, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def neighbors(self, node: str) -> tuple[str, ...]:
        return self.adjacency.get(node, ())

    def exists(self, node: str) -> bool:
        return node in self.adjacency

    def all_nodes(self) -> tuple[str, ...]:
        """Node identifiers in load order."""
        return tuple(self.adjacency)

    def require(self, node: str) -> None:
        if node not in self.adjacency:
            raise UnknownNodeError(node)

    def degree(self, node: str) -> int:
        return len(self.neighbors(node))

    def as_dict(self) -> dict[str, list[str]]:
        return {node: list(friends) for node, friends in self.adjacency.items()}

    def __len__(self) -> int:
        return len(self.adjacency)

    def __iter__(self) -> Iterator[str]:
        return iter(self.adjacency)


def build_graph(adjacency: Mapping[str, Sequence[str]]) -> Graph:
    """Validate and freeze an adjacency mapping.

    Every neighbor must itself be a node. A dangling reference is a
    configuration error and is reported here, never at query time.
    """
    frozen: dict[str, tuple[str, ...]] = {}
    for node, friends in adjacency.items():
        _check_identifier(node)
        if isinstance(friends, str) or not isinstance(friends, Sequence):
            raise GraphConfigError(
                f"Neighbors of '{node}' must be a list, got {type(friends).__name__}"
            )
        for friend in friends:
            _check_identifier(friend)
        frozen[node] = tuple(friends)

    dangling = sorted(
        {friend for friends in frozen.values() for friend in friends} - frozen.keys()
    )
    if dangling:
        raise GraphConfigError(
            "Adjacency references unknown node(s): " + ", ".join(dangling)
        )

    logger.debug(
        "Graph loaded: %d nodes, %d adjacency entries",
        len(frozen),
        sum(len(friends) for friends in frozen.values()),
    )
    return Graph(adjacency=MappingProxyType(frozen))


def _check_identifier(value: object) -> None:
    if not isinstance(value, str) or not value:
        raise GraphConfigError(f"Node identifiers must be non-empty strings, got {value!r}")
