"""Canonical model — traversal steps, results, statistics, config."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field

DEFAULT_CYCLE_QUOTA = 5

# Bundled sample network, used when no config supplies one.
DEFAULT_NETWORK: dict[str, tuple[str, ...]] = {
    "Alice": ("Bob", "Charlie", "Diana"),
    "Bob": ("Alice", "David", "Charlie", "Eve"),
    "Charlie": ("Alice", "Bob", "Elon", "Frank", "Grace"),
    "David": ("Bob", "Eve", "Henry"),
    "Elon": ("Charlie", "Frank", "Isabella"),
    "Eve": ("Bob", "David", "Henry", "Jack"),
    "Frank": ("Charlie", "Elon", "Grace", "Isabella", "Karen"),
    "Grace": ("Charlie", "Frank", "Karen", "Luna"),
    "Henry": ("David", "Eve", "Jack", "Mike"),
    "Isabella": ("Elon", "Frank", "Karen", "Nina"),
    "Jack": ("Eve", "Henry", "Mike", "Oliver"),
    "Karen": ("Frank", "Grace", "Isabella", "Luna", "Nina"),
    "Luna": ("Grace", "Karen", "Mike", "Nina"),
    "Mike": ("Henry", "Jack", "Luna", "Oliver"),
    "Nina": ("Isabella", "Karen", "Luna", "Oliver"),
    "Oliver": ("Jack", "Mike", "Nina"),
    "Diana": ("Alice",),
}


class DfsAction(StrEnum):
    VISIT = "visit"
    CYCLE_FOUND = "cycle_found"
    BACKTRACK = "backtrack"


class BfsStep(BaseModel):
    """One BFS level (or the terminal match) as seen by the renderer."""

    level: int = Field(ge=0)
    queue: list[list[str]] = Field(default_factory=list)
    visited: list[str] = Field(default_factory=list)
    current: str | None = None
    exploring: list[str] = Field(default_factory=list)
    path: list[str] | None = None
    found: bool = False
    message: str = ""


class DfsStep(BaseModel):
    action: DfsAction
    node: str
    path: list[str] = Field(default_factory=list)
    visited: list[str] = Field(default_factory=list)
    stack: list[str] = Field(default_factory=list)
    cycle: list[str] | None = None
    message: str = ""


class PathResult(BaseModel):
    source: str
    target: str
    path: list[str] = Field(default_factory=list)
    length: int | None = None  # edge count; None when no path exists
    steps: list[BfsStep] = Field(default_factory=list)
    message: str = ""

    @property
    def found(self) -> bool:
        return bool(self.path)


class CycleResult(BaseModel):
    """Cycles found by a bounded DFS search.

    Not an exhaustive enumeration: the search stops at the first ``quota``
    distinct cycles in DFS discovery order.
    """

    quota: int
    cycles: list[list[str]] = Field(default_factory=list)
    count: int = 0
    quota_reached: bool = False
    steps: list[DfsStep] = Field(default_factory=list)
    message: str = ""


class NodeView(BaseModel):
    id: str
    connections: int
    neighbors: list[str]


class EdgeView(BaseModel):
    from_id: str
    to_id: str


class DegreeSummary(BaseModel):
    user: str
    connections: int


class GraphStats(BaseModel):
    total_users: int
    total_connections: int
    average_connections: float
    most_connected: DegreeSummary | None = None
    least_connected: DegreeSummary | None = None
    connection_distribution: dict[int, int] = Field(default_factory=dict)


class GraphView(BaseModel):
    """Assembled graph payload for the front end: adjacency, nodes, edges, stats."""

    graph: dict[str, list[str]]
    nodes: list[NodeView]
    edges: list[EdgeView]
    stats: GraphStats


class PathQuery(BaseModel):
    """Body of a shortest-path request. ``from`` is a keyword, hence the alias."""

    source: str = Field(alias="from", min_length=1)
    target: str = Field(alias="to", min_length=1)


class CycleConfig(BaseModel):
    default_quota: int = Field(default=DEFAULT_CYCLE_QUOTA, ge=1)


class ServerConfig(BaseModel):
    host: str = "127.0.0.1"
    port: int = Field(default=3001, ge=1, le=65535)


class NetworkExplorerConfig(BaseModel):
    network: dict[str, list[str]] = Field(
        default_factory=lambda: {user: list(friends) for user, friends in DEFAULT_NETWORK.items()}
    )
    cycles: CycleConfig = Field(default_factory=CycleConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
