"""Console output — TTY summaries with Rich tables."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from netexplorer.model import CycleResult, GraphStats, PathResult


def render_users(users: list[str], console: Console | None = None) -> None:
    console = console or Console()
    for user in users:
        console.print(user)
    console.print(f"\n{len(users)} user(s)")


def render_path(result: PathResult, show_steps: bool = False, console: Console | None = None) -> None:
    """Print the path (or the lack of one) and optionally the BFS levels."""
    console = console or Console()

    if show_steps:
        table = Table(title=f"BFS {result.source} -> {result.target}")
        table.add_column("Level", justify="right")
        table.add_column("Exploring")
        table.add_column("Queue", justify="right")
        table.add_column("Visited", justify="right")
        table.add_column("Found")
        for step in result.steps:
            exploring = step.current if step.found else ", ".join(step.exploring)
            table.add_row(
                str(step.level),
                exploring or "-",
                str(len(step.queue)),
                str(len(step.visited)),
                "yes" if step.found else "",
            )
        console.print(table)

    if result.found:
        console.print(f"[bold]Path:[/bold] {' -> '.join(result.path)}")
        console.print(f"Degrees of separation: {result.length}")
    else:
        console.print(f"[yellow]No path between {result.source} and {result.target}[/yellow]")
    console.print(result.message)


def render_cycles(result: CycleResult, show_steps: bool = False, console: Console | None = None) -> None:
    console = console or Console()

    if show_steps:
        table = Table(title="DFS trace")
        table.add_column("#", justify="right")
        table.add_column("Action", style="bold")
        table.add_column("Node")
        table.add_column("Stack")
        for i, step in enumerate(result.steps, 1):
            table.add_row(str(i), step.action.value, step.node, " > ".join(step.stack))
        console.print(table)

    if result.cycles:
        console.print("[bold]Friend loops:[/bold]")
        for i, cycle in enumerate(result.cycles, 1):
            console.print(f"  {i}. ({len(cycle) - 1} people) {' -> '.join(cycle)}")
    console.print(result.message)
    if result.quota_reached:
        console.print(
            f"[dim]Search stopped after {result.quota} loop(s); "
            "this is not a complete list.[/dim]"
        )


def render_stats(stats: GraphStats, console: Console | None = None) -> None:
    console = console or Console()

    table = Table(title="Network Statistics")
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Users", str(stats.total_users))
    table.add_row("Connections", str(stats.total_connections))
    table.add_row("Average connections", f"{stats.average_connections:.2f}")
    if stats.most_connected is not None:
        table.add_row(
            "Most connected",
            f"{stats.most_connected.user} ({stats.most_connected.connections})",
        )
    if stats.least_connected is not None:
        table.add_row(
            "Least connected",
            f"{stats.least_connected.user} ({stats.least_connected.connections})",
        )
    console.print(table)

    if stats.connection_distribution:
        dist = Table(title="Connection Distribution")
        dist.add_column("Connections", justify="right")
        dist.add_column("Users", justify="right")
        for degree, count in stats.connection_distribution.items():
            dist.add_row(str(degree), str(count))
        console.print(dist)
