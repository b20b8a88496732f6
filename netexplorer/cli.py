"""CLI entry point — query the network from the terminal or serve it over HTTP."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Annotated

import typer
from pydantic import BaseModel

from netexplorer.config import load_config, load_graph
from netexplorer.graph import Graph, NetworkError
from netexplorer.outputs.output_console import (
    render_cycles,
    render_path,
    render_stats,
    render_users,
)
from netexplorer.outputs.output_json import render_json
from netexplorer.outputs.output_markdown import render_cycles_markdown, render_path_markdown
from netexplorer.outputs.output_run_metadata import build_run_metadata, write_run_metadata
from netexplorer.stats import compute_stats
from netexplorer.traversal import find_cycles, shortest_path

app = typer.Typer(no_args_is_help=True)

ConfigOption = Annotated[
    Path | None, typer.Option("--config", help="Path to netexplorer.yml")
]
VerboseOption = Annotated[bool, typer.Option("--verbose", help="Enable verbose logging")]
OutOption = Annotated[
    Path | None, typer.Option("--out", help="Write JSON and Markdown results to this directory")
]
StepsOption = Annotated[bool, typer.Option("--steps", help="Print the step-by-step trace")]
NoMermaidOption = Annotated[
    bool, typer.Option("--no-mermaid", help="Suppress Mermaid diagrams in Markdown output")
]


@app.callback(invoke_without_command=True)
def _callback() -> None:
    """Social Network Explorer: traced shortest paths and friend loops."""


def _setup(config_path: Path | None, verbose: bool) -> tuple[Graph, int]:
    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    try:
        cfg = load_config(config_path)
        graph = load_graph(cfg)
    except NetworkError as e:
        typer.echo(f"Error: invalid network configuration: {e}", err=True)
        raise SystemExit(2)  # noqa: B904
    return graph, cfg.cycles.default_quota


def _write_outputs(
    result: BaseModel,
    name: str,
    out: Path,
    command: str,
    config_path: Path | None,
    render_md: Callable[[BaseModel, Path, dict[str, str]], Path],
) -> None:
    run_meta = build_run_metadata(command, config_path, out)
    json_path = render_json(result, out, name)
    typer.echo(f"Wrote result (JSON): {json_path.resolve()}")
    md_path = render_md(result, out, run_meta)
    typer.echo(f"Wrote report (MD): {md_path.resolve()}")
    meta_path = write_run_metadata(run_meta, out)
    typer.echo(f"Wrote run metadata (JSON): {meta_path.resolve()}")


@app.command()
def users(config_path: ConfigOption = None, verbose: VerboseOption = False) -> None:
    """List every user in the network."""
    graph, _ = _setup(config_path, verbose)
    render_users(list(graph.all_nodes()))


@app.command()
def path(
    source: Annotated[str, typer.Option("--from", help="Starting user")],
    target: Annotated[str, typer.Option("--to", help="Destination user")],
    config_path: ConfigOption = None,
    out: OutOption = None,
    steps: StepsOption = False,
    no_mermaid: NoMermaidOption = False,
    verbose: VerboseOption = False,
) -> None:
    """Find the shortest chain of friends between two users."""
    graph, _ = _setup(config_path, verbose)

    for name, value in (("--from", source), ("--to", target)):
        if not value:
            typer.echo(f"Error: {name} must not be empty.", err=True)
            raise SystemExit(2)

    try:
        result = shortest_path(graph, source, target)
    except NetworkError as e:
        typer.echo(f"Error: {e}", err=True)
        raise SystemExit(2)  # noqa: B904

    render_path(result, show_steps=steps)

    if out is not None:
        _write_outputs(
            result, "path", out, f"path --from {source} --to {target}", config_path,
            lambda r, o, meta: render_path_markdown(r, o, meta, include_mermaid=not no_mermaid),
        )


@app.command()
def cycles(
    quota: Annotated[
        int | None, typer.Option("--quota", help="Maximum number of loops to report")
    ] = None,
    config_path: ConfigOption = None,
    out: OutOption = None,
    steps: StepsOption = False,
    no_mermaid: NoMermaidOption = False,
    verbose: VerboseOption = False,
) -> None:
    """Find friend loops (cycles), stopping at the quota."""
    graph, default_quota = _setup(config_path, verbose)
    quota = default_quota if quota is None else quota

    try:
        result = find_cycles(graph, quota)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise SystemExit(2)  # noqa: B904

    render_cycles(result, show_steps=steps)

    if out is not None:
        _write_outputs(
            result, "cycles", out, f"cycles --quota {quota}", config_path,
            lambda r, o, meta: render_cycles_markdown(r, o, meta, include_mermaid=not no_mermaid),
        )


@app.command()
def stats(config_path: ConfigOption = None, verbose: VerboseOption = False) -> None:
    """Show connection statistics for the network."""
    graph, _ = _setup(config_path, verbose)
    render_stats(compute_stats(graph))


@app.command()
def serve(
    config_path: ConfigOption = None,
    host: Annotated[str | None, typer.Option("--host", help="Bind address")] = None,
    port: Annotated[int | None, typer.Option("--port", help="Listen port")] = None,
    verbose: VerboseOption = False,
) -> None:
    """Run the JSON API."""
    from netexplorer.server import create_app

    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO)
    try:
        cfg = load_config(config_path)
        flask_app = create_app(cfg)
    except NetworkError as e:
        typer.echo(f"Error: invalid network configuration: {e}", err=True)
        raise SystemExit(2)  # noqa: B904

    flask_app.run(
        host=host or cfg.server.host,
        port=port or cfg.server.port,
        threaded=True,
    )
