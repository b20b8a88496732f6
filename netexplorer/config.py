"""Configuration loader — netexplorer.yml parsing and defaults."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

import yaml
from pydantic import ValidationError

from netexplorer.graph import Graph, GraphConfigError, build_graph
from netexplorer.logger import logger
from netexplorer.model import NetworkExplorerConfig


def load_config(path: Path | None = None) -> NetworkExplorerConfig:
    """Load config from YAML file, or return defaults if no path given.

    Unreadable or invalid settings fall back to defaults with a warning. A
    ``network`` section is validated strictly: if present and malformed,
    ``GraphConfigError`` is raised rather than loading the bundled network.
    """
    if path is None:
        logger.debug("No config file provided, using defaults")
        return NetworkExplorerConfig()

    from pathlib import Path as _Path

    p = _Path(str(path))

    try:
        text = p.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.warning("Config file not found: %s — using defaults", path)
        return NetworkExplorerConfig()
    except OSError as e:
        logger.warning("Cannot read config file %s: %s — using defaults", path, e)
        return NetworkExplorerConfig()

    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as e:
        logger.warning("Malformed YAML in %s: %s — using defaults", path, e)
        return NetworkExplorerConfig()

    if raw is None:
        logger.debug("Config file %s is empty, using defaults", path)
        return NetworkExplorerConfig()

    if not isinstance(raw, dict):
        logger.warning("Config file %s is not a YAML mapping — using defaults", path)
        return NetworkExplorerConfig()

    if "network" not in raw:
        return _validate_settings(raw, path)

    # A network the user supplied is never swapped for the bundled one.
    network = _load_network(raw.pop("network"), path)
    config = _validate_settings(raw, path)
    return config.model_copy(update={"network": network})


def _validate_settings(raw: dict, path: Path) -> NetworkExplorerConfig:
    try:
        return NetworkExplorerConfig.model_validate(raw)
    except ValidationError as e:
        logger.warning("Invalid config in %s: %s — using defaults", path, e)
        return NetworkExplorerConfig()


def _load_network(raw_network: object, path: Path) -> dict[str, list[str]]:
    if not isinstance(raw_network, dict):
        raise GraphConfigError(
            f"Config file {path}: network must be a mapping of user to friends, "
            f"got {type(raw_network).__name__}"
        )
    graph = build_graph(raw_network)
    logger.debug("Loaded %d users from %s", len(graph), path)
    return graph.as_dict()


def load_graph(config: NetworkExplorerConfig) -> Graph:
    """Build the graph store from a loaded config. Raises ``GraphConfigError``."""
    return build_graph(config.network)
