"""Shared test fixtures."""

from pathlib import Path

import pytest

from netexplorer.graph import Graph, build_graph
from netexplorer.model import DEFAULT_NETWORK

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture()
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture()
def line_graph() -> Graph:
    return build_graph({"A": ["B"], "B": ["A", "C"], "C": ["B"]})


@pytest.fixture()
def triangle_graph() -> Graph:
    return build_graph({"A": ["B", "C"], "B": ["A", "C"], "C": ["A", "B"]})


@pytest.fixture()
def disconnected_graph() -> Graph:
    return build_graph({"A": ["B"], "B": ["A"], "C": ["D"], "D": ["C"]})


@pytest.fixture()
def squares_graph() -> Graph:
    """Two squares sharing the edge B-C; G points at A but A does not point back."""
    return build_graph({
        "A": ["B", "D"],
        "B": ["A", "C", "E"],
        "C": ["B", "D", "F"],
        "D": ["A", "C"],
        "E": ["B", "F"],
        "F": ["C", "E"],
        "G": ["A"],
    })


@pytest.fixture()
def social_graph() -> Graph:
    return build_graph(DEFAULT_NETWORK)
