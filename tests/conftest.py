import os

os.environ.setdefault("MPLBACKEND", "Agg")

import matplotlib  # noqa: E402

matplotlib.use("Agg")

import pytest  # noqa: E402

from mst_graph import Graph  # noqa: E402
from prims_implementation import build_example_graph  # noqa: E402


@pytest.fixture
def example_graph():
    return build_example_graph()


@pytest.fixture
def two_component_graph():
    """a-b-c and x-y, plus an isolated vertex z"""
    g = Graph()
    for vertex in ["a", "b", "c", "x", "y", "z"]:
        g.add_vertex(vertex)
    g.add_undirected_edge("a", "b", 1)
    g.add_undirected_edge("b", "c", 2)
    g.add_undirected_edge("x", "y", 3)
    return g
