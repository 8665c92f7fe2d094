import pytest

from msdijkstra import Digraph

TINY_EDGES = [
    (0, 1, 2.0),
    (0, 2, 5.0),
    (1, 2, 1.0),
    (1, 3, 4.0),
    (2, 3, 1.0),
]


@pytest.fixture
def tiny_graph():
    return Digraph(4, 5, TINY_EDGES)


@pytest.fixture
def tiny_graph_isolated():
    """The tiny graph plus vertex 4 with no incident edges."""
    return Digraph(5, 5, TINY_EDGES)


@pytest.fixture
def tiny_ewd(tmp_path):
    path = tmp_path / "tiny.txt"
    path.write_text("4\n5\n0 1 2.0\n0 2 5.0\n1 2 1.0\n1 3 4.0\n2 3 1.0\n", encoding="utf-8")
    return path
