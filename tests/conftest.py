import random

import pytest

from sixdeg.build.graph_builder import Graph


@pytest.fixture
def path_graph():
    """0 - 1 - 2"""
    return Graph.build([(0, 1), (1, 2)])


@pytest.fixture
def chain_graph():
    """0 - 1 - 2 - 3"""
    return Graph.build(["0 1", "1 2", "2 3"])


@pytest.fixture
def star_graph():
    """center 0, leaves 1, 2, 3"""
    return Graph.build([(0, 1), (0, 2), (0, 3)])


@pytest.fixture
def two_components_graph():
    """triangle 0-1-2, edge 10-11, isolated 20"""
    return Graph.from_adjacency({
        0: [1, 2],
        1: [0, 2],
        2: [0, 1],
        10: [11],
        11: [10],
        20: [],
    })


@pytest.fixture
def random_edges():
    rng = random.Random(7)
    edges = set()
    while len(edges) < 120:
        a, b = rng.randrange(60), rng.randrange(60)
        if a != b:
            edges.add((min(a, b), max(a, b)))
    return sorted(edges)


@pytest.fixture
def edge_file(tmp_path):
    path = tmp_path / "edges.txt"
    path.write_text(
        "# Undirected graph: sample\n"
        "0 1\n"
        "0 2\n"
        "1 2\n"
        "2 3\n"
        "not an edge\n"
        "\n"
        "3 4\n"
        "4 5 6\n",
        encoding="utf-8",
    )
    return path
