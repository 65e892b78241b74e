"""
Tests for single-source BFS and the all-pairs distance table.

Validates:
1. Known distances on chain/path graphs
2. BFS invariants (self 0, non-negative, level order)
3. Agreement with NetworkX shortest path lengths
4. Strategy equivalence and timeout behavior
"""

import itertools
import pickle

import networkx as nx
import pytest

import sixdeg.analytics.distances as distances
from sixdeg.analytics.distances import all_distances, available_strategies, bfs_distances
from sixdeg.build.graph_builder import Graph
from sixdeg.errors import BfsTimeoutError, MalformedInputError
from sixdeg.utils.constants import STRATEGIES


def test_chain_distances(chain_graph):
    assert bfs_distances(0, chain_graph) == {0: 0, 1: 1, 2: 2, 3: 3}


def test_path_all_distances(path_graph):
    table = all_distances(path_graph)
    assert table[0][1] == 1
    assert table[1][2] == 1
    assert table[0][2] == 2
    assert table[2][0] == 2


def test_bfs_invariants(random_edges):
    graph = Graph.build(random_edges)
    for start in graph:
        row = bfs_distances(start, graph)
        assert row[start] == 0
        assert all(d >= 0 for d in row.values())
        # rows are filled in enqueue order, which is level order
        values = list(row.values())
        assert values == sorted(values)


def test_matches_networkx(random_edges):
    graph = Graph.build(random_edges)
    G = nx.Graph(random_edges)
    table = all_distances(graph)
    for source in graph:
        assert table[source] == dict(nx.single_source_shortest_path_length(G, source))


def test_isolated_start_yields_single_entry():
    graph = Graph.from_adjacency({7: [], 8: [9], 9: [8]})
    assert bfs_distances(7, graph) == {7: 0}


def test_start_outside_graph_does_not_crash(path_graph):
    assert bfs_distances(42, path_graph) == {42: 0}


def test_directed_sink_is_reachable_but_not_a_source():
    graph = Graph.build([(0, 1), (1, 2)], directed=True)
    table = all_distances(graph)
    assert list(table) == [0, 1]
    assert table[0] == {0: 0, 1: 1, 2: 2}
    assert table[1] == {1: 0, 2: 1}


def test_unreachable_vertices_are_absent(two_components_graph):
    table = all_distances(two_components_graph)
    assert 10 not in table[0]
    assert table[20] == {20: 0}
    assert set(table) == {0, 1, 2, 10, 11, 20}


def test_connected_graph_distances_bounded_by_diameter(random_edges):
    G = nx.Graph(random_edges)
    giant = G.subgraph(max(nx.connected_components(G), key=len))
    diameter = nx.diameter(giant)
    graph = Graph.build(list(giant.edges()))
    table = all_distances(graph)
    for row in table.values():
        assert len(row) == len(graph)
        assert max(row.values()) <= diameter


def test_all_distances_is_idempotent(random_edges):
    graph = Graph.build(random_edges)
    assert all_distances(graph) == all_distances(graph)


def test_empty_graph_gives_empty_table():
    assert all_distances(Graph.build([])) == {}


@pytest.mark.parametrize("strategy", ["threads", "processes"])
def test_pool_strategies_match_sequential(random_edges, strategy):
    graph = Graph.build(random_edges)
    expected = all_distances(graph)
    table = all_distances(graph, strategy=strategy, workers=2)
    assert table == expected
    assert list(table) == list(expected)


def test_available_strategies():
    assert available_strategies() == ["processes", "sequential", "threads"]
    assert sorted(STRATEGIES) == available_strategies()


def test_unknown_strategy_raises(path_graph):
    with pytest.raises(ValueError):
        all_distances(path_graph, strategy="gpu")


def test_generous_timeout_does_not_change_results(random_edges):
    graph = Graph.build(random_edges)
    assert all_distances(graph, timeout=60.0) == all_distances(graph)


def test_timeout_raises(monkeypatch, chain_graph):
    ticks = itertools.count(step=10)

    class FakeTime:
        @staticmethod
        def monotonic():
            return next(ticks)

    monkeypatch.setattr(distances, "time", FakeTime)
    with pytest.raises(BfsTimeoutError) as excinfo:
        bfs_distances(0, chain_graph, timeout=1.0)
    assert excinfo.value.start == 0
    assert isinstance(excinfo.value, TimeoutError)


@pytest.mark.parametrize("strategy", ["threads", "processes"])
def test_timeout_raises_under_pool_strategies(strategy):
    graph = Graph.build([(i, i + 1) for i in range(3000)])
    with pytest.raises(BfsTimeoutError) as excinfo:
        all_distances(graph, strategy=strategy, workers=2, timeout=1e-9)
    assert excinfo.value.timeout == 1e-9
    assert excinfo.value.start in graph


def test_errors_survive_pickling():
    err = pickle.loads(pickle.dumps(BfsTimeoutError(3, 0.5)))
    assert isinstance(err, BfsTimeoutError)
    assert (err.start, err.timeout) == (3, 0.5)
    assert str(err) == "BFS from vertex 3 exceeded 0.5s"

    bad = pickle.loads(pickle.dumps(MalformedInputError("x", "bad", 2)))
    assert isinstance(bad, ValueError)
    assert (bad.line, bad.reason, bad.line_no) == ("x", "bad", 2)
    assert str(bad) == str(MalformedInputError("x", "bad", 2))
