import math

import pytest

from sixdeg.analytics.distances import all_distances
from sixdeg.analytics.statistics import (
    connection_counts,
    degree_ranking,
    distance_distribution,
    largest_web,
    max_distance,
    mean_distance,
    mode_distance,
    mode_of_connection_counts,
    summarize,
    unique_vertex_count,
    web_size_within_radius,
    within_radius_counts,
    within_radius_percentage,
)
from sixdeg.build.graph_builder import Graph
from sixdeg.errors import EmptyGraphError


def test_unique_vertex_count_includes_neighbor_only_vertices():
    graph = Graph.build([(0, 1), (1, 2)], directed=True)
    assert len(graph) == 2
    assert unique_vertex_count(graph) == 3


def test_empty_graph_boundary():
    graph = Graph.build([])
    table = all_distances(graph)
    assert unique_vertex_count(graph) == 0
    assert math.isnan(mean_distance(table))
    assert math.isnan(within_radius_percentage(table))
    assert largest_web(table) == (None, 0)
    assert mode_of_connection_counts(connection_counts(table)) is None
    assert mode_distance(table) is None
    assert max_distance(table) is None


def test_degree_ranking_star(star_graph):
    assert degree_ranking(star_graph, 1) == [(0, 3)]


def test_degree_ranking_ties_by_vertex_id(star_graph):
    assert degree_ranking(star_graph, 10) == [(0, 3), (1, 1), (2, 1), (3, 1)]
    assert degree_ranking(star_graph, 0) == []


def test_mode_of_connection_counts():
    counts = {1: 2, 2: 2, 3: 2, 4: 5, 5: 2}
    assert mode_of_connection_counts(counts) == 2


def test_mode_of_connection_counts_from_graph():
    # six disjoint edges plus one five-vertex path
    edges = [(2 * i, 2 * i + 1) for i in range(6)] + [(100, 101), (101, 102), (102, 103), (103, 104)]
    counts = connection_counts(all_distances(Graph.build(edges)))
    assert sorted(counts.values()).count(2) == 12
    assert sorted(counts.values()).count(5) == 5
    assert mode_of_connection_counts(counts) == 2


def test_mode_of_connection_counts_single_hub_directed():
    graph = Graph.build([(9, 1), (9, 2), (9, 3), (9, 4), (20, 21), (22, 23), (24, 25)], directed=True)
    counts = connection_counts(all_distances(graph))
    assert counts == {9: 5, 20: 2, 22: 2, 24: 2}
    assert mode_of_connection_counts(counts) == 2


def test_mode_tie_smallest_value_wins():
    assert mode_of_connection_counts({1: 4, 2: 3, 3: 3, 4: 4}) == 3


def test_connection_counts(two_components_graph):
    table = all_distances(two_components_graph)
    assert connection_counts(table) == {0: 3, 1: 3, 2: 3, 10: 2, 11: 2, 20: 1}


def test_isolated_vertex_web_size_includes_self():
    graph = Graph.from_adjacency({7: []})
    table = all_distances(graph)
    assert web_size_within_radius(table, 6) == {7: 1}
    assert within_radius_counts(table, 6) == {7: 0}


def test_web_size_respects_radius():
    graph = Graph.build([(i, i + 1) for i in range(10)])
    table = all_distances(graph)
    webs = web_size_within_radius(table, 2)
    assert webs[0] == 3
    assert webs[5] == 5
    assert web_size_within_radius(table, 6)[0] == 7


def test_largest_web_tie_goes_to_smallest_vertex(chain_graph):
    table = all_distances(chain_graph)
    # 1 and 2 both reach 3 vertices within one hop
    assert largest_web(table, 1) == (1, 3)
    assert largest_web(table, 6) == (0, 4)


def test_within_radius_percentage_uses_square_denominator():
    triangle = Graph.build([(0, 1), (1, 2), (2, 0)])
    table = all_distances(triangle)
    assert within_radius_counts(table) == {0: 2, 1: 2, 2: 2}
    assert within_radius_percentage(table) == pytest.approx(6 / 9 * 100)


def test_distance_aggregates_on_chain(chain_graph):
    table = all_distances(chain_graph)
    assert mean_distance(table) == pytest.approx(20 / 12)
    assert mode_distance(table) == 1
    assert max_distance(table) == 3
    assert distance_distribution(table) == {1: 6, 2: 4, 3: 2}


def test_mean_distance_undefined_for_isolates_only():
    graph = Graph.from_adjacency({1: [], 2: []})
    assert math.isnan(mean_distance(all_distances(graph)))


def test_statistics_do_not_mutate_table(chain_graph):
    table = all_distances(chain_graph)
    snapshot = {k: dict(v) for k, v in table.items()}
    summarize(chain_graph, table)
    assert table == snapshot


def test_summarize(two_components_graph):
    table = all_distances(two_components_graph)
    summary = summarize(two_components_graph, table, radius=6, top_n=2)
    assert summary.n_vertices == 6
    assert summary.n_unique_vertices == 6
    assert summary.top_degrees == [(0, 2), (1, 2)]
    assert summary.mode_connection_count == 3
    assert summary.largest_web_vertex == 0
    assert summary.largest_web_size == 3
    assert summary.within_radius_pct == pytest.approx(8 / 36 * 100)
    assert summary.mean_distance == pytest.approx(1.0)
    assert summary.distance_histogram == {1: 8}


def test_summarize_empty_graph_raises():
    with pytest.raises(EmptyGraphError):
        summarize(Graph.build([]), {})
