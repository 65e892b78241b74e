# src/sixdeg/analytics/statistics.py

"""
Statistics over the graph and its distance table.

This module computes:

1. Graph-level counts:
      - unique vertex count (keys plus neighbor entries)
      - degree ranking (top-N by neighbor-list length)

2. Per-vertex reachability:
      - connection count  : size of the vertex's distance row
      - web size          : vertices within `radius` hops, self INCLUDED
      - within-radius     : vertices within `radius` hops, self EXCLUDED

3. Distance aggregates:
      - mean / mode / max non-self distance
      - within-radius percentage, normalized by V^2

Tie-breaks are deterministic: smallest vertex id (rankings, largest web)
and smallest value (modes). Undefined results are reported as math.nan or
None, never by dividing by zero.

Pure functions: no mutation, no printing, no file I/O.
"""

from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Tuple

from ..build.graph_builder import Graph
from ..errors import EmptyGraphError
from ..utils.constants import DEFAULT_RADIUS, DEFAULT_TOP_N
from .distances import DistanceTable


def unique_vertex_count(graph: Graph) -> int:
    unique = set(graph)
    for v in graph:
        unique.update(graph.neighbors(v))
    return len(unique)


def connection_counts(table: DistanceTable) -> Dict[int, int]:
    """Reachable vertices per source (the source itself included)."""
    return {v: len(row) for v, row in table.items()}


def degree_ranking(graph: Graph, top_n: int = DEFAULT_TOP_N) -> List[Tuple[int, int]]:
    """
    Vertices ordered by neighbor-list length, descending.

    Ties are broken by vertex id ascending. Duplicate neighbor entries count
    towards the degree, as they do in the adjacency list.
    """
    if top_n <= 0:
        return []
    ranked = sorted(
        ((v, graph.degree(v)) for v in graph),
        key=lambda kv: (-kv[1], kv[0]),
    )
    return ranked[:top_n]


def _mode(values) -> Optional[int]:
    freq = Counter(values)
    if not freq:
        return None
    # highest frequency first, then smallest value
    return min(freq.items(), key=lambda kv: (-kv[1], kv[0]))[0]


def mode_of_connection_counts(counts: Mapping[int, int]) -> Optional[int]:
    """
    Most frequent connection-count value; the smallest value wins a tie.
    Returns None for an empty mapping.
    """
    return _mode(counts.values())


def web_size_within_radius(table: DistanceTable, radius: int = DEFAULT_RADIUS) -> Dict[int, int]:
    """Per vertex, entries with distance <= radius, counting the vertex itself."""
    return {
        v: sum(1 for d in row.values() if d <= radius)
        for v, row in table.items()
    }


def largest_web(table: DistanceTable, radius: int = DEFAULT_RADIUS) -> Tuple[Optional[int], int]:
    """
    Vertex with the largest web size and that size.

    Ties go to the smallest vertex id. An empty table gives (None, 0).
    """
    sizes = web_size_within_radius(table, radius)
    if not sizes:
        return None, 0
    vertex, size = min(sizes.items(), key=lambda kv: (-kv[1], kv[0]))
    return vertex, size


def within_radius_counts(table: DistanceTable, radius: int = DEFAULT_RADIUS) -> Dict[int, int]:
    """Per vertex, entries with 0 < distance <= radius (self excluded)."""
    return {
        v: sum(1 for d in row.values() if 0 < d <= radius)
        for v, row in table.items()
    }


def within_radius_percentage(table: DistanceTable, radius: int = DEFAULT_RADIUS) -> float:
    """
    Sum of within-radius counts divided by V * V, times 100.

    The denominator is V^2 rather than V * (V - 1), so a complete graph
    scores slightly under 100%. NaN for an empty table.
    """
    n = len(table)
    if n == 0:
        return math.nan
    total = sum(within_radius_counts(table, radius).values())
    return total / n / n * 100.0


def _non_self_distances(table: DistanceTable):
    for source, row in table.items():
        for target, d in row.items():
            if target != source:
                yield d


def mean_distance(table: DistanceTable) -> float:
    """Mean of all non-self distances; NaN when there are none."""
    total = 0
    count = 0
    for d in _non_self_distances(table):
        total += d
        count += 1
    if count == 0:
        return math.nan
    return total / count


def mode_distance(table: DistanceTable) -> Optional[int]:
    return _mode(_non_self_distances(table))


def max_distance(table: DistanceTable) -> Optional[int]:
    return max(_non_self_distances(table), default=None)


def distance_distribution(table: DistanceTable) -> Counter:
    """Histogram of non-self distances: hop count -> number of (source, target) pairs."""
    return Counter(_non_self_distances(table))


@dataclass
class GraphSummary:
    n_vertices: int
    n_unique_vertices: int
    radius: int
    top_degrees: List[Tuple[int, int]]
    connection_counts: Dict[int, int]
    mode_connection_count: Optional[int]
    web_sizes: Dict[int, int]
    largest_web_vertex: Optional[int]
    largest_web_size: int
    within_radius: Dict[int, int]
    within_radius_pct: float
    mean_distance: float
    mode_distance: Optional[int]
    max_distance: Optional[int]
    distance_histogram: Dict[int, int] = field(default_factory=dict)


def summarize(
    graph: Graph,
    table: DistanceTable,
    radius: int = DEFAULT_RADIUS,
    top_n: int = DEFAULT_TOP_N,
) -> GraphSummary:
    """
    Bundle every statistic for the report layer.

    Raises
    ------
    EmptyGraphError
        If the graph has no vertices.
    """
    if len(graph) == 0:
        raise EmptyGraphError("Graph has no vertices; nothing to summarize.")

    counts = connection_counts(table)
    webs = web_size_within_radius(table, radius)
    web_vertex, web_size = largest_web(table, radius)

    return GraphSummary(
        n_vertices=len(graph),
        n_unique_vertices=unique_vertex_count(graph),
        radius=radius,
        top_degrees=degree_ranking(graph, top_n),
        connection_counts=counts,
        mode_connection_count=mode_of_connection_counts(counts),
        web_sizes=webs,
        largest_web_vertex=web_vertex,
        largest_web_size=web_size,
        within_radius=within_radius_counts(table, radius),
        within_radius_pct=within_radius_percentage(table, radius),
        mean_distance=mean_distance(table),
        mode_distance=mode_distance(table),
        max_distance=max_distance(table),
        distance_histogram=dict(sorted(distance_distribution(table).items())),
    )
