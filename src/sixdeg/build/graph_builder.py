# src/sixdeg/build/graph_builder.py

"""
Graph construction utilities.

This module is responsible ONLY for:
  - parsing edge items (text lines or integer pairs)
  - building the immutable adjacency-list Graph
  - returning basic build statistics (including skipped items)

It deliberately does NOT compute distances or statistics, keeping a clean
separation of concerns.

Construction modes:
  - symmetric (default): edge (a, b) appends b to a's list AND a to b's list
  - directed           : edge (a, b) appends b to a's list only

Neighbor lists keep insertion order and may contain duplicates; the store is
an adjacency list, not an adjacency set.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple

import networkx as nx

from ..errors import MalformedInputError

# Max number of skipped items kept in BuildStats for reporting
SKIPPED_PREVIEW = 20


@dataclass
class BuildStats:
    n_vertices: int
    n_unique_vertices: int
    n_edges: int
    n_skipped: int
    directed: bool
    skipped: List[Tuple[int, str]] = field(default_factory=list)


class Graph:
    """
    Read-only adjacency list keyed by integer vertex id.

    Use ``Graph.build`` / ``build_graph`` for edge input, or
    ``Graph.from_adjacency`` when the adjacency is already known.
    """

    def __init__(self, adjacency: Mapping[int, Sequence[int]], directed: bool = False) -> None:
        self._adjacency: Dict[int, Tuple[int, ...]] = {
            v: tuple(neighbors) for v, neighbors in adjacency.items()
        }
        self._directed = directed

    @classmethod
    def build(
        cls,
        items: Iterable[Any],
        *,
        directed: bool = False,
        strict: bool = False,
    ) -> "Graph":
        graph, _ = build_graph(items, directed=directed, strict=strict)
        return graph

    @classmethod
    def from_adjacency(cls, adjacency: Mapping[int, Sequence[int]], *, directed: bool = False) -> "Graph":
        return cls(adjacency, directed=directed)

    @property
    def directed(self) -> bool:
        return self._directed

    @property
    def adjacency_list(self) -> Mapping[int, Tuple[int, ...]]:
        return MappingProxyType(self._adjacency)

    def neighbors(self, vertex: int) -> Optional[Tuple[int, ...]]:
        """
        Neighbors of ``vertex`` in insertion order.

        Returns None if the vertex is not a key of the graph, and an empty
        tuple if it is a key with no recorded neighbors.
        """
        return self._adjacency.get(vertex)

    def degree(self, vertex: int) -> int:
        return len(self._adjacency.get(vertex, ()))

    def vertices(self) -> List[int]:
        return list(self._adjacency)

    def number_of_edges(self) -> int:
        total = sum(len(ns) for ns in self._adjacency.values())
        return total if self._directed else total // 2

    def to_networkx(self) -> nx.MultiGraph:
        """
        Convert to a NetworkX multigraph (MultiDiGraph when directed).

        Every key becomes a node even when it has no neighbors, so isolates
        survive the conversion.
        """
        G = nx.MultiDiGraph() if self._directed else nx.MultiGraph()
        G.add_nodes_from(self._adjacency)
        for u, neighbors in self._adjacency.items():
            for v in neighbors:
                # symmetric lists hold each edge twice; keep one copy
                if self._directed or u <= v:
                    G.add_edge(u, v)
        if not self._directed:
            # self-loops were appended twice to the same list
            for u in list(nx.nodes_with_selfloops(G)):
                extra = G.number_of_edges(u, u) // 2
                for _ in range(extra):
                    G.remove_edge(u, u)
        return G

    def __len__(self) -> int:
        return len(self._adjacency)

    def __contains__(self, vertex: object) -> bool:
        return vertex in self._adjacency

    def __iter__(self) -> Iterator[int]:
        return iter(self._adjacency)

    def __repr__(self) -> str:
        mode = "directed" if self._directed else "symmetric"
        return f"Graph({len(self)} vertices, {mode})"


def _to_vertex(token: Any, item: Any, line_no: Optional[int]) -> int:
    if isinstance(token, bool):
        raise MalformedInputError(item, "boolean is not a vertex id", line_no)
    if isinstance(token, int):
        return token
    if isinstance(token, str):
        try:
            return int(token)
        except ValueError:
            raise MalformedInputError(item, f"not an integer: {token!r}", line_no) from None
    raise MalformedInputError(item, f"unsupported vertex type {type(token).__name__}", line_no)


def is_ignorable_line(line: str) -> bool:
    """Blank lines and '#' comments (SNAP headers) carry no edge."""
    stripped = line.strip()
    return not stripped or stripped.startswith("#")


def parse_edge_line(line: str, line_no: Optional[int] = None) -> Tuple[int, int]:
    """
    Parse one "a b" line into an integer pair.

    Raises
    ------
    MalformedInputError
        If the line does not split into exactly two integer tokens.
    """
    parts = line.split()
    if len(parts) != 2:
        raise MalformedInputError(line, f"expected 2 fields, got {len(parts)}", line_no)
    return _to_vertex(parts[0], line, line_no), _to_vertex(parts[1], line, line_no)


def parse_edge_item(item: Any, line_no: Optional[int] = None) -> Tuple[int, int]:
    """Accept a text line or a 2-sequence and return the integer pair."""
    if isinstance(item, str):
        return parse_edge_line(item, line_no)
    if isinstance(item, (tuple, list)):
        if len(item) != 2:
            raise MalformedInputError(item, f"expected a pair, got {len(item)} values", line_no)
        return _to_vertex(item[0], item, line_no), _to_vertex(item[1], item, line_no)
    raise MalformedInputError(item, f"unsupported edge item {type(item).__name__}", line_no)


def build_graph(
    items: Iterable[Any],
    *,
    directed: bool = False,
    strict: bool = False,
) -> Tuple[Graph, BuildStats]:
    """
    Build a Graph from edge lines or integer pairs.

    Malformed items are skipped with a warning and counted in BuildStats,
    unless ``strict`` is set, in which case the first one raises
    MalformedInputError. Blank and '#' lines are ignored silently.
    """
    adjacency: Dict[int, List[int]] = {}
    n_edges = 0
    n_skipped = 0
    skipped: List[Tuple[int, str]] = []

    for line_no, item in enumerate(items, start=1):
        if isinstance(item, str) and is_ignorable_line(item):
            continue
        try:
            a, b = parse_edge_item(item, line_no)
        except MalformedInputError as e:
            if strict:
                raise
            n_skipped += 1
            if len(skipped) < SKIPPED_PREVIEW:
                skipped.append((line_no, str(item).rstrip("\n")))
            print(f"[WARN] Skipping malformed edge {e}")
            continue

        adjacency.setdefault(a, []).append(b)
        if not directed:
            adjacency.setdefault(b, []).append(a)
        n_edges += 1

    graph = Graph(adjacency, directed=directed)

    unique = set(adjacency)
    for neighbors in adjacency.values():
        unique.update(neighbors)

    stats = BuildStats(
        n_vertices=len(adjacency),
        n_unique_vertices=len(unique),
        n_edges=n_edges,
        n_skipped=n_skipped,
        directed=directed,
        skipped=skipped,
    )
    return graph, stats
