# src/sixdeg/analytics/distances.py

"""
Hop-distance computation.

This module implements:
  - single-source BFS distances (level-order, FIFO frontier)
  - the all-pairs distance table, one independent BFS per graph key
  - execution strategies for the all-pairs pass (sequential, thread pool,
    process pool), registered by name

Cost of the all-pairs pass is O(V * (V + E)) time and O(V^2) memory for the
table. That is the scalability ceiling of this package: the SNAP Facebook
graph (~4k vertices) is fine, graphs with 10^5+ vertices are not.

Purely analytical: no printing, no file I/O.
"""

from __future__ import annotations

import os
import time
from collections import deque
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor
from functools import partial
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from ..build.graph_builder import Graph
from ..errors import BfsTimeoutError

DistanceRow = Dict[int, int]
DistanceTable = Dict[int, DistanceRow]


def bfs_distances(start: int, graph: Graph, *, timeout: Optional[float] = None) -> DistanceRow:
    """
    Shortest hop distance from ``start`` to every reachable vertex.

    A vertex is recorded exactly once, when it is first enqueued, so the
    recorded value is its BFS level. ``start`` maps to 0. Unreachable
    vertices are absent. A start vertex that has no neighbor list (or is
    not in the graph at all) yields ``{start: 0}``.

    Parameters
    ----------
    start : int
        Source vertex.
    graph : Graph
        Graph to traverse.
    timeout : float, optional
        Seconds allowed for this run; BfsTimeoutError is raised when exceeded.
    """
    distances: DistanceRow = {start: 0}
    queue = deque([start])
    deadline = None if timeout is None else time.monotonic() + timeout

    while queue:
        if deadline is not None and time.monotonic() > deadline:
            raise BfsTimeoutError(start, timeout)

        current = queue.popleft()
        neighbors = graph.neighbors(current)
        if neighbors is None:
            continue

        next_distance = distances[current] + 1
        for neighbor in neighbors:
            if neighbor not in distances:
                distances[neighbor] = next_distance
                queue.append(neighbor)

    return distances


def _bfs_batch(
    sources: Sequence[int], graph: Graph, timeout: Optional[float]
) -> List[Tuple[int, DistanceRow]]:
    return [(s, bfs_distances(s, graph, timeout=timeout)) for s in sources]


def _chunk(items: Sequence[int], n_chunks: int) -> List[Sequence[int]]:
    n_chunks = max(1, min(n_chunks, len(items)))
    size, rem = divmod(len(items), n_chunks)
    chunks = []
    start = 0
    for i in range(n_chunks):
        end = start + size + (1 if i < rem else 0)
        chunks.append(items[start:end])
        start = end
    return chunks


# ──────────────────────────────────────────────────────────────────────────────
# Strategy registry
# ──────────────────────────────────────────────────────────────────────────────

# name -> callable(graph, sources, workers, timeout) -> list of (source, row)
StrategyFn = Callable[[Graph, Sequence[int], Optional[int], Optional[float]], List[Tuple[int, DistanceRow]]]

REGISTERED_STRATEGIES: Dict[str, StrategyFn] = {}


def register_strategy(name: str):
    """
    Decorator registering an execution strategy for all_distances().
    Every strategy must return one (source, row) pair per source.
    """
    def wrapper(fn):
        REGISTERED_STRATEGIES[name] = fn
        return fn
    return wrapper


@register_strategy("sequential")
def _run_sequential(graph, sources, workers, timeout):
    return _bfs_batch(sources, graph, timeout)


def _run_pool(executor: Executor, graph, sources, n_chunks, timeout):
    job = partial(_bfs_batch, graph=graph, timeout=timeout)
    results: List[Tuple[int, DistanceRow]] = []
    with executor as ex:
        for batch in ex.map(job, _chunk(sources, n_chunks)):
            results.extend(batch)
    return results


def _pool_size(workers: Optional[int]) -> int:
    return workers or os.cpu_count() or 1


@register_strategy("threads")
def _run_threads(graph, sources, workers, timeout):
    # CPU-bound BFS gains little under the GIL; useful mainly with free-threaded builds.
    n = _pool_size(workers)
    return _run_pool(ThreadPoolExecutor(max_workers=n), graph, sources, n, timeout)


@register_strategy("processes")
def _run_processes(graph, sources, workers, timeout):
    n = _pool_size(workers)
    # a few chunks per worker to smooth out uneven component sizes
    return _run_pool(ProcessPoolExecutor(max_workers=n), graph, sources, n * 4, timeout)


def available_strategies() -> List[str]:
    return sorted(REGISTERED_STRATEGIES)


def all_distances(
    graph: Graph,
    *,
    strategy: str = "sequential",
    workers: Optional[int] = None,
    timeout: Optional[float] = None,
) -> DistanceTable:
    """
    Compute the full distance table, one BFS per graph key.

    Sources are exactly the graph's keys. Each BFS owns its own visited map
    and queue, so runs can execute in any order or concurrently; results are
    merged by source and returned in graph key order whatever the strategy.

    Parameters
    ----------
    graph : Graph
    strategy : str
        One of available_strategies(): "sequential", "threads", "processes".
    workers : int, optional
        Pool size for the pool strategies (executor default when None).
    timeout : float, optional
        Per-BFS deadline in seconds.

    Returns
    -------
    Dict[int, Dict[int, int]]
        source -> {reachable vertex -> hop distance}
    """
    fn = REGISTERED_STRATEGIES.get(strategy)
    if fn is None:
        raise ValueError(
            f"Unknown distance strategy {strategy!r}; choose from {available_strategies()}"
        )

    sources = graph.vertices()
    if not sources:
        return {}

    rows = dict(fn(graph, sources, workers, timeout))
    return {s: rows[s] for s in sources}
