# src/sixdeg/analytics/connectivity.py

"""
Connectivity analysis utilities.

This module provides tools for:
  - counting connected components (weak components for directed graphs)
  - sizing the giant component
  - listing isolated vertices

Purely analytical: no visualization, no CLI, no file I/O.
"""

from __future__ import annotations

from typing import Any, Dict

import networkx as nx

from ..build.graph_builder import Graph


def connectivity_summary(graph: Graph) -> Dict[str, Any]:
    """
    Compute high-level connectivity statistics for the graph.

    Parameters
    ----------
    graph : Graph
        The adjacency-list graph.

    Returns
    -------
    Dict[str, Any]
        {
            "n_components"   : int,
            "giant_nodes"    : int,
            "giant_fraction" : float,
            "n_isolates"     : int,
            "isolates"       : List[int],
        }
    """
    G = graph.to_networkx()
    if G.number_of_nodes() == 0:
        return {
            "n_components": 0,
            "giant_nodes": 0,
            "giant_fraction": 0.0,
            "n_isolates": 0,
            "isolates": [],
        }

    if G.is_directed():
        comps = list(nx.weakly_connected_components(G))
    else:
        comps = list(nx.connected_components(G))
    giant = max(comps, key=len)

    isolates = sorted(nx.isolates(G))

    return {
        "n_components": len(comps),
        "giant_nodes": len(giant),
        "giant_fraction": len(giant) / G.number_of_nodes(),
        "n_isolates": len(isolates),
        "isolates": isolates[:50],   # preview only
    }
