# src/sixdeg/report/csv_export.py

"""
CSV export utilities.

This module writes:
  - Per-vertex statistics (degree, connection count, web size, within radius)
  - Degree ranking (top-N)

The distance table itself is never written to disk.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Any, Dict, List

from ..build.graph_builder import Graph
from ..analytics.statistics import GraphSummary


def _write_csv(path: Path, rows: List[Dict[str, Any]], fieldnames: List[str]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for r in rows:
            writer.writerow(r)
    print(f"[INFO] Saved CSV → {path}")


def export_vertex_stats_csv(graph: Graph, summary: GraphSummary, path: Path) -> None:
    """
    One row per graph key: vertex, degree, connections, web_size, within_radius
    """
    rows = []
    for v in graph:
        rows.append({
            "vertex": v,
            "degree": graph.degree(v),
            "connections": summary.connection_counts.get(v, 0),
            "web_size": summary.web_sizes.get(v, 0),
            "within_radius": summary.within_radius.get(v, 0),
        })

    _write_csv(path, rows, ["vertex", "degree", "connections", "web_size", "within_radius"])


def export_degree_ranking_csv(summary: GraphSummary, path: Path) -> None:
    rows = [
        {"rank": i, "vertex": v, "degree": d}
        for i, (v, d) in enumerate(summary.top_degrees, start=1)
    ]
    _write_csv(path, rows, ["rank", "vertex", "degree"])
