# src/sixdeg/report/report_basic.py

"""
Report generation.

Two renderings of the same numbers:
  - console_lines(): the plain-text console summary (adjacency samples,
    top vertices by neighbors, sample distances, within-radius counts,
    average percentage, largest web, mode connection count)
  - render_report(): a Markdown report for the output directory

Both take already-computed values; nothing here touches the distance engine.
"""

from __future__ import annotations

import math
from itertools import islice
from typing import Any, Dict, List, Optional

from ..build.graph_builder import BuildStats, Graph
from ..analytics.distances import DistanceTable
from ..analytics.statistics import GraphSummary


def _fmt_float(value: float, spec: str = ".4f") -> str:
    return "undefined" if math.isnan(value) else format(value, spec)


def console_lines(
    graph: Graph,
    table: DistanceTable,
    summary: GraphSummary,
    samples: int = 5,
) -> List[str]:
    """
    Plain-text console summary. Samples follow graph insertion order.
    """
    r = summary.radius
    lines: List[str] = []
    lines.append(f"Adjacency list length: {summary.n_vertices}")
    lines.append(f"Number of Nodes {summary.n_unique_vertices}")

    lines.append("Sample adjacency list entries:")
    for v in islice(graph, samples):
        lines.append(f"Vertex {v}: {list(graph.neighbors(v))}")

    lines.append(f"Top {len(summary.top_degrees)} vertices by number of neighbors:")
    for v, count in summary.top_degrees:
        lines.append(f"Vertex {v}: {count} neighbors")

    lines.append("Sample distance outputs for multiple vertices:")
    for v, row in islice(table.items(), min(samples, 3)):
        lines.append(f"Distances from vertex {v}:")
        for target, d in islice(row.items(), samples):
            lines.append(f"   To vertex {target}: {d}")
        lines.append("---")

    lines.append(f"Individual vertex connectivity within {r} degrees:")
    for v, count in islice(summary.within_radius.items(), samples):
        lines.append(f"Vertex {v}: {count} vertices within {r} degrees")
    lines.append(
        f"Average percentage of vertices within {r} degrees of any vertex: "
        f"{_fmt_float(summary.within_radius_pct, '.2f')}%"
    )

    lines.append(f"Vertex with the largest web within {r} degrees: {summary.largest_web_vertex}")
    lines.append(f"Size of the largest web within {r} degrees: {summary.largest_web_size}")
    lines.append(f"Mode vertex by number of connections: {summary.mode_connection_count}")
    lines.append(f"Mean distance: {_fmt_float(summary.mean_distance)}")
    return lines


def render_report(
    stats: BuildStats,
    summary: GraphSummary,
    connectivity: Dict[str, Any],
    validation: Optional[Dict[str, Any]] = None,
    title: str = "Graph Connectivity Summary",
) -> str:
    """
    Produce a Markdown report.

    Parameters
    ----------
    stats : BuildStats
        Output of build_graph() / load_graph()
    summary : GraphSummary
        Output of summarize()
    connectivity : Dict[str, Any]
        Output of connectivity_summary()
    validation : Dict[str, Any], optional
        Output of statistical_validation()
    title : str
        Report title

    Returns
    -------
    md : str
        Markdown-formatted report
    """
    r = summary.radius
    md = f"# {title}\n\n"

    # ---------------------------------------------------------------------
    # Build statistics
    # ---------------------------------------------------------------------
    md += "## Graph Statistics\n"
    md += f"- **Mode**: {'directed' if stats.directed else 'symmetric'}\n"
    md += f"- **Vertices (keys)**: {stats.n_vertices}\n"
    md += f"- **Unique vertices**: {stats.n_unique_vertices}\n"
    md += f"- **Edges read**: {stats.n_edges}\n"
    md += f"- **Skipped lines**: {stats.n_skipped}\n"
    for line_no, text in stats.skipped[:10]:
        md += f"  - line {line_no}: `{text}`\n"
    md += "\n"

    # ---------------------------------------------------------------------
    # Connectivity
    # ---------------------------------------------------------------------
    md += "## Connectivity\n"
    md += f"- Connected components: **{connectivity['n_components']}**\n"
    md += f"- Giant component nodes: **{connectivity['giant_nodes']}**\n"
    md += f"- Fraction in giant component: **{connectivity['giant_fraction']:.3f}**\n"
    md += f"- Isolates: {connectivity['n_isolates']}\n"
    if connectivity["isolates"]:
        preview_iso = ", ".join(str(v) for v in connectivity["isolates"][:10])
        md += f"  - Examples: {preview_iso}\n"
    md += "\n"

    # ---------------------------------------------------------------------
    # Degree ranking
    # ---------------------------------------------------------------------
    md += "## Top Vertices by Number of Neighbors\n"
    for v, count in summary.top_degrees:
        md += f"- {v}: {count}\n"
    md += "\n"

    # ---------------------------------------------------------------------
    # Distances
    # ---------------------------------------------------------------------
    md += "## Distances\n"
    md += f"- Mean distance: **{_fmt_float(summary.mean_distance)}**\n"
    md += f"- Mode distance: {summary.mode_distance if summary.mode_distance is not None else 'undefined'}\n"
    md += f"- Max distance: {summary.max_distance if summary.max_distance is not None else 'undefined'}\n"
    if summary.distance_histogram:
        md += "\n| Hops | Pairs |\n|---:|---:|\n"
        for hops, pairs in summary.distance_histogram.items():
            md += f"| {hops} | {pairs} |\n"
    md += "\n"

    # ---------------------------------------------------------------------
    # Radius reachability
    # ---------------------------------------------------------------------
    md += f"## Within {r} Degrees\n"
    md += f"- Largest web: vertex **{summary.largest_web_vertex}** reaching **{summary.largest_web_size}** vertices (self included)\n"
    md += f"- Average percentage within {r} degrees: **{_fmt_float(summary.within_radius_pct, '.2f')}%**\n"
    md += f"- Mode connection count: {summary.mode_connection_count}\n"
    md += "\n"

    # ---------------------------------------------------------------------
    # Validation
    # ---------------------------------------------------------------------
    if validation:
        md += "## Statistical Validation\n"
        dd = validation.get("degree_distribution", {})
        if "note" in dd:
            md += f"- Degree distribution: _{dd['note']}_\n"
        else:
            md += (
                f"- Degree distribution AIC: power-law {dd['power_law_aic']:.2f}, "
                f"exponential {dd['exponential_aic']:.2f} "
                f"(favors power-law: {dd['favors_power_law']})\n"
            )
        corr = validation.get("degree_web_correlation", {})
        if "note" in corr:
            md += f"- Degree vs web size: _{corr['note']}_\n"
        else:
            md += f"- Degree vs web size (Spearman): {corr['correlation']:.3f} (p={corr['p_value']:.3g})\n"
        md += "\n"

    return md
