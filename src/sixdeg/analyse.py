#!/usr/bin/env python3
"""
Graph Connectivity Analysis
-------------------------------------------------------
Loads an edge list (e.g. SNAP facebook_combined.txt), builds the adjacency
list, computes all-pairs BFS hop distances, and reports neighbor counts,
degree ranking, mean/mode distance, web size and within-radius reachability
("six degrees"). Writes a Markdown report and per-vertex CSVs. Configurable
via analysis.ini and CLI (input path, output dir, radius, strategy, workers,
per-BFS timeout, validation, memory monitor).
"""

from __future__ import annotations

import argparse
import gc
import time
import warnings
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, Optional

# Optional memory monitoring
try:  # pragma: no cover
    import psutil
except Exception:  # pragma: no cover
    psutil = None

from .loader.edge_loader import load_graph
from .analytics.distances import all_distances, available_strategies
from .analytics.statistics import summarize
from .analytics.connectivity import connectivity_summary
from .analytics.validation import statistical_validation
from .report.report_basic import console_lines, render_report
from .report.csv_export import export_degree_ranking_csv, export_vertex_stats_csv
from .utils.config_loader import (
    AnalysisConfig,
    find_edge_file,
    load_analysis_config,
    resolve_base_dir,
)
from .errors import BfsTimeoutError, EmptyGraphError, IoFailure, MalformedInputError


# ──────────────────────────────────────────────────────────────────────────────
# CLI
# ──────────────────────────────────────────────────────────────────────────────


def _positive_int(text: str) -> int:
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {value}")
    return value


def _positive_float(text: str) -> float:
    value = float(text)
    if not value > 0:
        raise argparse.ArgumentTypeError(f"must be > 0, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Compute six-degrees connectivity statistics for an edge list.")
    p.add_argument(
        "--input",
        help="Path to an edge list (two integers per line, optionally .gz). If omitted, defaults to {base}/facebook_combined.txt when --graph-name/--data-location is provided.",
    )
    p.add_argument(
        "--graph-name",
        help="Graph name (uses data/{graph-name} as base when --input not given).",
    )
    p.add_argument(
        "--data-location",
        help="Explicit data directory (overrides --graph-name).",
    )
    p.add_argument(
        "--outdir",
        help="Output directory (default: {base}/analysis when graph/data specified, else data/analysis)",
    )
    p.add_argument("--radius", type=int, help="Hop radius for web size (default 6)")
    p.add_argument("--topk", type=int, dest="top_n", help="Rows in the degree ranking (default 5)")
    p.add_argument("--samples", type=int, help="Sample rows printed per section (default 5)")
    p.add_argument(
        "--strategy",
        choices=available_strategies(),
        help="Execution strategy for the all-pairs BFS pass",
    )
    p.add_argument("--workers", type=_positive_int, help="Pool size for threads/processes strategies")
    p.add_argument("--bfs-timeout", type=_positive_float, dest="bfs_timeout", help="Per-BFS deadline in seconds")
    p.add_argument(
        "--directed",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Insert edges in one direction only (default: symmetric, or analysis.ini)",
    )
    p.add_argument(
        "--strict",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Abort on the first malformed line instead of skipping it (default: skip, or analysis.ini)",
    )
    p.add_argument(
        "--validation",
        action="store_true",
        help="Fit the degree distribution and correlate degree with web size",
    )
    p.add_argument(
        "--memory-monitor",
        action="store_true",
        help="Enable memory usage monitoring and GC logging",
    )
    return p


def parse_args(argv=None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def merge_config(cfg: AnalysisConfig, args: argparse.Namespace) -> AnalysisConfig:
    """CLI flags that were given override the file/default values."""
    overrides = {
        name: getattr(args, name)
        for name in ("radius", "top_n", "samples", "strategy", "workers", "bfs_timeout", "directed", "strict")
        if getattr(args, name, None) is not None
    }
    return replace(cfg, **overrides)


# ──────────────────────────────────────────────────────────────────────────────
# Memory utilities
# ──────────────────────────────────────────────────────────────────────────────


def optimize_memory() -> None:
    """Force garbage collection and optionally log process memory usage."""
    gc.collect()
    if psutil is not None:
        proc = psutil.Process()
        mem_mb = proc.memory_info().rss / 1024 / 1024
        print(f"[MEMORY] After GC: {mem_mb:.1f} MB")
    else:
        print("[MEMORY] psutil not installed; memory usage unavailable")


# ──────────────────────────────────────────────────────────────────────────────
# Main orchestration
# ──────────────────────────────────────────────────────────────────────────────


def run_analysis(
    input_path: Path,
    outdir: Path,
    cfg: AnalysisConfig,
    *,
    validation: bool = False,
    memory_monitor: bool = False,
    title: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Load, compute, print and export. Returns the computed pieces so callers
    (and tests) can inspect them.

    Raises
    ------
    IoFailure
        Input unreadable.
    MalformedInputError
        Only when cfg.strict is set.
    EmptyGraphError
        The input contained no edges.
    """
    start_time = time.time()

    print(f"📥 Loading edges from {input_path}")
    graph, build_stats = load_graph(input_path, directed=cfg.directed, strict=cfg.strict)
    print(
        f"✅ Graph built: {build_stats.n_vertices} vertices, "
        f"{build_stats.n_edges} edges read, {build_stats.n_skipped} lines skipped "
        f"({'directed' if cfg.directed else 'symmetric'})"
    )
    if len(graph) == 0:
        raise EmptyGraphError(f"No edges found in {input_path}")

    print(f"🧭 All-pairs BFS ({cfg.strategy}) over {len(graph)} sources …")
    table = all_distances(graph, strategy=cfg.strategy, workers=cfg.workers, timeout=cfg.bfs_timeout)
    if memory_monitor:
        optimize_memory()

    print("📈 Statistics …")
    summary = summarize(graph, table, radius=cfg.radius, top_n=cfg.top_n)

    print("🔗 Connectivity analysis …")
    conn = connectivity_summary(graph)
    print(
        f"   Components: {conn['n_components']} | "
        f"Giant: {conn['giant_nodes']} ({conn['giant_fraction']:.2%}) | "
        f"Isolates: {conn['n_isolates']}"
    )

    validation_results: Dict[str, Any] = {}
    if validation:
        print("📊 Performing statistical validation …")
        with warnings.catch_warnings():
            warnings.filterwarnings("ignore", category=RuntimeWarning)
            validation_results = statistical_validation(graph, summary.web_sizes)
        print(f"   Validation complete ({len(validation_results)} sections).")

    print()
    for line in console_lines(graph, table, summary, samples=cfg.samples):
        print(line)
    print()

    outdir.mkdir(parents=True, exist_ok=True)
    export_vertex_stats_csv(graph, summary, outdir / "vertex_stats.csv")
    export_degree_ranking_csv(summary, outdir / "degree_ranking.csv")

    report_md = render_report(
        build_stats,
        summary,
        conn,
        validation=validation_results or None,
        title=title or f"{input_path.stem} Connectivity Summary",
    )
    report_path = outdir / "report.md"
    report_path.write_text(report_md, encoding="utf-8")
    print(f"📄 Saved report → {report_path}")

    elapsed = time.time() - start_time
    print(f"⏱️ Total execution time: {elapsed:.1f}s")

    return {
        "graph": graph,
        "build_stats": build_stats,
        "table": table,
        "summary": summary,
        "connectivity": conn,
        "validation": validation_results,
    }


def main(argv=None) -> None:
    args = parse_args(argv)
    base_dir: Optional[Path] = None
    if args.graph_name or args.data_location:
        base_dir = resolve_base_dir(args.graph_name, args.data_location, create=True)

    if args.input:
        input_path = Path(args.input)
    else:
        if base_dir is None:
            raise SystemExit("Please provide --input or --graph-name/--data-location to locate the edge list.")
        input_path = find_edge_file(base_dir)
        if input_path is None:
            raise SystemExit(f"Could not find an edge list in {base_dir}.")

    outdir = Path(args.outdir) if args.outdir else (base_dir / "analysis" if base_dir else Path("data/analysis"))

    cfg = merge_config(load_analysis_config(base_dir), args)

    try:
        run_analysis(
            input_path,
            outdir,
            cfg,
            validation=args.validation,
            memory_monitor=args.memory_monitor,
            title=f"{args.graph_name} Connectivity Summary" if args.graph_name else None,
        )
    except (IoFailure, MalformedInputError, EmptyGraphError, BfsTimeoutError) as e:
        raise SystemExit(f"❌ {e}")

    print("✔️ Analysis complete.")


if __name__ == "__main__":
    main()
