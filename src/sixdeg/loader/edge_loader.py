# src/sixdeg/loader/edge_loader.py

"""
Edge list loading.

Reads a line-oriented text file where each line holds two
whitespace-separated integers (SNAP edge list format, e.g.
facebook_combined.txt). Gzip-compressed files (*.gz) are read transparently.

Parsing and graph construction are delegated to build.graph_builder; this
module only turns a path into lines and maps OS errors to IoFailure.
"""

from __future__ import annotations

import gzip
from pathlib import Path
from typing import Iterator, Tuple, Union

from ..build.graph_builder import BuildStats, Graph, build_graph
from ..errors import IoFailure

PathLike = Union[str, Path]


def iter_edge_lines(path: PathLike) -> Iterator[str]:
    """
    Yield the raw lines of an edge list file.

    Raises
    ------
    IoFailure
        If the file is missing, unreadable, or fails mid-read.
    """
    path = Path(path)
    if not path.exists():
        raise IoFailure(f"Edge list not found: {path}")
    if path.is_dir():
        raise IoFailure(f"Edge list path is a directory: {path}")

    try:
        if path.suffix == ".gz":
            f = gzip.open(path, "rt", encoding="utf-8")
        else:
            f = open(path, "r", encoding="utf-8")
        with f:
            for line in f:
                yield line
    except (OSError, EOFError, UnicodeDecodeError) as e:
        raise IoFailure(f"Failed to read edge list {path}: {e}") from e


def load_graph(
    path: PathLike,
    *,
    directed: bool = False,
    strict: bool = False,
) -> Tuple[Graph, BuildStats]:
    """
    Unified entry point: read ``path`` and build the graph.

    Returns
    -------
    (Graph, BuildStats)
        BuildStats.n_skipped reports how many malformed lines were dropped.
    """
    return build_graph(iter_edge_lines(path), directed=directed, strict=strict)
