from __future__ import annotations

"""
Config loading utilities for sixdeg.

Per-graph analysis settings are read from:

    data/{graph}/config/analysis.ini

falling back to config_default/analysis.ini, then to the built-in values in
utils/constants.py. Example:

    [analysis]
    radius = 6
    top_n = 5
    strategy = processes
    workers = 4
    bfs_timeout = 30
    directed = false
    strict = false
    samples = 5

Unknown keys are ignored; invalid values are reported and the default kept.
"""

import configparser
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, List, Optional

from .constants import (
    CONFIG_FILENAME,
    CONFIG_SECTION,
    DEFAULT_EDGE_FILE,
    DEFAULT_RADIUS,
    DEFAULT_SAMPLES,
    DEFAULT_STRATEGY,
    DEFAULT_TOP_N,
    STRATEGIES,
)

DEFAULT_CONFIG_DIR = Path("config_default")


@dataclass
class AnalysisConfig:
    """Settings for one analysis run."""

    radius: int = DEFAULT_RADIUS
    top_n: int = DEFAULT_TOP_N
    strategy: str = DEFAULT_STRATEGY
    workers: Optional[int] = None
    bfs_timeout: Optional[float] = None
    directed: bool = False
    strict: bool = False
    samples: int = DEFAULT_SAMPLES


def _read_option(section: configparser.SectionProxy, name: str, default: Any) -> Any:
    raw = section.get(name)
    if raw is None or raw.strip() == "":
        return default

    try:
        if name in ("radius", "top_n", "samples"):
            value = section.getint(name)
            if value < 0:
                raise ValueError("must be >= 0")
            return value
        if name == "workers":
            value = section.getint(name)
            if value < 1:
                raise ValueError("must be >= 1")
            return value
        if name == "bfs_timeout":
            value = section.getfloat(name)
            if value <= 0:
                raise ValueError("must be > 0")
            return value
        if name in ("directed", "strict"):
            return section.getboolean(name)
        if name == "strategy" and raw.strip() not in STRATEGIES:
            raise ValueError(f"expected one of {', '.join(STRATEGIES)}")
        return raw.strip()
    except ValueError as e:
        print(f"[WARN] Invalid value for '{name}' in {CONFIG_FILENAME} ({raw!r}): {e}; using {default!r}")
        return default


def parse_analysis_ini(path: Path) -> AnalysisConfig:
    """
    Parse one analysis.ini into an AnalysisConfig.
    A missing file or missing [analysis] section yields the defaults.
    """
    cfg = AnalysisConfig()
    if not path.exists():
        return cfg

    parser = configparser.ConfigParser()
    try:
        parser.read(path, encoding="utf-8")
    except configparser.Error as e:
        print(f"[WARN] Could not parse {path}: {e}; using defaults.")
        return cfg

    if not parser.has_section(CONFIG_SECTION):
        print(f"[WARN] No [{CONFIG_SECTION}] section in {path}; using defaults.")
        return cfg

    section = parser[CONFIG_SECTION]
    known = {f.name for f in fields(AnalysisConfig)}
    for key in section:
        if key not in known:
            print(f"[WARN] Ignoring unknown key '{key}' in {path}")

    values: Dict[str, Any] = {
        f.name: _read_option(section, f.name, getattr(cfg, f.name))
        for f in fields(AnalysisConfig)
    }
    return AnalysisConfig(**values)


def load_analysis_config(base_dir: Optional[Path], default_dir: Path = DEFAULT_CONFIG_DIR) -> AnalysisConfig:
    """
    Load analysis settings for a graph base directory.

    Parameters
    ----------
    base_dir : Path, optional
        Typically data/{graph-name}; None skips the per-graph file.
    default_dir : Path
        Directory holding the fallback analysis.ini.
    """
    candidates: List[Path] = []
    if base_dir is not None:
        candidates.append(base_dir / "config" / CONFIG_FILENAME)
    candidates.append(default_dir / CONFIG_FILENAME)

    for path in candidates:
        if path.exists():
            print(f"[INFO] Loading analysis config from {path}")
            return parse_analysis_ini(path)

    print("[INFO] No analysis.ini found – proceeding with built-in defaults.")
    return AnalysisConfig()


def resolve_base_dir(graph_name: Optional[str], data_location: Optional[str], *, create: bool = False) -> Path:
    """
    Resolve the base directory: --data-location wins over data/{graph_name}.

    Raises:
        SystemExit if neither is provided.
    """
    if data_location:
        base = Path(data_location)
    elif graph_name:
        base = Path("data") / graph_name
    else:
        raise SystemExit("Please provide either --graph-name or --data-location.")

    if create:
        base.mkdir(parents=True, exist_ok=True)
    return base.resolve()


def find_edge_file(base_dir: Path) -> Optional[Path]:
    """First existing edge list under base_dir (plain or gzipped, any *.txt as last resort)."""
    candidates = [
        base_dir / DEFAULT_EDGE_FILE,
        base_dir / f"{DEFAULT_EDGE_FILE}.gz",
        base_dir / "edges.txt",
    ]
    found = next((p for p in candidates if p.exists()), None)
    if found is not None:
        return found
    return next(iter(sorted(base_dir.glob("*.txt"))), None)
