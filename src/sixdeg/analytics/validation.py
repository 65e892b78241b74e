# src/sixdeg/analytics/validation.py

"""
Statistical validation utilities.

This module performs:

1. Degree distribution analysis:
      - Fit power-law and exponential distributions (SciPy)
      - Compare AIC values
      - Determine whether the degree sequence favors a power-law

2. Reachability correlation:
      - Spearman correlation between degree and web size

Fits that cannot be computed are reported as a "note" entry instead of
raising, so a report can always be rendered.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping

import numpy as np
from scipy import stats

from ..build.graph_builder import Graph

MIN_FIT_SAMPLES = 10
MIN_CORRELATION_SAMPLES = 5


def _degree_distribution_fit(degrees: np.ndarray) -> Dict[str, Any]:
    if len(degrees) <= MIN_FIT_SAMPLES:
        return {"note": "Insufficient sample size"}
    if np.all(degrees == degrees[0]):
        return {"note": "Degree sequence is constant"}

    try:
        powerlaw_params = stats.powerlaw.fit(degrees)
        exponential_params = stats.expon.fit(degrees)

        powerlaw_ll = stats.powerlaw.logpdf(degrees, *powerlaw_params).sum()
        exponential_ll = stats.expon.logpdf(degrees, *exponential_params).sum()
    except (ValueError, RuntimeError, FloatingPointError) as e:
        return {"note": f"Could not fit distributions: {e}"}

    powerlaw_aic = 2 * len(powerlaw_params) - 2 * powerlaw_ll
    exponential_aic = 2 * len(exponential_params) - 2 * exponential_ll
    if not (np.isfinite(powerlaw_aic) and np.isfinite(exponential_aic)):
        return {"note": "Could not fit distributions: non-finite likelihood"}

    return {
        "power_law_aic": float(powerlaw_aic),
        "exponential_aic": float(exponential_aic),
        "favors_power_law": bool(powerlaw_aic < exponential_aic),
    }


def _degree_web_correlation(degrees: np.ndarray, webs: np.ndarray) -> Dict[str, Any]:
    if len(degrees) <= MIN_CORRELATION_SAMPLES:
        return {"note": "Insufficient sample size"}
    if np.all(degrees == degrees[0]) or np.all(webs == webs[0]):
        return {"note": "Constant input; correlation undefined"}

    rho, p_value = stats.spearmanr(degrees, webs)
    return {
        "correlation": float(rho),
        "p_value": float(p_value),
    }


def statistical_validation(graph: Graph, web_sizes: Mapping[int, int]) -> Dict[str, Any]:
    """
    Perform statistical validation of degree and reachability structure.

    Parameters
    ----------
    graph : Graph
        Input graph.
    web_sizes : Mapping[int, int]
        Output of web_size_within_radius(); vertices missing from it are
        skipped in the correlation.

    Returns
    -------
    Dict[str, Any]
        Contains:
          - degree_distribution {...}
          - degree_web_correlation {...}
    """
    vertices = [v for v in graph if v in web_sizes]
    degrees = np.array([graph.degree(v) for v in graph], dtype=float)
    paired_degrees = np.array([graph.degree(v) for v in vertices], dtype=float)
    webs = np.array([web_sizes[v] for v in vertices], dtype=float)

    return {
        "degree_distribution": _degree_distribution_fit(degrees),
        "degree_web_correlation": _degree_web_correlation(paired_degrees, webs),
    }
