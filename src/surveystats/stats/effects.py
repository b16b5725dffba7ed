"""Effect size calculations for two-group comparisons."""

from __future__ import annotations

from typing import Iterable

import numpy as np

from surveystats.stats.validation import as_sample


def pooled_std(a: Iterable[float], b: Iterable[float]) -> float:
    """Pooled standard deviation of two samples.

    Returns:
        sqrt(((n1 - 1) * s1^2 + (n2 - 1) * s2^2) / (n1 + n2 - 2)), or 0.0 when
        there are no pooled degrees of freedom.
    """
    x, y = as_sample(a, "a"), as_sample(b, "b")
    nx, ny = len(x), len(y)
    dof = nx + ny - 2
    if dof <= 0:
        return 0.0

    sx = float(np.var(x, ddof=1)) if nx > 1 else 0.0
    sy = float(np.var(y, ddof=1)) if ny > 1 else 0.0

    return float(np.sqrt(((nx - 1) * sx + (ny - 1) * sy) / dof))


def cohen_d(a: Iterable[float], b: Iterable[float]) -> float:
    """Calculate Cohen's d effect size.

    Args:
        a: First group values
        b: Second group values

    Returns:
        (mean(a) - mean(b)) / pooled SD

    Notes:
        Returns 0.0 if either group has fewer than 2 values or the pooled SD
        is zero.
    """
    x, y = as_sample(a, "a"), as_sample(b, "b")
    if len(x) < 2 or len(y) < 2:
        return 0.0

    sp = pooled_std(x, y)
    if sp <= 0:
        return 0.0

    return float((np.mean(x) - np.mean(y)) / sp)


def rank_biserial(u_a: float, n_a: int, n_b: int) -> float:
    """Rank-biserial correlation from the Mann-Whitney U of group A.

    Computed as r = 1 - 2 * U_b / (n_a * n_b) with U_b = n_a * n_b - U_a, so
    r > 0 when group A tends to be larger and swapping the groups negates r.
    """
    if n_a == 0 or n_b == 0:
        return 0.0
    u_b = n_a * n_b - u_a
    return 1.0 - (2.0 * u_b) / (n_a * n_b)


def eta_squared(ss_between: float, ss_total: float) -> float:
    """Proportion of total variance explained by group membership."""
    return ss_between / ss_total if ss_total > 0 else 0.0


def partial_eta_squared(ss_effect: float, ss_error: float) -> float:
    denom = ss_effect + ss_error
    return ss_effect / denom if denom > 0 else 0.0


def interpret_cohens_d(d: float) -> str:
    """Label |d| as negligible (<0.2), small (<0.5), medium (<0.8) or large."""
    abs_d = abs(d)
    if abs_d < 0.2:
        return "negligible"
    if abs_d < 0.5:
        return "small"
    if abs_d < 0.8:
        return "medium"
    return "large"


def interpret_rank_biserial(r: float) -> str:
    """Label |r| as negligible (<0.1), small (<0.3), medium (<0.5) or large."""
    abs_r = abs(r)
    if abs_r < 0.1:
        return "negligible"
    if abs_r < 0.3:
        return "small"
    if abs_r < 0.5:
        return "medium"
    return "large"
