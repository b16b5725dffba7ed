"""Multiple-comparison correction of p-value families."""

from __future__ import annotations

from typing import Iterable, List

from statsmodels.stats.multitest import multipletests

from surveystats.stats.validation import as_pvalues

ADJUST_METHODS = ("holm", "bonferroni", "fdr_bh", "fdr_by", "sidak")


def adjust_pvalues(p_values: Iterable[float], method: str = "holm") -> List[float]:
    """Adjust a family of p-values with statsmodels ``multipletests``.

    Args:
        p_values: Raw p-values
        method: One of holm, bonferroni, fdr_bh, fdr_by, sidak

    Returns:
        Adjusted p-values in the same order as the input

    Raises:
        ValueError: If the method is unknown
        InvalidInputError: If any p-value is non-finite or outside [0, 1]
    """
    if method not in ADJUST_METHODS:
        raise ValueError(f"method must be one of {list(ADJUST_METHODS)}, got {method}")

    pvals = as_pvalues(p_values)
    if len(pvals) == 0:
        return []

    _, adj, _, _ = multipletests(pvals, method=method)
    return [float(p) for p in adj]


def holm_correction(p_values: Iterable[float]) -> List[float]:
    """Holm-Bonferroni step-down adjustment.

    The i-th smallest raw p (1-indexed) is multiplied by m - i + 1, a running
    maximum keeps the adjusted values non-decreasing in raw-p order, and
    values are clamped to 1. Output order matches input order.

    Example:
        holm_correction([0.01, 0.04, 0.03])  # -> [0.03, 0.06, 0.06]
    """
    return adjust_pvalues(p_values, method="holm")
