"""Normality testing with Shapiro-Wilk."""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

import numpy as np
from scipy import stats

from surveystats.stats.results import NEUTRAL_SHAPIRO, ShapiroResult
from surveystats.stats.validation import as_sample

logger = logging.getLogger(__name__)

SHAPIRO_MAX_N = 5000


def shapiro_wilk(values: Iterable[float], alpha: float = 0.05) -> ShapiroResult:
    """Perform the Shapiro-Wilk test.

    Uses Royston's (1995) approximation (algorithm AS R94) as implemented by
    ``scipy.stats.shapiro``, valid for 3 <= n <= 5000.

    Args:
        values: Sample values
        alpha: Threshold for the ``is_normal`` flag

    Returns:
        ShapiroResult with is_normal = p_value >= alpha

    Notes:
        - n < 3 is trivially normal: (W=1, p=1, is_normal=True)
        - Zero-range samples are reported the same way
        - Samples above 5000 are subsampled with a fixed seed
    """
    x = as_sample(values)
    n = len(x)

    if n < 3:
        return NEUTRAL_SHAPIRO

    if np.ptp(x) == 0:
        logger.debug("Shapiro-Wilk skipped for zero-range sample (n=%d)", n)
        return NEUTRAL_SHAPIRO

    if n > SHAPIRO_MAX_N:
        rng = np.random.default_rng(0)
        x = rng.choice(x, size=SHAPIRO_MAX_N, replace=False)

    W, p = stats.shapiro(x)
    W, p = float(W), float(p)
    return ShapiroResult(w=min(W, 1.0), p_value=p, is_normal=p >= alpha)


def normality_flag(results: Sequence[ShapiroResult], ns: Sequence[int], min_n: int = 3) -> str:
    """Determine an overall normality flag across groups.

    Returns:
        One of: "Normal", "Not normal", "Not tested"

    Logic:
        - "Not tested": No group had n >= min_n
        - "Normal": ALL groups with n >= min_n are normal
        - "Not normal": Otherwise
    """
    tested = [res for res, n in zip(results, ns) if n >= min_n]
    if not tested:
        return "Not tested"
    return "Normal" if all(res.is_normal for res in tested) else "Not normal"
