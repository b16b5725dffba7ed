"""Descriptive statistics for a single sample."""

from __future__ import annotations

from typing import Iterable

import numpy as np

from surveystats.stats.results import DescriptiveStats
from surveystats.stats.validation import as_sample


def mean(values: Iterable[float]) -> float:
    """Arithmetic mean; 0.0 for an empty sample."""
    x = as_sample(values)
    return float(np.mean(x)) if len(x) > 0 else 0.0


def variance(values: Iterable[float], ddof: int = 1) -> float:
    """Sample variance; 0.0 when ``n <= ddof``."""
    x = as_sample(values)
    if len(x) <= ddof:
        return 0.0
    return float(np.var(x, ddof=ddof))


def std(values: Iterable[float], ddof: int = 1) -> float:
    """Sample standard deviation; 0.0 when ``n <= ddof``."""
    return float(np.sqrt(variance(values, ddof=ddof)))


def sem(values: Iterable[float]) -> float:
    """Standard error of the mean; 0.0 for an empty sample."""
    x = as_sample(values)
    if len(x) == 0:
        return 0.0
    return std(x) / float(np.sqrt(len(x)))


def descriptive_stats(values: Iterable[float]) -> DescriptiveStats:
    """Compute descriptive statistics for one sample.

    Args:
        values: Finite numbers, possibly empty

    Returns:
        DescriptiveStats. An empty sample yields an all-zero result so that
        callers can render it without branching on emptiness.

    Notes:
        - std uses Bessel's correction and is 0.0 for n <= 1
        - median averages the two central order statistics for even n
        - q1/q3 interpolate linearly between order statistics
    """
    x = as_sample(values)
    n = len(x)

    if n == 0:
        return DescriptiveStats(n=0, mean=0.0, std=0.0, median=0.0, min=0.0, max=0.0)

    sd = float(np.std(x, ddof=1)) if n > 1 else 0.0

    return DescriptiveStats(
        n=n,
        mean=float(np.mean(x)),
        std=sd,
        median=float(np.median(x)),
        min=float(np.min(x)),
        max=float(np.max(x)),
        sem=sd / float(np.sqrt(n)),
        q1=float(np.percentile(x, 25)),
        q3=float(np.percentile(x, 75)),
    )
