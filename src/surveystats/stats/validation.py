"""Input validation for the statistics engine."""

from __future__ import annotations

from typing import Iterable, Tuple

import numpy as np


class InvalidInputError(ValueError):
    """Raised when a test receives malformed input.

    Under-powered input (too few observations) never raises; it yields a
    degenerate result instead. This error is reserved for input that would
    silently produce a misleading statistic: non-numeric or non-finite values,
    mismatched paired samples, p-values outside [0, 1] and negative counts.
    """


def as_sample(values: Iterable[float], name: str = "sample") -> np.ndarray:
    """Copy ``values`` into a fresh 1-D float array.

    Raises:
        InvalidInputError: If any value is non-numeric, NaN or infinite.
    """
    try:
        raw = np.asarray(list(values))
    except ValueError as exc:
        raise InvalidInputError(f"{name} must be a flat sequence of numbers") from exc
    if raw.size and raw.dtype.kind not in "biuf":
        raise InvalidInputError(f"{name} contains non-numeric values")
    if raw.ndim > 1:
        raise InvalidInputError(f"{name} must be one-dimensional, got shape {raw.shape}")

    arr = raw.astype(float).reshape(-1)

    if not np.all(np.isfinite(arr)):
        bad = int(np.sum(~np.isfinite(arr)))
        raise InvalidInputError(f"{name} contains {bad} non-finite value(s)")

    return arr


def as_paired(
    x: Iterable[float], y: Iterable[float]
) -> Tuple[np.ndarray, np.ndarray]:
    """Validate two samples observed on the same units."""
    xa = as_sample(x, "x")
    ya = as_sample(y, "y")
    if len(xa) != len(ya):
        raise InvalidInputError(
            f"Paired samples must have equal length, got {len(xa)} and {len(ya)}"
        )
    return xa, ya


def as_pvalues(p_values: Iterable[float]) -> np.ndarray:
    """Validate a family of p-values."""
    arr = as_sample(p_values, "p_values")
    if np.any((arr < 0.0) | (arr > 1.0)):
        raise InvalidInputError("p-values must lie in [0, 1]")
    return arr
