"""Extract clean numeric samples from a response table."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple

import numpy as np
import pandas as pd

from surveystats.design.models import ConditionSpec

logger = logging.getLogger(__name__)


def finite_values(series: pd.Series) -> np.ndarray:
    """Coerce a column to numbers and drop missing or non-finite entries.

    Numeric strings are parsed; anything else becomes missing.
    """
    values = pd.to_numeric(series, errors="coerce").to_numpy(dtype=float)
    return values[np.isfinite(values)]


def require_columns(df: pd.DataFrame, columns: Iterable[str]) -> None:
    """Raise ValueError listing any columns missing from ``df``."""
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise ValueError(
            f"Columns not found: {missing}. Available: {sorted(map(str, df.columns))[:10]}..."
        )


def split_conditions(
    df: pd.DataFrame, conditions: ConditionSpec
) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """Split responses into group A and group B rows.

    Rows whose condition is neither level are ignored.

    Raises:
        ValueError: If the condition column is missing
    """
    require_columns(df, [conditions.column])

    labels = df[conditions.column].astype(str).str.strip()
    group_a = df[labels == conditions.group_a]
    group_b = df[labels == conditions.group_b]

    other = len(df) - len(group_a) - len(group_b)
    if other:
        logger.info(
            "Ignoring %d row(s) outside conditions %s/%s",
            other,
            conditions.group_a,
            conditions.group_b,
        )

    return group_a, group_b


def measure_samples(
    group_a: pd.DataFrame, group_b: pd.DataFrame, key: str
) -> Tuple[np.ndarray, np.ndarray]:
    """Return the clean samples of measure ``key`` for both groups.

    A measure absent from the table yields two empty samples.
    """
    if key not in group_a.columns:
        logger.warning("Measure '%s' not found in data", key)
        return np.array([], dtype=float), np.array([], dtype=float)
    return finite_values(group_a[key]), finite_values(group_b[key])


def category_labels(series: pd.Series, missing: Optional[str] = "Unknown") -> List[Optional[str]]:
    """Normalize categorical values: strip whitespace, map blanks to ``missing``."""
    out: List[Optional[str]] = []
    for value in series.tolist():
        if pd.isna(value):
            out.append(missing)
            continue
        text = str(value).strip()
        out.append(text if text else missing)
    return out
