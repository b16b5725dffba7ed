"""Cumulative per-batch progression of a measure's t-test."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd

from surveystats.analysis.config import AnalysisConfig
from surveystats.analysis.preprocess import finite_values
from surveystats.design.models import MeasureSpec, StudyDesign
from surveystats.stats.tests import welch_ttest

logger = logging.getLogger(__name__)

NO_BATCH = "No Batch"


@dataclass(frozen=True)
class ProgressionPoint:
    """State of the comparison after adding one more batch."""

    batch_label: str
    batch_step: int
    batch_participants: int
    cumulative_participants: int
    n_a: int
    n_b: int
    p_value: Optional[float]
    significant: Optional[bool]
    cohens_d: Optional[float]

    @property
    def step_label(self) -> str:
        return f"B{self.batch_step}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "batch": self.batch_label,
            "step": self.step_label,
            "batch_n": self.batch_participants,
            "cumulative_n": self.cumulative_participants,
            "n_a": self.n_a,
            "n_b": self.n_b,
            "p_value": self.p_value,
            "significant": self.significant,
            "cohens_d": self.cohens_d,
        }


@dataclass(frozen=True)
class MeasureProgression:
    measure: MeasureSpec
    points: List[ProgressionPoint]


def batch_labels(series: pd.Series) -> pd.Series:
    """Normalize batch labels; blanks and missing values become "No Batch"."""

    def _label(value: Any) -> str:
        if pd.isna(value):
            return NO_BATCH
        text = str(value).strip()
        return text if text else NO_BATCH

    return series.map(_label)


def order_batches(df: pd.DataFrame, batch_col: str, timestamp_col: Optional[str]) -> List[str]:
    """Order batches by their earliest timestamp, then by label.

    Batches without a parseable timestamp sort last.
    """
    labels = batch_labels(df[batch_col])
    if timestamp_col and timestamp_col in df.columns:
        ts = pd.to_datetime(df[timestamp_col], errors="coerce", utc=True)
    else:
        ts = pd.Series(pd.NaT, index=df.index, dtype="datetime64[ns, UTC]")

    earliest = pd.DataFrame({"batch": labels, "ts": ts}).groupby("batch", sort=False)["ts"].min()

    def _key(label: str):
        value = earliest.get(label)
        missing = value is None or pd.isna(value)
        return (missing, value.value if not missing else 0, label)

    return sorted(earliest.index.tolist(), key=_key)


def measure_progression(
    df: pd.DataFrame, design: StudyDesign, measure: MeasureSpec, config: AnalysisConfig
) -> MeasureProgression:
    """Recompute Welch's t-test cumulatively as batches are added.

    Points before both groups reach ``min_n_two_sample`` carry no p-value.
    Significance here is uncorrected.
    """
    cond = design.conditions
    batch_col = design.batch_column
    rows = df[df[cond.column].astype(str).str.strip().isin([cond.group_a, cond.group_b])]

    batches = batch_labels(rows[batch_col])
    ordered = order_batches(rows, batch_col, design.timestamp_column)
    condition = rows[cond.column].astype(str).str.strip()

    cum_a: List[np.ndarray] = []
    cum_b: List[np.ndarray] = []
    points = []

    for step, label in enumerate(ordered, start=1):
        in_batch = batches == label
        batch_a = finite_values(rows.loc[in_batch & (condition == cond.group_a), measure.key])
        batch_b = finite_values(rows.loc[in_batch & (condition == cond.group_b), measure.key])
        cum_a.append(batch_a)
        cum_b.append(batch_b)

        x = np.concatenate(cum_a)
        y = np.concatenate(cum_b)

        p_val = significant = d = None
        if len(x) >= config.min_n_two_sample and len(y) >= config.min_n_two_sample:
            res = welch_ttest(x, y)
            p_val = res.p_value
            significant = p_val < config.alpha
            d = res.cohens_d

        points.append(
            ProgressionPoint(
                batch_label=label,
                batch_step=step,
                batch_participants=len(batch_a) + len(batch_b),
                cumulative_participants=len(x) + len(y),
                n_a=len(x),
                n_b=len(y),
                p_value=p_val,
                significant=significant,
                cohens_d=d,
            )
        )

    return MeasureProgression(measure=measure, points=points)


def progression_by_measure(
    df: pd.DataFrame, design: StudyDesign, config: AnalysisConfig
) -> List[MeasureProgression]:
    """Progression for every non-baseline measure present in the data.

    Returns an empty list when the design has no batch column or the data
    lacks it.
    """
    if not design.batch_column or design.batch_column not in df.columns:
        logger.info("No batch column; skipping progression")
        return []

    out = []
    for measure in design.measures_with_role("outcome", "manipulation", "exploratory"):
        if measure.key not in df.columns:
            continue
        out.append(measure_progression(df, design, measure, config))
    return out
