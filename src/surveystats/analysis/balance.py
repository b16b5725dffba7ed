"""Randomization balance checks and exploratory predictor x outcome tests."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd

from surveystats.analysis.config import AnalysisConfig
from surveystats.analysis.preprocess import category_labels, finite_values, split_conditions
from surveystats.design.models import MeasureSpec, PredictorSpec, StudyDesign
from surveystats.stats.descriptive import descriptive_stats
from surveystats.stats.results import ChiSquareResult, DescriptiveStats, TTestResult
from surveystats.stats.tests import (
    chi_square_2xk,
    one_way_anova,
    spearman_correlation,
    welch_ttest,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CategoricalBalance:
    """Category counts by condition with a 2xK chi-square test."""

    predictor: PredictorSpec
    counts_a: Dict[str, int]
    counts_b: Dict[str, int]
    chi: ChiSquareResult

    def to_dict(self) -> Dict[str, Any]:
        return {
            "predictor": self.predictor.key,
            "label": self.predictor.label,
            "type": "categorical",
            "n_a": sum(self.counts_a.values()),
            "n_b": sum(self.counts_b.values()),
            "statistic": self.chi.chi2,
            "df": self.chi.df,
            "p_value": self.chi.p_value,
        }


@dataclass(frozen=True)
class ContinuousBalance:
    """Welch t-test of a continuous characteristic between conditions."""

    predictor: PredictorSpec
    stats_a: DescriptiveStats
    stats_b: DescriptiveStats
    t_test: Optional[TTestResult]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "predictor": self.predictor.key,
            "label": self.predictor.label,
            "type": "continuous",
            "n_a": self.stats_a.n,
            "n_b": self.stats_b.n,
            "statistic": self.t_test.t if self.t_test else np.nan,
            "df": self.t_test.df if self.t_test else np.nan,
            "p_value": self.t_test.p_value if self.t_test else np.nan,
        }


@dataclass(frozen=True)
class ExploratoryCell:
    """One predictor x outcome test."""

    predictor: PredictorSpec
    outcome: MeasureSpec
    test: str
    p_value: float
    effect_size: float
    effect_label: str
    n: int
    n_groups: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "predictor": self.predictor.key,
            "outcome": self.outcome.key,
            "type": self.predictor.type,
            "test": self.test,
            "effect": f"{self.effect_label} = {self.effect_size:.2f}",
            "p_value": self.p_value,
            "n": self.n,
            "n_groups": self.n_groups,
        }


def count_categories(series: pd.Series) -> Dict[str, int]:
    """Count category labels in first-seen order; blanks count as "Unknown"."""
    return dict(Counter(category_labels(series)))


def categorical_balance(
    df: pd.DataFrame, design: StudyDesign, predictor: PredictorSpec
) -> CategoricalBalance:
    """Chi-square test of a categorical characteristic across conditions."""
    group_a, group_b = split_conditions(df, design.conditions)
    counts_a = count_categories(group_a[predictor.key])
    counts_b = count_categories(group_b[predictor.key])
    return CategoricalBalance(
        predictor=predictor,
        counts_a=counts_a,
        counts_b=counts_b,
        chi=chi_square_2xk(counts_a, counts_b),
    )


def continuous_balance(
    df: pd.DataFrame, design: StudyDesign, predictor: PredictorSpec, config: AnalysisConfig
) -> ContinuousBalance:
    """Welch t-test of a continuous characteristic across conditions.

    ``t_test`` is None when either group is below ``min_n_two_sample``.
    """
    group_a, group_b = split_conditions(df, design.conditions)
    x = finite_values(group_a[predictor.key])
    y = finite_values(group_b[predictor.key])

    enough = len(x) >= config.min_n_two_sample and len(y) >= config.min_n_two_sample
    return ContinuousBalance(
        predictor=predictor,
        stats_a=descriptive_stats(x),
        stats_b=descriptive_stats(y),
        t_test=welch_ttest(x, y) if enough else None,
    )


def balance_checks(
    df: pd.DataFrame, design: StudyDesign, config: AnalysisConfig
) -> List[Any]:
    """Run balance checks for every predictor flagged ``balance: true``."""
    out: List[Any] = []
    for predictor in design.predictors:
        if not predictor.balance:
            continue
        if predictor.key not in df.columns:
            logger.warning("Balance predictor '%s' not found in data", predictor.key)
            continue
        if predictor.type == "continuous":
            out.append(continuous_balance(df, design, predictor, config))
        else:
            out.append(categorical_balance(df, design, predictor))
    return out


def _condition_rows(df: pd.DataFrame, design: StudyDesign) -> pd.DataFrame:
    group_a, group_b = split_conditions(df, design.conditions)
    return pd.concat([group_a, group_b])


def _continuous_cell(
    predictor: PredictorSpec, outcome: MeasureSpec, x: pd.Series, y: pd.Series
) -> ExploratoryCell:
    res = spearman_correlation(x.to_numpy(dtype=float), y.to_numpy(dtype=float))
    return ExploratoryCell(
        predictor=predictor,
        outcome=outcome,
        test="Spearman",
        p_value=res.p_value,
        effect_size=res.r,
        effect_label="rho",
        n=res.n,
    )


def _categorical_cell(
    predictor: PredictorSpec,
    outcome: MeasureSpec,
    categories: List[Optional[str]],
    y: pd.Series,
    config: AnalysisConfig,
) -> Optional[ExploratoryCell]:
    by_cat: Dict[str, List[float]] = {}
    for cat, val in zip(categories, y.tolist()):
        by_cat.setdefault(cat or "Unknown", []).append(float(val))

    groups = [g for g in by_cat.values() if len(g) >= config.min_category_n]
    if len(groups) < 2:
        return None

    if len(groups) == 2:
        res = welch_ttest(groups[0], groups[1])
        test, p_val, effect, label = "Welch t-test", res.p_value, res.cohens_d, "d"
    else:
        anova = one_way_anova(groups)
        test, p_val, effect, label = "ANOVA", anova.p_value, anova.eta_sq, "eta_sq"

    return ExploratoryCell(
        predictor=predictor,
        outcome=outcome,
        test=test,
        p_value=p_val,
        effect_size=effect,
        effect_label=label,
        n=len(y),
        n_groups=len(groups),
    )


def predictor_outcome_grid(
    df: pd.DataFrame, design: StudyDesign, config: AnalysisConfig
) -> List[ExploratoryCell]:
    """Exploratory predictor x outcome tests across both conditions pooled.

    Continuous predictors use Spearman correlation. Categorical predictors
    compare outcome means across categories with at least
    ``min_category_n`` observations: Welch t-test for two categories,
    one-way ANOVA for more. Cells with fewer than ``min_pairs`` complete
    pairs are skipped. No multiple-comparison correction is applied.
    """
    rows = _condition_rows(df, design)
    if len(rows) < config.min_pairs:
        return []

    outcomes = design.measures_with_role("outcome", "manipulation", "exploratory")
    cells: List[ExploratoryCell] = []

    for predictor in design.predictors:
        if predictor.key not in rows.columns:
            logger.warning("Predictor '%s' not found in data", predictor.key)
            continue

        for outcome in outcomes:
            if outcome.key not in rows.columns:
                continue

            y_all = pd.to_numeric(rows[outcome.key], errors="coerce")

            if predictor.type == "continuous":
                x_all = pd.to_numeric(rows[predictor.key], errors="coerce")
                mask = np.isfinite(x_all.to_numpy(dtype=float)) & np.isfinite(
                    y_all.to_numpy(dtype=float)
                )
                if mask.sum() < config.min_pairs:
                    continue
                cells.append(_continuous_cell(predictor, outcome, x_all[mask], y_all[mask]))
            else:
                labels = category_labels(rows[predictor.key], missing=None)
                mask = np.array(
                    [lab is not None for lab in labels], dtype=bool
                ) & np.isfinite(y_all.to_numpy(dtype=float))
                if mask.sum() < config.min_pairs:
                    continue
                kept = [lab for lab, keep in zip(labels, mask) if keep]
                cell = _categorical_cell(predictor, outcome, kept, y_all[mask], config)
                if cell is not None:
                    cells.append(cell)

    return cells
