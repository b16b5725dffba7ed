"""Per-measure two-group comparisons with family-wise correction."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, List, Sequence

import numpy as np

from surveystats.analysis.config import AnalysisConfig
from surveystats.design.models import MeasureSpec
from surveystats.stats.correction import adjust_pvalues
from surveystats.stats.descriptive import descriptive_stats
from surveystats.stats.hypotheses import MeasureResult
from surveystats.stats.normality import normality_flag, shapiro_wilk
from surveystats.stats.results import (
    NEUTRAL_LEVENE,
    NEUTRAL_MANN_WHITNEY,
    NEUTRAL_SHAPIRO,
    NEUTRAL_TTEST,
    DescriptiveStats,
    LeveneResult,
    MannWhitneyResult,
    ShapiroResult,
    TTestResult,
)
from surveystats.stats.tests import levene_test, mann_whitney_u, welch_ttest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MeasureAnalysis:
    """All two-group statistics for one measure."""

    measure: MeasureSpec
    stats_a: DescriptiveStats
    stats_b: DescriptiveStats
    t_test: TTestResult
    mann_whitney: MannWhitneyResult
    levene: LeveneResult
    shapiro_a: ShapiroResult
    shapiro_b: ShapiroResult
    adjusted_p: float
    significant: bool
    in_family: bool = True

    @property
    def key(self) -> str:
        return self.measure.key

    @property
    def normality(self) -> str:
        return normality_flag(
            [self.shapiro_a, self.shapiro_b], [self.stats_a.n, self.stats_b.n]
        )

    def as_measure_result(self) -> MeasureResult:
        return MeasureResult(
            key=self.key,
            t_test=self.t_test,
            adjusted_p=self.adjusted_p,
            significant=self.significant,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "measure": self.key,
            "label": self.measure.label,
            "role": self.measure.role,
            "n_a": self.stats_a.n,
            "mean_a": self.stats_a.mean,
            "sd_a": self.stats_a.std,
            "n_b": self.stats_b.n,
            "mean_b": self.stats_b.mean,
            "sd_b": self.stats_b.std,
            "t": self.t_test.t,
            "df": self.t_test.df,
            "p_value": self.t_test.p_value,
            "p_adj": self.adjusted_p,
            "significant": self.significant,
            "mean_diff": self.t_test.mean_diff,
            "ci_low": self.t_test.ci95[0],
            "ci_high": self.t_test.ci95[1],
            "cohens_d": self.t_test.cohens_d,
            "mw_u": self.mann_whitney.u,
            "mw_p": self.mann_whitney.p_value,
            "rank_biserial_r": self.mann_whitney.rank_biserial_r,
            "levene_w": self.levene.w,
            "levene_p": self.levene.p_value,
            "shapiro_p_a": self.shapiro_a.p_value,
            "shapiro_p_b": self.shapiro_b.p_value,
            "normality": self.normality,
        }


def analyze_measure(
    measure: MeasureSpec,
    a: Iterable[float],
    b: Iterable[float],
    config: AnalysisConfig,
) -> MeasureAnalysis:
    """Run every two-group test for one measure.

    Tests whose minimum-n gate is not met return their degenerate result.
    Significance here is uncorrected; ``analyze_measures`` applies the
    family-wise correction.
    """
    x = np.asarray(list(a), dtype=float)
    y = np.asarray(list(b), dtype=float)
    n_a, n_b = len(x), len(y)

    two_sample = n_a >= config.min_n_two_sample and n_b >= config.min_n_two_sample
    if not two_sample:
        logger.debug(
            "Measure %s: two-sample tests skipped (n_a=%d, n_b=%d)", measure.key, n_a, n_b
        )

    t_test = welch_ttest(x, y) if two_sample else NEUTRAL_TTEST

    return MeasureAnalysis(
        measure=measure,
        stats_a=descriptive_stats(x),
        stats_b=descriptive_stats(y),
        t_test=t_test,
        mann_whitney=mann_whitney_u(x, y) if two_sample else NEUTRAL_MANN_WHITNEY,
        levene=levene_test(x, y) if two_sample else NEUTRAL_LEVENE,
        shapiro_a=(
            shapiro_wilk(x, alpha=config.alpha) if n_a >= config.min_n_normality else NEUTRAL_SHAPIRO
        ),
        shapiro_b=(
            shapiro_wilk(y, alpha=config.alpha) if n_b >= config.min_n_normality else NEUTRAL_SHAPIRO
        ),
        adjusted_p=t_test.p_value,
        significant=t_test.p_value < config.alpha,
    )


def correct_family(
    analyses: Sequence[MeasureAnalysis], config: AnalysisConfig
) -> List[MeasureAnalysis]:
    """Apply the configured correction across in-family measures.

    Measures outside the family keep their raw p-value as ``adjusted_p``.
    """
    family = [i for i, res in enumerate(analyses) if res.in_family]
    adjusted = adjust_pvalues([analyses[i].t_test.p_value for i in family], config.p_adjust)

    out = list(analyses)
    for i, p_adj in zip(family, adjusted):
        out[i] = replace(out[i], adjusted_p=p_adj, significant=p_adj < config.alpha)

    logger.info(
        "Corrected %d measure(s) with %s; %d significant at alpha=%.3g",
        len(family),
        config.p_adjust,
        sum(1 for i in family if out[i].significant),
        config.alpha,
    )
    return out


def analyze_measures(
    measures: Sequence[MeasureSpec],
    samples: Dict[str, tuple],
    config: AnalysisConfig,
) -> List[MeasureAnalysis]:
    """Analyze a family of measures and correct their p-values.

    Args:
        measures: Measures to analyze, in report order
        samples: Measure key -> (group A values, group B values)
        config: Analysis configuration

    Returns:
        One MeasureAnalysis per measure. Baseline measures are analyzed but
        excluded from the correction family.
    """
    analyses = []
    for measure in measures:
        a, b = samples.get(measure.key, ((), ()))
        res = analyze_measure(measure, a, b, config)
        if measure.role == "baseline":
            res = replace(res, in_family=False)
        analyses.append(res)

    return correct_family(analyses, config)
