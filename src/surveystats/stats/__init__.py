"""Statistics engine for two-condition survey experiments.

This module provides pure, deterministic functions over clean numeric samples:

- Descriptive statistics (n, mean, SD, median, quartiles, min/max)
- Two-sample tests (Welch t-test, Mann-Whitney U, Levene/Brown-Forsythe)
- Normality testing (Shapiro-Wilk)
- k-sample and association tests (one-way ANOVA, 2xK chi-square,
  Spearman and Pearson correlation)
- Multiple-comparison correction (Holm-Bonferroni and friends)
- Hypothesis aggregation (supported / partial / opposite / not supported)

Public API:
-----------
from surveystats.stats import welch_ttest, holm_correction

result = welch_ttest([5, 6, 7, 6, 5], [3, 4, 3, 2, 4])
adjusted = holm_correction([0.01, 0.04, 0.03])
"""

from surveystats.stats.correction import ADJUST_METHODS, adjust_pvalues, holm_correction
from surveystats.stats.descriptive import descriptive_stats, mean, sem, std, variance
from surveystats.stats.effects import (
    cohen_d,
    interpret_cohens_d,
    interpret_rank_biserial,
    partial_eta_squared,
)
from surveystats.stats.hypotheses import (
    HypothesisResult,
    MeasureResult,
    Support,
    evaluate_hypotheses,
    evaluate_hypothesis,
)
from surveystats.stats.normality import shapiro_wilk
from surveystats.stats.results import (
    AnovaResult,
    ChiSquareResult,
    CorrelationResult,
    DescriptiveStats,
    LeveneResult,
    MannWhitneyResult,
    ShapiroResult,
    TTestResult,
)
from surveystats.stats.tests import (
    chi_square_2xk,
    levene_test,
    mann_whitney_u,
    one_way_anova,
    pearson_correlation,
    spearman_correlation,
    welch_ttest,
)
from surveystats.stats.validation import InvalidInputError

__all__ = [
    "ADJUST_METHODS",
    "adjust_pvalues",
    "holm_correction",
    "descriptive_stats",
    "mean",
    "sem",
    "std",
    "variance",
    "cohen_d",
    "interpret_cohens_d",
    "interpret_rank_biserial",
    "partial_eta_squared",
    "HypothesisResult",
    "MeasureResult",
    "Support",
    "evaluate_hypotheses",
    "evaluate_hypothesis",
    "shapiro_wilk",
    "AnovaResult",
    "ChiSquareResult",
    "CorrelationResult",
    "DescriptiveStats",
    "LeveneResult",
    "MannWhitneyResult",
    "ShapiroResult",
    "TTestResult",
    "chi_square_2xk",
    "levene_test",
    "mann_whitney_u",
    "one_way_anova",
    "pearson_correlation",
    "spearman_correlation",
    "welch_ttest",
    "InvalidInputError",
]
