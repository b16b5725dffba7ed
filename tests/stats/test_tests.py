"""Tests for two-sample, ANOVA, chi-square and correlation tests."""

from __future__ import annotations

import math

import numpy as np
import pytest
from scipy import stats

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


def _two_groups(seed: int = 0):
    rng = np.random.default_rng(seed)
    return rng.normal(0.0, 1.0, 25), rng.normal(0.8, 2.0, 18)


# Welch t-test

def test_welch_known_example(welch_example):
    """Hand-checked example: equal variances, so df is n1 + n2 - 2."""
    a, b = welch_example
    res = welch_ttest(a, b)

    assert res.mean_diff == pytest.approx(2.6)
    assert res.df == pytest.approx(8.0)
    assert res.t == pytest.approx(2.6 / math.sqrt(0.28))
    assert res.cohens_d == pytest.approx(2.6 / math.sqrt(0.7))
    assert res.cohens_d > 1.5
    assert res.p_value < 0.01
    assert res.ci95[0] < 2.6 < res.ci95[1]


def test_welch_matches_scipy():
    a, b = _two_groups()
    res = welch_ttest(a, b)
    ref = stats.ttest_ind(a, b, equal_var=False)

    assert res.t == pytest.approx(ref.statistic)
    assert res.p_value == pytest.approx(ref.pvalue)


def test_welch_ci_uses_t_quantile():
    a, b = _two_groups(1)
    res = welch_ttest(a, b)
    se = math.sqrt(np.var(a, ddof=1) / len(a) + np.var(b, ddof=1) / len(b))
    half = stats.t.ppf(0.975, res.df) * se

    assert res.ci95[0] == pytest.approx(res.mean_diff - half)
    assert res.ci95[1] == pytest.approx(res.mean_diff + half)


def test_welch_swapping_groups_negates():
    a, b = _two_groups(2)
    forward = welch_ttest(a, b)
    backward = welch_ttest(b, a)

    assert backward.t == pytest.approx(-forward.t)
    assert backward.mean_diff == pytest.approx(-forward.mean_diff)
    assert backward.cohens_d == pytest.approx(-forward.cohens_d)
    assert backward.p_value == pytest.approx(forward.p_value)


@pytest.mark.parametrize("a,b", [([], [1.0, 2.0]), ([1.0], [1.0, 2.0, 3.0]), ([1.0, 2.0], [3.0])])
def test_welch_too_few_values_is_neutral(a, b):
    res = welch_ttest(a, b)
    assert res.t == 0.0
    assert res.df == 0.0
    assert res.p_value == 1.0
    assert res.mean_diff == 0.0
    assert res.ci95 == (0.0, 0.0)


def test_welch_identical_samples_show_no_difference():
    a = [2.0, 4.0, 5.0, 7.0, 9.0]
    res = welch_ttest(a, list(a))

    assert res.t == pytest.approx(0.0)
    assert res.p_value == pytest.approx(1.0)
    assert res.mean_diff == 0.0
    assert res.cohens_d == 0.0


def test_welch_identical_constant_groups():
    res = welch_ttest([3.0, 3.0, 3.0], [3.0, 3.0])
    assert res.t == 0.0
    assert res.p_value == 1.0


def test_welch_constant_groups_with_different_means():
    res = welch_ttest([4.0, 4.0, 4.0], [2.0, 2.0])
    assert res.t == math.inf
    assert res.p_value == 0.0
    assert res.mean_diff == pytest.approx(2.0)


def test_welch_rejects_non_finite():
    with pytest.raises(InvalidInputError):
        welch_ttest([1.0, float("nan"), 3.0], [1.0, 2.0])


# Mann-Whitney U

def test_mann_whitney_matches_scipy():
    a, b = _two_groups(3)
    res = mann_whitney_u(a, b)
    ref = stats.mannwhitneyu(a, b, use_continuity=False, alternative="two-sided", method="asymptotic")

    assert res.u == pytest.approx(ref.statistic)
    assert res.p_value == pytest.approx(ref.pvalue)


def test_mann_whitney_with_ties_matches_scipy():
    a = [1, 2, 2, 3, 3, 3, 4, 5]
    b = [2, 3, 3, 4, 4, 5, 5, 6, 6]
    res = mann_whitney_u(a, b)
    ref = stats.mannwhitneyu(a, b, use_continuity=False, alternative="two-sided", method="asymptotic")

    assert res.u == pytest.approx(ref.statistic)
    assert res.p_value == pytest.approx(ref.pvalue)


def test_mann_whitney_complete_separation():
    res = mann_whitney_u([10.0, 11.0, 12.0, 13.0], [1.0, 2.0, 3.0])
    assert res.u == pytest.approx(12.0)
    assert res.rank_biserial_r == pytest.approx(1.0)
    assert res.z > 0

    swapped = mann_whitney_u([1.0, 2.0, 3.0], [10.0, 11.0, 12.0, 13.0])
    assert swapped.rank_biserial_r == pytest.approx(-1.0)
    assert swapped.p_value == pytest.approx(res.p_value)


def test_mann_whitney_z_matches_normal_approximation():
    a, b = _two_groups(8)
    res = mann_whitney_u(a, b)
    n1, n2 = len(a), len(b)
    expected_z = (res.u - n1 * n2 / 2.0) / math.sqrt(n1 * n2 * (n1 + n2 + 1) / 12.0)

    assert res.z == pytest.approx(expected_z)


def test_mann_whitney_all_tied_is_neutral():
    res = mann_whitney_u([2.0, 2.0, 2.0], [2.0, 2.0])
    assert res.z == 0.0
    assert res.p_value == 1.0
    assert res.rank_biserial_r == 0.0


def test_mann_whitney_empty_group():
    res = mann_whitney_u([], [1.0, 2.0])
    assert res.p_value == 1.0


# Levene

def test_levene_matches_scipy_median_center():
    a, b = _two_groups(4)
    res = levene_test(a, b)
    ref = stats.levene(a, b, center="median")

    assert res.w == pytest.approx(ref.statistic)
    assert res.p_value == pytest.approx(ref.pvalue)
    assert res.df1 == 1
    assert res.df2 == len(a) + len(b) - 2


def test_levene_detects_unequal_spread():
    rng = np.random.default_rng(5)
    res = levene_test(rng.normal(0, 1, 60), rng.normal(0, 5, 60))
    assert res.p_value < 0.001


def test_levene_zero_spread_within_groups():
    # Deviations from each median are constant, so W is degenerate
    assert levene_test([1.0, 1.0], [2.0, 2.0]).p_value == 1.0
    spread = levene_test([1.0, 3.0], [5.0, 5.0])
    assert spread.w == math.inf
    assert spread.p_value == 0.0


def test_levene_too_few_values():
    res = levene_test([1.0], [1.0, 2.0])
    assert res.p_value == 1.0
    assert res.df2 == 0


# One-way ANOVA

def test_anova_matches_scipy():
    rng = np.random.default_rng(6)
    groups = [rng.normal(m, 1.0, 12) for m in (0.0, 0.5, 1.5)]
    res = one_way_anova(groups)
    ref = stats.f_oneway(*groups)

    assert res.f == pytest.approx(ref.statistic)
    assert res.p_value == pytest.approx(ref.pvalue)
    assert res.df_between == 2
    assert res.df_within == 33
    assert 0.0 < res.eta_sq < 1.0
    assert res.group_ns == (12, 12, 12)


def test_anova_drops_empty_groups():
    res = one_way_anova([[1.0, 2.0, 3.0], [], [4.0, 5.0, 6.0]])
    assert res.df_between == 1
    assert res.group_ns == (3, 3)


def test_anova_constant_groups():
    res = one_way_anova([[2.0, 2.0], [5.0, 5.0, 5.0]])
    assert res.f == math.inf
    assert res.p_value == 0.0
    assert res.eta_sq == pytest.approx(1.0)

    same = one_way_anova([[3.0, 3.0], [3.0, 3.0]])
    assert same.f == 0.0
    assert same.p_value == 1.0


def test_anova_single_group_is_degenerate():
    res = one_way_anova([[1.0, 2.0, 3.0]])
    assert res.f == 0.0
    assert res.p_value == 1.0
    assert res.eta_sq == 0.0


# Chi-square

def test_chi_square_matches_scipy():
    counts_a = {"Female": 12, "Male": 9, "Other": 3}
    counts_b = {"Female": 7, "Male": 14, "Other": 2}
    res = chi_square_2xk(counts_a, counts_b)
    ref = stats.chi2_contingency([[12, 9, 3], [7, 14, 2]], correction=False)

    assert res.chi2 == pytest.approx(ref[0])
    assert res.p_value == pytest.approx(ref[1])
    assert res.df == 2
    assert res.n == 47


def test_chi_square_missing_categories_count_as_zero():
    res = chi_square_2xk({"x": 10, "y": 5}, {"y": 6, "z": 4})
    ref = stats.chi2_contingency([[10, 5, 0], [0, 6, 4]], correction=False)
    assert res.chi2 == pytest.approx(ref[0])
    assert res.df == 2


def test_chi_square_zero_columns_do_not_count():
    res = chi_square_2xk({"x": 10, "y": 5, "z": 0}, {"x": 4, "y": 9, "z": 0})
    assert res.df == 1


def test_chi_square_identical_rows():
    res = chi_square_2xk({"M": 10, "F": 10}, {"M": 10, "F": 10})
    assert res.chi2 == pytest.approx(0.0)
    assert res.p_value == pytest.approx(1.0)
    assert res.df == 1


def test_chi_square_keeps_integer_categories():
    res = chi_square_2xk({0: 5, 1: 3}, {0: 2, 1: 6})
    ref = stats.chi2_contingency([[5, 3], [2, 6]], correction=False)

    assert res.df == 1
    assert res.chi2 == pytest.approx(ref[0])
    assert res.p_value == pytest.approx(ref[1])


def test_chi_square_ignores_blank_category():
    res = chi_square_2xk({"": 4, "x": 5, "y": 2}, {"": 9, "x": 1, "y": 6})
    assert res.df == 1


def test_chi_square_degenerate_tables():
    assert chi_square_2xk({}, {}).p_value == 1.0
    assert chi_square_2xk({"x": 5}, {"x": 7}).df == 0
    assert chi_square_2xk({"x": 5, "y": 2}, {}).chi2 == 0.0


def test_chi_square_rejects_negative_counts():
    with pytest.raises(InvalidInputError):
        chi_square_2xk({"x": -1, "y": 2}, {"x": 3, "y": 4})


# Correlation

def test_pearson_matches_scipy():
    rng = np.random.default_rng(7)
    x = rng.normal(size=30)
    y = 0.5 * x + rng.normal(size=30)
    res = pearson_correlation(x, y)
    ref = stats.pearsonr(x, y)

    assert res.r == pytest.approx(ref[0])
    assert res.p_value == pytest.approx(ref[1], rel=1e-6)
    assert res.n == 30


def test_spearman_matches_scipy_with_ties():
    x = [1, 2, 2, 3, 4, 5, 5, 6, 7, 8]
    y = [2, 1, 3, 3, 5, 4, 6, 8, 7, 9]
    res = spearman_correlation(x, y)
    ref = stats.spearmanr(x, y)

    assert res.r == pytest.approx(ref[0])
    assert res.p_value == pytest.approx(ref[1], rel=1e-6)


def test_spearman_perfect_monotone():
    res = spearman_correlation([1, 2, 3, 4, 5], [1, 4, 9, 16, 25])
    assert res.r == pytest.approx(1.0)
    assert res.p_value < 1e-6


def test_spearman_reversed_order():
    x = [3.0, 1.0, 4.0, 1.5, 5.0, 9.0, 2.0, 6.0]
    res = spearman_correlation(x, [-v for v in x])
    assert res.r == pytest.approx(-1.0)

    ordered = list(range(10))
    assert spearman_correlation(ordered, ordered[::-1]).r == pytest.approx(-1.0)


def test_correlation_degenerate_inputs():
    assert pearson_correlation([1.0, 2.0], [2.0, 1.0]).p_value == 1.0
    constant = spearman_correlation([1.0, 1.0, 1.0, 1.0], [1.0, 2.0, 3.0, 4.0])
    assert constant.r == 0.0
    assert constant.p_value == 1.0


def test_correlation_length_mismatch():
    with pytest.raises(InvalidInputError):
        pearson_correlation([1.0, 2.0, 3.0], [1.0, 2.0])
    with pytest.raises(InvalidInputError):
        spearman_correlation([1.0, 2.0, 3.0], [1.0, 2.0])
