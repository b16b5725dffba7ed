"""Statistical tests (parametric and nonparametric).

All tests take clean numeric samples and return immutable result objects.
Under-powered input yields a degenerate result (zero effect, p = 1) rather
than an exception; malformed input raises ``InvalidInputError``.
"""

from __future__ import annotations

import math
from typing import Hashable, Iterable, List, Mapping, Sequence, Tuple

import numpy as np
from scipy import stats

from surveystats.stats.effects import cohen_d, eta_squared, rank_biserial
from surveystats.stats.results import (
    NEUTRAL_LEVENE,
    NEUTRAL_MANN_WHITNEY,
    NEUTRAL_TTEST,
    AnovaResult,
    ChiSquareResult,
    CorrelationResult,
    LeveneResult,
    MannWhitneyResult,
    TTestResult,
)
from surveystats.stats.validation import InvalidInputError, as_paired, as_sample


def _finite_p(p_val: float) -> float:
    """Map a missing p-value to 1 and clamp to [0, 1]."""
    p_val = float(p_val)
    if not np.isfinite(p_val):
        return 1.0
    return min(max(p_val, 0.0), 1.0)


def welch_ttest(a: Iterable[float], b: Iterable[float]) -> TTestResult:
    """Perform Welch's t-test (unequal variances).

    Args:
        a: Group A values
        b: Group B values

    Returns:
        TTestResult. ``mean_diff`` is mean(a) - mean(b); ``cohens_d`` uses the
        pooled SD; ``ci95`` is the Welch 95% interval for ``mean_diff``.

    Notes:
        Returns a neutral result if either group has fewer than 2 values.
    """
    x, y = as_sample(a, "a"), as_sample(b, "b")
    n1, n2 = len(x), len(y)

    if n1 < 2 or n2 < 2:
        return NEUTRAL_TTEST

    diff = float(np.mean(x)) - float(np.mean(y))
    se1 = float(np.var(x, ddof=1)) / n1
    se2 = float(np.var(y, ddof=1)) / n2
    se = math.sqrt(se1 + se2)

    if se == 0:
        # Both groups constant
        dof = float(n1 + n2 - 2)
        if diff == 0:
            return TTestResult(t=0.0, df=dof, p_value=1.0, mean_diff=0.0, cohens_d=0.0, ci95=(0.0, 0.0))
        return TTestResult(
            t=math.copysign(math.inf, diff),
            df=dof,
            p_value=0.0,
            mean_diff=diff,
            cohens_d=cohen_d(x, y),
            ci95=(diff, diff),
        )

    t_stat, p_val = stats.ttest_ind(x, y, equal_var=False)

    # Welch-Satterthwaite degrees of freedom
    dof = (se1 + se2) ** 2 / (se1 ** 2 / (n1 - 1) + se2 ** 2 / (n2 - 1))
    t_crit = float(stats.t.ppf(0.975, dof))

    return TTestResult(
        t=float(t_stat),
        df=float(dof),
        p_value=_finite_p(p_val),
        mean_diff=diff,
        cohens_d=cohen_d(x, y),
        ci95=(diff - t_crit * se, diff + t_crit * se),
    )


def mann_whitney_u(a: Iterable[float], b: Iterable[float]) -> MannWhitneyResult:
    """Perform the Mann-Whitney U test with a normal approximation.

    Args:
        a: Group A values
        b: Group B values

    Returns:
        MannWhitneyResult with ``u`` the statistic for group A

    Notes:
        - Ties receive the average rank of their block
        - The variance of U is tie-corrected; no continuity correction
        - z and rank_biserial_r are positive when group A tends to be larger
        - All values tied gives z = 0, p = 1, r = 0
    """
    x, y = as_sample(a, "a"), as_sample(b, "b")
    n1, n2 = len(x), len(y)

    if n1 == 0 or n2 == 0:
        return NEUTRAL_MANN_WHITNEY

    if np.ptp(np.concatenate([x, y])) == 0:
        return MannWhitneyResult(u=n1 * n2 / 2.0, z=0.0, p_value=1.0, rank_biserial_r=0.0)

    res = stats.mannwhitneyu(
        x, y, use_continuity=False, alternative="two-sided", method="asymptotic"
    )
    u1 = float(res.statistic)
    p_val = _finite_p(res.pvalue)

    # Recover z from the two-sided p-value; the sign follows U - E[U]
    z = 0.0
    if p_val < 1.0:
        z = math.copysign(float(stats.norm.isf(p_val / 2.0)), u1 - n1 * n2 / 2.0)

    return MannWhitneyResult(
        u=u1,
        z=z,
        p_value=p_val,
        rank_biserial_r=rank_biserial(u1, n1, n2),
    )


def _sums_of_squares(groups: Sequence[np.ndarray]) -> Tuple[float, float]:
    """Return (SS_between, SS_within) for a one-way layout."""
    grand_mean = float(np.mean(np.concatenate(groups)))
    ss_between = float(sum(len(g) * (np.mean(g) - grand_mean) ** 2 for g in groups))
    ss_within = float(sum(np.sum((g - np.mean(g)) ** 2) for g in groups))
    return ss_between, ss_within


def _degenerate_f(ss_between: float) -> Tuple[float, float]:
    """F and p when there is no within-group variance."""
    if ss_between > 0:
        return math.inf, 0.0
    return 0.0, 1.0


def levene_test(a: Iterable[float], b: Iterable[float]) -> LeveneResult:
    """Perform Levene's test for equal variances (Brown-Forsythe variant).

    Absolute deviations from each group's median are compared with a
    one-way ANOVA.

    Returns:
        LeveneResult with df1 = 1 and df2 = n_a + n_b - 2

    Notes:
        Returns a neutral result if either group has fewer than 2 values.
    """
    x, y = as_sample(a, "a"), as_sample(b, "b")
    if len(x) < 2 or len(y) < 2:
        return NEUTRAL_LEVENE

    df1, df2 = 1, len(x) + len(y) - 2
    deviations = [np.abs(x - np.median(x)), np.abs(y - np.median(y))]
    ss_between, ss_within = _sums_of_squares(deviations)

    if ss_within == 0:
        W, p_val = _degenerate_f(ss_between)
    else:
        W, p_val = stats.levene(x, y, center="median")

    return LeveneResult(w=float(W), df1=df1, df2=df2, p_value=_finite_p(p_val))


def one_way_anova(groups: Sequence[Iterable[float]]) -> AnovaResult:
    """Perform one-way ANOVA.

    Args:
        groups: Sequence of group samples

    Returns:
        AnovaResult with eta_sq = SS_between / SS_total

    Notes:
        Empty groups are dropped. Fewer than 2 non-empty groups, or no
        within-group degrees of freedom, yields F = 0 and p = 1.
        Zero within-group variance yields F = inf, p = 0 when the group
        means differ.
    """
    arrays = [as_sample(g, f"group[{i}]") for i, g in enumerate(groups)]
    arrays = [g for g in arrays if len(g) > 0]

    means = tuple(float(np.mean(g)) for g in arrays)
    ns = tuple(len(g) for g in arrays)
    k = len(arrays)
    n = sum(ns)

    if k < 2 or n <= k:
        return AnovaResult(
            f=0.0,
            df_between=max(k - 1, 0),
            df_within=max(n - k, 0),
            p_value=1.0,
            eta_sq=0.0,
            group_means=means,
            group_ns=ns,
        )

    ss_between, ss_within = _sums_of_squares(arrays)
    if ss_within == 0:
        F, p_val = _degenerate_f(ss_between)
    else:
        F, p_val = stats.f_oneway(*arrays)

    return AnovaResult(
        f=float(F),
        df_between=k - 1,
        df_within=n - k,
        p_value=_finite_p(p_val),
        eta_sq=eta_squared(ss_between, ss_between + ss_within),
        group_means=means,
        group_ns=ns,
    )


def chi_square_2xk(
    counts_a: Mapping[Hashable, float], counts_b: Mapping[Hashable, float]
) -> ChiSquareResult:
    """Chi-square test of independence for 2 groups x K categories.

    Args:
        counts_a: Category -> count for group A
        counts_b: Category -> count for group B

    Returns:
        ChiSquareResult with df = K - 1

    Notes:
        - Categories are the union of both key sets; a category missing from
          one mapping counts as zero in that row
        - Empty-string and None category names are ignored; other keys,
          including 0, are kept
        - Categories with a zero column total carry no information and do not
          count toward K
        - Degenerate tables (no categories, an empty row, K < 2) give
          chi2 = 0, df = 0, p = 1
    """
    categories: List[Hashable] = []
    for key in list(counts_a) + list(counts_b):
        if key is None or (isinstance(key, str) and key == ""):
            continue
        if key not in categories:
            categories.append(key)

    observed = np.array(
        [
            [counts_a.get(cat, 0) for cat in categories],
            [counts_b.get(cat, 0) for cat in categories],
        ],
        dtype=float,
    ).reshape(2, len(categories))

    if not np.all(np.isfinite(observed)):
        raise InvalidInputError("Category counts must be finite")
    if np.any(observed < 0):
        raise InvalidInputError("Category counts must be non-negative")

    n = int(observed.sum())
    observed = observed[:, observed.sum(axis=0) > 0]
    k = observed.shape[1]

    if k < 2 or np.any(observed.sum(axis=1) == 0):
        return ChiSquareResult(chi2=0.0, df=0, p_value=1.0, n=n)

    chi2, p_val, dof, _ = stats.chi2_contingency(observed, correction=False)

    return ChiSquareResult(chi2=float(chi2), df=int(dof), p_value=_finite_p(p_val), n=n)


def _correlation(x: np.ndarray, y: np.ndarray, method) -> CorrelationResult:
    n = len(x)
    if n < 3 or np.ptp(x) == 0 or np.ptp(y) == 0:
        return CorrelationResult(r=0.0, p_value=1.0, n=n)

    r, p_val = method(x, y)
    r = max(-1.0, min(1.0, float(r)))
    if abs(r) >= 1.0:
        p_val = 0.0

    return CorrelationResult(r=r, p_value=_finite_p(p_val), n=n)


def pearson_correlation(x: Iterable[float], y: Iterable[float]) -> CorrelationResult:
    """Pearson product-moment correlation.

    Fewer than 3 pairs or a constant sample gives r = 0, p = 1.

    Raises:
        InvalidInputError: If x and y differ in length
    """
    xa, ya = as_paired(x, y)
    return _correlation(xa, ya, stats.pearsonr)


def spearman_correlation(x: Iterable[float], y: Iterable[float]) -> CorrelationResult:
    """Spearman rank correlation.

    Ties get mid-ranks; p uses the t-approximation on n - 2 degrees of
    freedom. Fewer than 3 pairs or a constant sample gives r = 0, p = 1.

    Raises:
        InvalidInputError: If x and y differ in length
    """
    xa, ya = as_paired(x, y)
    return _correlation(xa, ya, stats.spearmanr)
