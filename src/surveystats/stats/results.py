"""Result types returned by the statistics engine.

Every result is an immutable value created fresh on each call.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Tuple


class _AsDict:
    def to_dict(self) -> Dict[str, Any]:
        """Return a plain-dict view suitable for tables and JSON."""
        return asdict(self)


@dataclass(frozen=True)
class DescriptiveStats(_AsDict):
    """Summary of a single sample.

    Attributes:
        n: Number of observations
        mean: Arithmetic mean
        std: Sample standard deviation (n - 1 denominator)
        median: Median
        min: Smallest observation
        max: Largest observation
        sem: Standard error of the mean
        q1: First quartile (linear interpolation)
        q3: Third quartile (linear interpolation)
    """

    n: int
    mean: float
    std: float
    median: float
    min: float
    max: float
    sem: float = 0.0
    q1: float = 0.0
    q3: float = 0.0


@dataclass(frozen=True)
class TTestResult(_AsDict):
    """Welch's t-test comparing group A against group B."""

    t: float
    df: float
    p_value: float
    mean_diff: float
    cohens_d: float
    ci95: Tuple[float, float]


@dataclass(frozen=True)
class MannWhitneyResult(_AsDict):
    """Mann-Whitney U test; ``u`` is the statistic for group A."""

    u: float
    z: float
    p_value: float
    rank_biserial_r: float


@dataclass(frozen=True)
class LeveneResult(_AsDict):
    """Brown-Forsythe variant of Levene's test."""

    w: float
    df1: int
    df2: int
    p_value: float


@dataclass(frozen=True)
class ShapiroResult(_AsDict):
    """Shapiro-Wilk normality test."""

    w: float
    p_value: float
    is_normal: bool


@dataclass(frozen=True)
class AnovaResult(_AsDict):
    """One-way ANOVA over k groups."""

    f: float
    df_between: int
    df_within: int
    p_value: float
    eta_sq: float
    group_means: Tuple[float, ...] = field(default_factory=tuple)
    group_ns: Tuple[int, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ChiSquareResult(_AsDict):
    """Chi-square test of independence on a 2xK table."""

    chi2: float
    df: int
    p_value: float
    n: int = 0


@dataclass(frozen=True)
class CorrelationResult(_AsDict):
    """Rank or product-moment correlation with a two-tailed p-value."""

    r: float
    p_value: float
    n: int


NEUTRAL_TTEST = TTestResult(t=0.0, df=0.0, p_value=1.0, mean_diff=0.0, cohens_d=0.0, ci95=(0.0, 0.0))
NEUTRAL_MANN_WHITNEY = MannWhitneyResult(u=0.0, z=0.0, p_value=1.0, rank_biserial_r=0.0)
NEUTRAL_LEVENE = LeveneResult(w=0.0, df1=0, df2=0, p_value=1.0)
NEUTRAL_SHAPIRO = ShapiroResult(w=1.0, p_value=1.0, is_normal=True)
