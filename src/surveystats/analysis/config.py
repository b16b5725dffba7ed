"""Configuration dataclass for the analysis pipeline."""

from __future__ import annotations

from dataclasses import dataclass

from surveystats.stats.correction import ADJUST_METHODS


@dataclass
class AnalysisConfig:
    """Configuration for a two-condition analysis run.

    Attributes:
        alpha: Significance threshold for corrected p-values (default: 0.05)
        p_adjust: Correction applied across the measure family
            Options: holm, bonferroni, fdr_bh, fdr_by, sidak
        min_n_two_sample: Minimum n per group for two-sample tests (default: 2)
        min_n_normality: Minimum n per group for Shapiro-Wilk (default: 3)
        min_pairs: Minimum complete pairs for an exploratory
            predictor x outcome cell (default: 5)
        min_category_n: Minimum observations for a category to enter an
            exploratory group comparison (default: 2)
        include_progression: Whether to compute per-batch progression
        include_exploratory: Whether to compute the predictor x outcome grid
    """

    alpha: float = 0.05
    p_adjust: str = "holm"
    min_n_two_sample: int = 2
    min_n_normality: int = 3
    min_pairs: int = 5
    min_category_n: int = 2
    include_progression: bool = True
    include_exploratory: bool = True

    def __post_init__(self):
        """Validate configuration."""
        if self.alpha <= 0 or self.alpha >= 1:
            raise ValueError(f"Alpha must be in (0, 1), got {self.alpha}")

        if self.p_adjust not in ADJUST_METHODS:
            raise ValueError(
                f"p_adjust must be one of {list(ADJUST_METHODS)}, got {self.p_adjust}"
            )

        if self.min_n_two_sample < 2:
            raise ValueError(f"min_n_two_sample must be >= 2, got {self.min_n_two_sample}")

        if self.min_n_normality < 3:
            raise ValueError(f"min_n_normality must be >= 3, got {self.min_n_normality}")

        if self.min_pairs < 3:
            raise ValueError(f"min_pairs must be >= 3, got {self.min_pairs}")

        if self.min_category_n < 1:
            raise ValueError(f"min_category_n must be >= 1, got {self.min_category_n}")
