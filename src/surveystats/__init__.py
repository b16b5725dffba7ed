"""
surveystats: Hypothesis testing toolkit for between-subjects survey experiments.

This package provides:
- A pure statistics engine (Welch t-test, Mann-Whitney U, Levene, Shapiro-Wilk,
  ANOVA, chi-square, Spearman, Holm-Bonferroni)
- Declarative study designs with pre-registered directional hypotheses
- A pandas analysis pipeline producing measure, hypothesis, balance,
  exploratory and progression tables
- A Typer CLI
"""

__version__ = "0.1.0"

from surveystats.stats import holm_correction, welch_ttest
from surveystats.design import StudyDesign, load_design, default_design
from surveystats.analysis import run_analysis, AnalysisConfig

__all__ = [
    "__version__",
    "holm_correction",
    "welch_ttest",
    "StudyDesign",
    "load_design",
    "default_design",
    "run_analysis",
    "AnalysisConfig",
]
