"""Public API for running a full two-condition analysis."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import pandas as pd

from surveystats.analysis.balance import ExploratoryCell, balance_checks, predictor_outcome_grid
from surveystats.analysis.config import AnalysisConfig
from surveystats.analysis.measures import MeasureAnalysis, analyze_measures
from surveystats.analysis.preprocess import measure_samples, split_conditions
from surveystats.analysis.progression import MeasureProgression, progression_by_measure
from surveystats.design import StudyDesign, default_design, load_design
from surveystats.stats.hypotheses import HypothesisResult, evaluate_hypotheses

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisReport:
    """Everything computed for one response table."""

    design: StudyDesign
    config: AnalysisConfig
    n_a: int
    n_b: int
    measures: List[MeasureAnalysis]
    hypotheses: List[HypothesisResult]
    balance: List[Any] = field(default_factory=list)
    exploratory: List[ExploratoryCell] = field(default_factory=list)
    progression: List[MeasureProgression] = field(default_factory=list)

    def measures_with_role(self, *roles: str) -> List[MeasureAnalysis]:
        return [m for m in self.measures if m.measure.role in roles]

    def measure(self, key: str) -> MeasureAnalysis:
        for m in self.measures:
            if m.key == key:
                return m
        raise KeyError(f"Unknown measure: {key}")


def run_analysis(
    df: pd.DataFrame,
    design: Optional[StudyDesign] = None,
    config: Optional[AnalysisConfig] = None,
) -> AnalysisReport:
    """Run the complete analysis pipeline on a response table.

    Args:
        df: One row per participant with the condition column and measures
        design: Study design (default: bundled formality study)
        config: Analysis configuration (default: AnalysisConfig())

    Returns:
        AnalysisReport

    Notes:
        - Every non-baseline measure enters one correction family
          (Holm-Bonferroni by default); baseline measures keep raw p-values
        - Hypotheses are classified from the corrected t-tests of their measures

    Example:
        >>> from surveystats.analysis import run_analysis
        >>> report = run_analysis(responses)
        >>> for hyp in report.hypotheses:
        ...     print(hyp.hypothesis.id, hyp.supported.value)
    """
    design = design or default_design()
    config = config or AnalysisConfig()

    group_a, group_b = split_conditions(df, design.conditions)
    logger.info(
        "Analyzing %s: %d %s vs %d %s",
        design.name,
        len(group_a),
        design.conditions.group_a,
        len(group_b),
        design.conditions.group_b,
    )

    samples = {m.key: measure_samples(group_a, group_b, m.key) for m in design.measures}
    measures = analyze_measures(design.measures, samples, config)

    results_by_key = {m.key: m.as_measure_result() for m in measures if m.in_family}
    hypotheses = evaluate_hypotheses(design.hypotheses, results_by_key)

    for hyp in hypotheses:
        logger.info("%s: %s", hyp.hypothesis.id, hyp.summary)

    return AnalysisReport(
        design=design,
        config=config,
        n_a=len(group_a),
        n_b=len(group_b),
        measures=measures,
        hypotheses=hypotheses,
        balance=balance_checks(df, design, config),
        exploratory=predictor_outcome_grid(df, design, config) if config.include_exploratory else [],
        progression=progression_by_measure(df, design, config) if config.include_progression else [],
    )


def run_analysis_from_files(
    data_path: Union[Path, str],
    design_path: Optional[Union[Path, str]] = None,
    config: Optional[AnalysisConfig] = None,
) -> AnalysisReport:
    """Load a response table (and optionally a design file) and analyze it."""
    from surveystats.data import load_table

    df = load_table(Path(data_path))
    design = load_design(design_path) if design_path is not None else default_design()
    return run_analysis(df, design, config)
