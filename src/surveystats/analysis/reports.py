"""Build report tables from an AnalysisReport."""

from __future__ import annotations

from datetime import datetime
from typing import Dict

import pandas as pd

from surveystats import __version__
from surveystats.analysis.api import AnalysisReport
from surveystats.stats.effects import interpret_cohens_d, interpret_rank_biserial


def build_run_manifest(report: AnalysisReport) -> pd.DataFrame:
    """Build run manifest table.

    Returns:
        DataFrame with metadata about the analysis run
    """
    cond = report.design.conditions
    rows = [
        {"parameter": "design", "value": report.design.name},
        {"parameter": "condition_column", "value": cond.column},
        {"parameter": "group_a", "value": cond.group_a},
        {"parameter": "group_b", "value": cond.group_b},
        {"parameter": f"n_{cond.group_a}", "value": report.n_a},
        {"parameter": f"n_{cond.group_b}", "value": report.n_b},
        {"parameter": "alpha", "value": report.config.alpha},
        {"parameter": "p_adjust", "value": report.config.p_adjust},
        {"parameter": "timestamp", "value": datetime.now().strftime("%Y-%m-%d %H:%M:%S")},
        {"parameter": "package_version", "value": __version__},
    ]
    return pd.DataFrame(rows, columns=["parameter", "value"])


def build_measure_table(report: AnalysisReport, *roles: str) -> pd.DataFrame:
    """One row per measure with descriptives, tests and effect sizes.

    Args:
        report: Analysis report
        roles: Optional subset of measure roles to include (default: all)
    """
    measures = report.measures_with_role(*roles) if roles else report.measures
    rows = []
    for m in measures:
        row = m.to_dict()
        row["d_magnitude"] = interpret_cohens_d(m.t_test.cohens_d)
        row["r_magnitude"] = interpret_rank_biserial(m.mann_whitney.rank_biserial_r)
        rows.append(row)
    return pd.DataFrame(rows)


def build_hypothesis_table(report: AnalysisReport) -> pd.DataFrame:
    """One row per hypothesis x measure with the verdict repeated per row."""
    rows = []
    for hyp in report.hypotheses:
        base = hyp.to_dict()
        base.pop("measures")
        if not hyp.per_measure_results:
            rows.append({**base, "measure": None, "mean_diff": None, "cohens_d": None, "p_adj": None})
            continue
        for res in hyp.per_measure_results:
            rows.append(
                {
                    **base,
                    "measure": res.key,
                    "mean_diff": res.t_test.mean_diff,
                    "cohens_d": res.t_test.cohens_d,
                    "p_adj": res.adjusted_p,
                    "significant": res.significant,
                }
            )
    return pd.DataFrame(rows)


def build_balance_table(report: AnalysisReport) -> pd.DataFrame:
    return pd.DataFrame([b.to_dict() for b in report.balance])


def build_exploratory_table(report: AnalysisReport) -> pd.DataFrame:
    """Predictor x outcome cells sorted by p-value (uncorrected)."""
    df = pd.DataFrame([c.to_dict() for c in report.exploratory])
    if df.empty:
        return df
    return df.sort_values("p_value", kind="mergesort").reset_index(drop=True)


def build_progression_table(report: AnalysisReport) -> pd.DataFrame:
    rows = []
    for prog in report.progression:
        for point in prog.points:
            rows.append({"measure": prog.measure.key, **point.to_dict()})
    return pd.DataFrame(rows)


def build_all_tables(report: AnalysisReport) -> Dict[str, pd.DataFrame]:
    """Return every report table keyed by section name."""
    return {
        "manifest": build_run_manifest(report),
        "hypotheses": build_hypothesis_table(report),
        "manipulation_checks": build_measure_table(report, "manipulation"),
        "measures": build_measure_table(report, "outcome", "exploratory"),
        "baseline": build_measure_table(report, "baseline"),
        "balance": build_balance_table(report),
        "exploratory": build_exploratory_table(report),
        "progression": build_progression_table(report),
    }
