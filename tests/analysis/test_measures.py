"""Tests for per-measure analysis and family correction."""

from __future__ import annotations

import numpy as np
import pytest

from surveystats.analysis.config import AnalysisConfig
from surveystats.analysis.measures import analyze_measure, analyze_measures
from surveystats.design.models import MeasureSpec
from surveystats.stats.correction import holm_correction


def test_analyze_measure_runs_all_tests(welch_example):
    a, b = welch_example
    res = analyze_measure(MeasureSpec(key="m"), a, b, AnalysisConfig())

    assert res.stats_a.n == 5
    assert res.t_test.mean_diff == pytest.approx(2.6)
    assert res.mann_whitney.rank_biserial_r == pytest.approx(1.0)
    assert res.levene.df2 == 8
    assert res.normality in ("Normal", "Not normal")
    assert res.adjusted_p == res.t_test.p_value


def test_analyze_measure_gates_small_groups():
    res = analyze_measure(MeasureSpec(key="m"), [1.0], [2.0, 3.0], AnalysisConfig())

    assert res.t_test.p_value == 1.0
    assert res.mann_whitney.p_value == 1.0
    assert res.shapiro_a.is_normal
    assert res.normality == "Not tested"
    assert not res.significant


def test_analyze_measures_corrects_family_excluding_baseline():
    rng = np.random.default_rng(0)
    measures = [
        MeasureSpec(key="x"),
        MeasureSpec(key="y"),
        MeasureSpec(key="z", role="baseline"),
    ]
    samples = {
        "x": (rng.normal(0, 1, 20), rng.normal(1, 1, 20)),
        "y": (rng.normal(0, 1, 20), rng.normal(0.2, 1, 20)),
        "z": (rng.normal(0, 1, 20), rng.normal(0, 1, 20)),
    }
    out = analyze_measures(measures, samples, AnalysisConfig())

    raw = [out[0].t_test.p_value, out[1].t_test.p_value]
    assert [out[0].adjusted_p, out[1].adjusted_p] == pytest.approx(holm_correction(raw))
    assert not out[2].in_family
    assert out[2].adjusted_p == out[2].t_test.p_value


def test_missing_samples_are_neutral():
    out = analyze_measures([MeasureSpec(key="x")], {}, AnalysisConfig())
    assert out[0].stats_a.n == 0
    assert out[0].adjusted_p == 1.0


def test_to_dict_columns(welch_example):
    a, b = welch_example
    row = analyze_measure(MeasureSpec(key="m", label="M"), a, b, AnalysisConfig()).to_dict()

    assert row["measure"] == "m"
    assert row["label"] == "M"
    assert row["ci_low"] < row["mean_diff"] < row["ci_high"]
    assert {"mw_u", "levene_p", "shapiro_p_a", "normality"} <= set(row)


def test_config_validation():
    with pytest.raises(ValueError, match="Alpha"):
        AnalysisConfig(alpha=1.5)
    with pytest.raises(ValueError, match="p_adjust"):
        AnalysisConfig(p_adjust="tukey")
    with pytest.raises(ValueError):
        AnalysisConfig(min_n_two_sample=1)
