"""Tests for hypothesis classification."""

from __future__ import annotations

import pytest

from surveystats.design.models import Direction, Hypothesis
from surveystats.stats.hypotheses import (
    MeasureResult,
    Support,
    evaluate_hypotheses,
    evaluate_hypothesis,
)
from surveystats.stats.results import TTestResult
from surveystats.stats.tests import welch_ttest


def _result(key: str, mean_diff: float, significant: bool) -> MeasureResult:
    p = 0.001 if significant else 0.4
    t_test = TTestResult(
        t=mean_diff * 3, df=20.0, p_value=p, mean_diff=mean_diff, cohens_d=mean_diff, ci95=(0.0, 0.0)
    )
    return MeasureResult(key=key, t_test=t_test, adjusted_p=p, significant=significant)


def _hyp(direction: Direction, *keys: str) -> Hypothesis:
    return Hypothesis(id="H", label="H", direction=direction, dv_keys=keys)


def test_all_significant_in_direction_is_supported():
    hyp = _hyp(Direction.FORMAL_HIGHER, "a", "b")
    res = evaluate_hypothesis(hyp, [_result("a", 1.0, True), _result("b", 0.5, True)])

    assert res.supported == Support.YES
    assert res.summary == "Supported: All 2 measure(s) significant in predicted direction"


def test_some_in_direction_is_partial():
    hyp = _hyp(Direction.FORMAL_HIGHER, "a", "b")
    res = evaluate_hypothesis(hyp, [_result("a", 1.0, True), _result("b", 0.5, False)])

    assert res.supported == Support.PARTIAL
    assert res.summary == "Partially supported: 1/2 significant in predicted direction"


def test_partial_wins_over_opposite():
    hyp = _hyp(Direction.INFORMAL_HIGHER, "a", "b")
    res = evaluate_hypothesis(hyp, [_result("a", -1.0, True), _result("b", 2.0, True)])
    assert res.supported == Support.PARTIAL


def test_only_wrong_direction_is_opposite():
    hyp = _hyp(Direction.INFORMAL_HIGHER, "a")
    res = evaluate_hypothesis(hyp, [_result("a", 2.0, True)])

    assert res.supported == Support.OPPOSITE
    assert res.summary == "Opposite effect: 1 measure(s) significant in opposite direction"


def test_nothing_significant_is_not_supported():
    hyp = _hyp(Direction.FORMAL_HIGHER, "a", "b")
    res = evaluate_hypothesis(hyp, [_result("a", 1.0, False), _result("b", -1.0, False)])

    assert res.supported == Support.NO
    assert res.summary == "Not supported: No significant differences found"


def test_no_results_is_not_supported():
    res = evaluate_hypothesis(_hyp(Direction.FORMAL_HIGHER, "a"), [])
    assert res.supported == Support.NO


def test_exploratory_accepts_either_direction():
    hyp = _hyp(Direction.EXPLORATORY, "a", "b")
    res = evaluate_hypothesis(hyp, [_result("a", 1.0, True), _result("b", -1.0, True)])
    assert res.supported == Support.YES


def test_evaluate_hypotheses_skips_missing_measures(caplog):
    hyps = [_hyp(Direction.FORMAL_HIGHER, "a", "missing")]
    with caplog.at_level("WARNING"):
        out = evaluate_hypotheses(hyps, {"a": _result("a", 1.0, True)})

    assert len(out) == 1
    assert [r.key for r in out[0].per_measure_results] == ["a"]
    assert out[0].supported == Support.YES
    assert "missing" in caplog.text


def test_end_to_end_with_welch(welch_example):
    """Group A clearly higher: formal_higher is supported, informal_higher is opposite."""
    a, b = welch_example
    t_test = welch_ttest(a, b)
    result = MeasureResult(key="m", t_test=t_test, adjusted_p=t_test.p_value, significant=t_test.p_value < 0.05)

    assert evaluate_hypothesis(_hyp(Direction.FORMAL_HIGHER, "m"), [result]).supported == Support.YES
    assert evaluate_hypothesis(_hyp(Direction.INFORMAL_HIGHER, "m"), [result]).supported == Support.OPPOSITE


def test_hypothesis_result_to_dict():
    hyp = _hyp(Direction.FORMAL_HIGHER, "a")
    d = evaluate_hypothesis(hyp, [_result("a", 1.0, True)]).to_dict()

    assert d["supported"] == "yes"
    assert d["direction"] == "formal_higher"
    assert d["measures"] == ["a"]


def test_hypothesis_is_immutable():
    hyp = _hyp(Direction.FORMAL_HIGHER, "a")
    with pytest.raises(Exception):
        hyp.id = "other"
