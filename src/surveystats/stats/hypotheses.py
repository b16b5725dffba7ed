"""Map per-measure test results onto directional hypothesis verdicts."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Sequence, Tuple

from surveystats.design.models import Direction, Hypothesis
from surveystats.stats.results import TTestResult

logger = logging.getLogger(__name__)


class Support(str, Enum):
    """Verdict for a hypothesis."""

    YES = "yes"
    PARTIAL = "partial"
    NO = "no"
    OPPOSITE = "opposite"


@dataclass(frozen=True)
class MeasureResult:
    """Welch t-test for one measure together with its corrected significance."""

    key: str
    t_test: TTestResult
    adjusted_p: float
    significant: bool


@dataclass(frozen=True)
class HypothesisResult:
    hypothesis: Hypothesis
    per_measure_results: Tuple[MeasureResult, ...]
    supported: Support
    summary: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.hypothesis.id,
            "label": self.hypothesis.label,
            "direction": self.hypothesis.direction.value,
            "measures": [r.key for r in self.per_measure_results],
            "supported": self.supported.value,
            "summary": self.summary,
        }


def _in_direction(result: MeasureResult, direction: Direction) -> bool:
    diff = result.t_test.mean_diff
    if direction == Direction.FORMAL_HIGHER:
        return diff > 0
    if direction == Direction.INFORMAL_HIGHER:
        return diff < 0
    return True


def evaluate_hypothesis(
    hypothesis: Hypothesis, measure_results: Sequence[MeasureResult]
) -> HypothesisResult:
    """Classify a hypothesis from its measures' corrected t-tests.

    Args:
        hypothesis: Hypothesis with a predicted direction
        measure_results: One MeasureResult per associated measure

    Returns:
        HypothesisResult where ``supported`` is:
            - yes: every measure significant in the predicted direction
            - partial: some, but not all, significant in the predicted direction
            - opposite: none in the predicted direction, at least one against it
            - no: nothing significant

    Notes:
        formal_higher predicts mean_diff > 0 and informal_higher predicts
        mean_diff < 0. Exploratory hypotheses accept either direction.
    """
    results = tuple(measure_results)
    total = len(results)

    significant = [r for r in results if r.significant]
    correct = sum(1 for r in significant if _in_direction(r, hypothesis.direction))
    opposite = len(significant) - correct

    if total > 0 and correct == total:
        supported = Support.YES
        summary = f"Supported: All {correct} measure(s) significant in predicted direction"
    elif correct > 0:
        supported = Support.PARTIAL
        summary = f"Partially supported: {correct}/{total} significant in predicted direction"
    elif opposite > 0:
        supported = Support.OPPOSITE
        summary = f"Opposite effect: {opposite} measure(s) significant in opposite direction"
    else:
        supported = Support.NO
        summary = "Not supported: No significant differences found"

    return HypothesisResult(
        hypothesis=hypothesis,
        per_measure_results=results,
        supported=supported,
        summary=summary,
    )


def evaluate_hypotheses(
    hypotheses: Sequence[Hypothesis], results_by_key: Mapping[str, MeasureResult]
) -> List[HypothesisResult]:
    """Evaluate each hypothesis against the results of its ``dv_keys``.

    Measures without a result are skipped with a warning.
    """
    out = []
    for hyp in hypotheses:
        missing = [k for k in hyp.dv_keys if k not in results_by_key]
        if missing:
            logger.warning("Hypothesis %s: no results for measures %s", hyp.id, missing)
        selected = [results_by_key[k] for k in hyp.dv_keys if k in results_by_key]
        out.append(evaluate_hypothesis(hyp, selected))
    return out
