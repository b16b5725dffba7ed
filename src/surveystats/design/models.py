"""Pydantic models for study designs (conditions, measures, hypotheses)."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, Field, field_validator, model_validator

from surveystats.design.yaml_utils import load_yaml

MeasureRole = Literal["outcome", "manipulation", "exploratory", "baseline"]
PredictorType = Literal["continuous", "categorical"]


class Direction(str, Enum):
    """Predicted direction of a hypothesis.

    "formal" is the design's group A and "informal" its group B.
    """

    FORMAL_HIGHER = "formal_higher"
    INFORMAL_HIGHER = "informal_higher"
    EXPLORATORY = "exploratory"


class ConditionSpec(BaseModel):
    """Column holding the experimental condition and its two levels."""

    column: str = "assistant_type"
    group_a: str = "formal"
    group_b: str = "informal"

    @model_validator(mode="after")
    def _distinct_groups(self) -> "ConditionSpec":
        if self.group_a == self.group_b:
            raise ValueError(f"group_a and group_b must differ, both are '{self.group_a}'")
        return self


class MeasureSpec(BaseModel):
    """A dependent variable recorded for every participant."""

    key: str
    label: str = ""
    scale: str = ""
    description: str = ""
    role: MeasureRole = "outcome"

    @model_validator(mode="after")
    def _default_label(self) -> "MeasureSpec":
        if not self.label:
            self.label = self.key
        return self


class Hypothesis(BaseModel):
    """A pre-registered directional hypothesis over one or more measures."""

    model_config = {"frozen": True, "populate_by_name": True}

    id: str
    label: str
    description: str = ""
    direction: Direction
    dv_keys: Tuple[str, ...] = Field(alias="dvKeys")
    rq: str = "RQ1"

    @field_validator("dv_keys")
    @classmethod
    def _non_empty(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        if len(v) == 0:
            raise ValueError("dv_keys must name at least one measure")
        return v


class PredictorSpec(BaseModel):
    """A participant characteristic used for balance and exploratory checks."""

    key: str
    label: str = ""
    type: PredictorType = "categorical"
    balance: bool = False

    @model_validator(mode="after")
    def _default_label(self) -> "PredictorSpec":
        if not self.label:
            self.label = self.key
        return self


class StudyDesign(BaseModel):
    """Top-level study design."""

    model_config = {"extra": "forbid"}

    name: str = "study"
    conditions: ConditionSpec = Field(default_factory=ConditionSpec)
    measures: List[MeasureSpec] = Field(default_factory=list)
    hypotheses: List[Hypothesis] = Field(default_factory=list)
    predictors: List[PredictorSpec] = Field(default_factory=list)
    batch_column: Optional[str] = "batch_label"
    timestamp_column: Optional[str] = "created_at"

    @model_validator(mode="after")
    def _check_references(self) -> "StudyDesign":
        keys = [m.key for m in self.measures]
        duplicates = sorted({k for k in keys if keys.count(k) > 1})
        if duplicates:
            raise ValueError(f"Duplicate measure keys: {duplicates}")

        ids = [h.id for h in self.hypotheses]
        duplicate_ids = sorted({i for i in ids if ids.count(i) > 1})
        if duplicate_ids:
            raise ValueError(f"Duplicate hypothesis ids: {duplicate_ids}")

        known = set(keys)
        for hyp in self.hypotheses:
            missing = [k for k in hyp.dv_keys if k not in known]
            if missing:
                raise ValueError(f"Hypothesis {hyp.id} references unknown measures: {missing}")
        return self

    def measures_with_role(self, *roles: str) -> List[MeasureSpec]:
        return [m for m in self.measures if m.role in roles]

    def measure(self, key: str) -> MeasureSpec:
        for m in self.measures:
            if m.key == key:
                return m
        raise KeyError(f"Unknown measure: {key}")

    @classmethod
    def load(cls, path: Path) -> "StudyDesign":
        """Load a study design from YAML."""
        return cls.model_validate(load_yaml(Path(path)))
