"""Study designs: conditions, measures, hypotheses and predictors.

Designs are plain YAML data, validated with pydantic:

    from surveystats.design import load_design, default_design

    design = load_design("my_study.yaml")
    design = default_design()  # bundled formality study
"""

from __future__ import annotations

from importlib import resources
from pathlib import Path
from typing import Union

from surveystats.design.models import (
    ConditionSpec,
    Direction,
    Hypothesis,
    MeasureSpec,
    PredictorSpec,
    StudyDesign,
)

DEFAULT_DESIGN = "formality_study.yaml"


def load_design(path: Union[Path, str]) -> StudyDesign:
    """Load and validate a study design from a YAML file."""
    return StudyDesign.load(Path(path))


def default_design() -> StudyDesign:
    """Return the bundled formality study design."""
    ref = resources.files("surveystats").joinpath("designs").joinpath(DEFAULT_DESIGN)
    with resources.as_file(ref) as path:
        return StudyDesign.load(path)


__all__ = [
    "ConditionSpec",
    "Direction",
    "Hypothesis",
    "MeasureSpec",
    "PredictorSpec",
    "StudyDesign",
    "load_design",
    "default_design",
]
