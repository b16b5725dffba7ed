"""Pytest configuration and fixtures."""

import pytest
import numpy as np
import pandas as pd


@pytest.fixture
def welch_example():
    """Small two-group sample with a known Welch t-test."""
    a = np.array([5.0, 6.0, 7.0, 6.0, 5.0])
    b = np.array([3.0, 4.0, 3.0, 2.0, 4.0])
    return a, b


@pytest.fixture
def responses_df():
    """Synthetic responses for the bundled formality study.

    Formal participants score higher on trust (H2), informal participants on
    empathy (H1). Intention items are the same values shuffled between
    conditions, so H3 finds nothing.
    """
    rng = np.random.default_rng(42)
    n = 40

    def block(loc_a, loc_b, scale=1.0):
        return np.concatenate([rng.normal(loc_a, scale, n), rng.normal(loc_b, scale, n)])

    intention = rng.integers(1, 8, n).astype(float)

    df = pd.DataFrame(
        {
            "assistant_type": ["formal"] * n + ["informal"] * n,
            "pets_er": block(20.0, 26.0, 4.0),
            "pets_ut": block(20.0, 14.0, 4.0),
            "pets_total": block(45.0, 45.0, 8.0),
            "tias_total": block(60.0, 48.0, 8.0),
            "godspeed_anthro_total": block(12.0, 12.0, 3.0),
            "godspeed_like_total": block(16.0, 16.0, 3.0),
            "godspeed_intel_total": block(18.0, 18.0, 3.0),
            "intention_1": np.concatenate([intention, rng.permutation(intention)]),
            "intention_2": np.concatenate([intention, rng.permutation(intention)]),
            "formality": block(6.0, 2.5, 0.8),
            "ai_formality_score": block(70.0, 40.0, 6.0),
            "tipi_extraversion": block(4.0, 4.0),
            "tipi_agreeableness": block(5.0, 5.0),
            "tipi_conscientiousness": block(5.0, 5.0),
            "tipi_emotional_stability": block(4.5, 4.5),
            "tipi_openness": block(5.0, 5.0),
            "age": rng.integers(18, 66, 2 * n),
            "gender": rng.choice(["Female", "Male", "Non-binary"], 2 * n),
            "ethnicity_simplified": rng.choice(["White", "Asian", "Black", "Other"], 2 * n),
            "employment_status": rng.choice(["Employed", "Student", "Unemployed"], 2 * n),
            "batch_label": (["Batch 1"] * 20 + ["Batch 2"] * 20) * 2,
            "created_at": (["2024-03-01T10:00:00"] * 20 + ["2024-03-08T10:00:00"] * 20) * 2,
        }
    )

    # Rows outside the two conditions are ignored by the pipeline
    extra = df.iloc[:3].copy()
    extra["assistant_type"] = "pilot"
    return pd.concat([df, extra], ignore_index=True)
