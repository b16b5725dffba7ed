"""Tests for engine input validation."""

from __future__ import annotations

import numpy as np
import pytest

from surveystats.stats.validation import InvalidInputError, as_paired, as_pvalues, as_sample


def test_as_sample_copies_to_float():
    src = [1, 2, 3]
    arr = as_sample(src)
    assert arr.dtype == float
    arr[0] = 99.0
    assert src[0] == 1


def test_as_sample_accepts_generators_and_empty():
    assert len(as_sample(x for x in (1.0, 2.0))) == 2
    assert len(as_sample([])) == 0


@pytest.mark.parametrize(
    "values",
    [[1.0, np.nan], [np.inf, 2.0], ["a", "b"], [[1.0, 2.0], [3.0, 4.0]]],
)
def test_as_sample_rejects_malformed(values):
    with pytest.raises(InvalidInputError):
        as_sample(values)


def test_invalid_input_is_value_error():
    with pytest.raises(ValueError):
        as_sample([None, 1.0])


def test_as_paired_length_mismatch():
    with pytest.raises(InvalidInputError, match="equal length"):
        as_paired([1.0, 2.0], [1.0])


def test_as_pvalues_range():
    assert as_pvalues([0.0, 1.0]).tolist() == [0.0, 1.0]
    with pytest.raises(InvalidInputError):
        as_pvalues([-0.1])
