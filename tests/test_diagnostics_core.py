"""Tests for core diagnostic functions."""

import math

import numpy as np
import pytest

from qnmin.diagnostics import (
    assert_bracketed,
    assert_finite,
    assert_symmetric,
    is_symmetric,
)


def test_assert_bracketed_accepts_valid_bracket() -> None:
    # Should not raise
    assert_bracketed(0.0, 25.0, 1.0, 16.0, 20.0, 225.0)
    # Equal values still bracket
    assert_bracketed(0.0, 1.0, 1.0, 1.0, 2.0, 1.0)


def test_assert_bracketed_rejects_unordered_points() -> None:
    with pytest.raises(ValueError, match="out of order"):
        assert_bracketed(2.0, 1.0, 1.0, 0.0, 3.0, 1.0)


def test_assert_bracketed_rejects_high_middle_value() -> None:
    with pytest.raises(ValueError, match="does not bracket"):
        assert_bracketed(0.0, 1.0, 1.0, 2.0, 2.0, 3.0)


def test_assert_finite() -> None:
    assert_finite(1.0)
    assert_finite(np.array([1.0, -2.0]))
    with pytest.raises(ValueError, match="not finite"):
        assert_finite(math.inf, "fx")
    with pytest.raises(ValueError, match="non-finite"):
        assert_finite(np.array([1.0, np.nan]), "x")


def test_is_symmetric_and_assert() -> None:
    mat = np.array([[2.0, 1.0], [1.0, 3.0]])
    assert is_symmetric(mat)
    assert_symmetric(mat)

    non_sym = np.array([[0.0, 1.0], [0.0, 0.0]])
    assert not is_symmetric(non_sym)
    with pytest.raises(ValueError, match="not symmetric"):
        assert_symmetric(non_sym)


def test_is_symmetric_non_square() -> None:
    assert not is_symmetric(np.zeros((2, 3)))
    assert not is_symmetric(np.zeros(3))


def test_assert_symmetric_rejects_nan() -> None:
    with pytest.raises(ValueError, match="non-finite"):
        assert_symmetric(np.array([[1.0, np.nan], [np.nan, 1.0]]), "H")
