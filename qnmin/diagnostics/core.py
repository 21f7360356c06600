"""Invariant checks used by the solvers in debug mode."""

from __future__ import annotations

import math

import numpy as np


def assert_bracketed(
    a: float, fa: float, b: float, fb: float, c: float, fc: float
) -> None:
    """
    Assert that ``(a, b, c)`` is an ordered bracket of a minimum.

    Parameters
    ----------
    a, b, c:
        Bracket points, expected to satisfy ``a <= b <= c``.
    fa, fb, fc:
        Function values, expected to satisfy ``fa >= fb <= fc``.

    Raises
    ------
    ValueError
        If the points are out of order or the middle value exceeds an
        outer one.
    """
    if not (a <= b <= c):
        raise ValueError(f"Bracket points out of order: a={a!r}, b={b!r}, c={c!r}.")
    if not (fa >= fb and fb <= fc):
        raise ValueError(
            f"Middle value does not bracket a minimum: "
            f"f(a)={fa!r}, f(b)={fb!r}, f(c)={fc!r}."
        )


def assert_finite(values: np.ndarray | float, name: str = "value") -> None:
    """Raise ValueError if ``values`` holds a NaN or infinity."""
    if isinstance(values, float):
        if not math.isfinite(values):
            raise ValueError(f"{name} is not finite: {values!r}.")
        return
    if not np.all(np.isfinite(values)):
        raise ValueError(f"{name} contains non-finite values.")


def is_symmetric(mat: np.ndarray, atol: float = 1e-10, rtol: float = 1e-10) -> bool:
    """
    Check whether a square matrix equals its transpose within tolerance.

    Parameters
    ----------
    mat:
        Square 2-D array.
    atol, rtol:
        Tolerances passed to :func:`numpy.allclose`.

    Returns
    -------
    bool
        False for non-square input.
    """
    mat = np.asarray(mat)
    if mat.ndim != 2 or mat.shape[0] != mat.shape[1]:
        return False
    return bool(np.allclose(mat, mat.T, atol=atol, rtol=rtol))


def assert_symmetric(mat: np.ndarray, name: str = "matrix") -> None:
    """Raise ValueError unless ``mat`` is finite and symmetric."""
    assert_finite(mat, name)
    if not is_symmetric(mat):
        raise ValueError(f"{name} is not symmetric.")
