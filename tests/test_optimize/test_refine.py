import math

import pytest

import qnmin.optimize.refine as refine
from qnmin.diagnostics import debug_context
from qnmin.optimize import (
    Bracket,
    IterationLimitError,
    PreconditionError,
    minimize_bracketed,
    minimize_brent,
    tol,
)

ATOL = RTOL = 1e-10


def shifted_square(x: float) -> float:
    return (x - 5.0) ** 2


def make_bracket(f, a, b, c):
    return Bracket(a, f(a), b, f(b), c, f(c))


def test_refiner_on_shifted_square():
    x = minimize_bracketed(shifted_square, make_bracket(shifted_square, 0.0, 1.0, 20.0), ATOL, RTOL)
    assert abs(x - 5.0) <= tol(ATOL, RTOL, 5.0) * 1.001


def test_brent_on_shifted_square():
    x = minimize_brent(shifted_square, 0.0, 1.0, 20.0, ATOL, RTOL)
    assert abs(x - 5.0) <= tol(ATOL, RTOL, 5.0) * 1.001


def test_refiner_accepts_reversed_bracket():
    x = minimize_bracketed(shifted_square, make_bracket(shifted_square, 20.0, 1.0, 0.0), ATOL, RTOL)
    assert abs(x - 5.0) <= tol(ATOL, RTOL, 5.0) * 1.001


def test_brent_accepts_reversed_bracket():
    x = minimize_brent(shifted_square, 20.0, 1.0, 0.0, ATOL, RTOL)
    assert abs(x - 5.0) <= tol(ATOL, RTOL, 5.0) * 1.001


@pytest.mark.parametrize(
    "f, a, b, c, expected",
    [
        (lambda x: math.cos(x), 2.0, 3.0, 5.0, math.pi),
        (lambda x: x ** 4 - 2.0 * x ** 2, 0.2, 0.5, 3.0, 1.0),
        (lambda x: math.exp(x) - 2.0 * x, -1.0, 0.0, 3.0, math.log(2.0)),
    ],
)
def test_refiners_agree_on_assorted_functions(f, a, b, c, expected):
    atol, rtol = 1e-8, 1e-8
    slack = 1e-6
    x_refine = minimize_bracketed(f, make_bracket(f, a, b, c), atol, rtol)
    x_brent = minimize_brent(f, a, b, c, atol, rtol)
    assert x_refine == pytest.approx(expected, abs=slack)
    assert x_brent == pytest.approx(expected, abs=slack)


def test_refiner_keeps_bracket_invariant_in_debug_mode():
    f = lambda x: x ** 4 - 2.0 * x ** 2
    with debug_context(True):
        x = minimize_bracketed(f, make_bracket(f, 0.2, 0.5, 3.0), 1e-9, 1e-9)
    assert x == pytest.approx(1.0, abs=1e-6)


def test_refiner_converged_bracket_returns_midpoint():
    f = shifted_square
    br = make_bracket(f, 5.0 - 1e-12, 5.0, 5.0 + 1e-12)
    assert minimize_bracketed(f, br, ATOL, RTOL) == pytest.approx(5.0, abs=1e-12)


def test_refiner_rejects_non_bracket():
    br = Bracket(0.0, 1.0, 1.0, 2.0, 2.0, 3.0)
    with pytest.raises(PreconditionError, match="Not a bracket"):
        minimize_bracketed(lambda x: x, br)


def test_refiner_rejects_middle_outside():
    br = Bracket(0.0, 5.0, 3.0, 0.0, 2.0, 5.0)
    with pytest.raises(PreconditionError):
        minimize_bracketed(shifted_square, br)


def test_refiner_counts_evaluations():
    calls = []

    def f(x):
        calls.append(x)
        return shifted_square(x)

    minimize_bracketed(f, make_bracket(shifted_square, 0.0, 1.0, 20.0), ATOL, RTOL)
    assert 0 < len(calls) < 200
    assert all(0.0 < x < 20.0 for x in calls)


def test_brent_iteration_limit():
    with pytest.raises(IterationLimitError, match="Too many iterations"):
        minimize_brent(shifted_square, 0.0, 1.0, 20.0, ATOL, RTOL, maxiter=3)


def test_refiner_on_kinked_function():
    # Interpolation is poor on a kink; escalation to sectioning still converges.
    f = lambda x: abs(x - 0.3)
    x = minimize_bracketed(f, make_bracket(f, -1.0, 0.0, 2.0), 1e-9, 1e-9)
    assert x == pytest.approx(0.3, abs=1e-8)


@pytest.mark.parametrize(
    "f, a, b, c",
    [
        (lambda x: x ** 4 - 2.0 * x ** 2, 0.2, 0.5, 3.0),
        (lambda x: abs(x - 0.3), -1.0, 0.0, 2.0),
        (lambda x: math.exp(x) - 2.0 * x, -1.0, 0.0, 3.0),
    ],
)
def test_refiner_passes_displaced_bound_to_cubic(monkeypatch, f, a, b, c):
    seen = []
    real_cubic = refine.cubic

    def recording_cubic(a, fa, b, fb, c, fc, d, fd):
        seen.append((a, c, d, fd))
        return real_cubic(a, fa, b, fb, c, fc, d, fd)

    monkeypatch.setattr(refine, "cubic", recording_cubic)
    minimize_bracketed(f, make_bracket(f, a, b, c), 1e-9, 1e-9)

    assert len(seen) >= 2
    # The input bracket carries no auxiliary point.
    assert math.isinf(seen[0][2])
    for lo, hi, d, fd in seen[1:]:
        assert math.isfinite(d)
        assert d < lo or d > hi
        assert fd == f(d)


def test_refiner_escalates_and_resets_level(monkeypatch):
    # Interpolation that barely moves off b forces the escalation to
    # factor section; the first factor step that overshoots the kink
    # discards most of the bracket and drops back to cubic.
    calls = []
    real_factor_section = refine.factor_section

    def sluggish_cubic(a, fa, b, fb, c, fc, d, fd):
        calls.append("cubic")
        return b + 1e-3

    def sluggish_quadratic(a, fa, b, fb, c, fc):
        calls.append("quadratic")
        return b + 1e-3

    def recording_factor_section(a, b, c, factor):
        calls.append("factor_section")
        return real_factor_section(a, b, c, factor)

    monkeypatch.setattr(refine, "cubic", sluggish_cubic)
    monkeypatch.setattr(refine, "quadratic", sluggish_quadratic)
    monkeypatch.setattr(refine, "factor_section", recording_factor_section)

    f = lambda x: abs(x - 0.3)
    x = minimize_bracketed(f, make_bracket(f, -0.5, 0.0, 2.0), 1e-9, 1e-9)

    assert calls[:6] == [
        "cubic",
        "quadratic",
        "factor_section",
        "factor_section",
        "factor_section",
        "cubic",
    ]
    assert x == pytest.approx(0.3, abs=1e-8)


def test_brent_keeps_bracket_invariant_in_debug_mode():
    f = lambda x: x ** 4 - 2.0 * x ** 2
    with debug_context(True):
        x_debug = minimize_brent(f, 0.2, 0.5, 3.0, 1e-9, 1e-9)
    x_plain = minimize_brent(f, 0.2, 0.5, 3.0, 1e-9, 1e-9)
    assert x_debug == x_plain
    assert x_debug == pytest.approx(1.0, abs=1e-6)


def test_brent_rejects_non_bracket_in_debug_mode():
    # f(0) < f(1): the middle point is not a minimum of the three.
    with debug_context(True):
        with pytest.raises(ValueError, match="does not bracket"):
            minimize_brent(lambda x: x, 0.0, 1.0, 2.0)
