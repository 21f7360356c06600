"""Bracketing of a univariate minimum."""

from __future__ import annotations

import math
from typing import Optional

from ..logging import get_logger
from .core import ATOL, RTOL, Bracket, IterationLimitError, ScalarObjective, Tolerance
from .interpolation import quadratic

logger = get_logger(__name__)

# Extrapolation steps are capped at this many current bracket widths.
MAX_EXPANSION = 500.0


def is_bracketed(fa: float, fb: float, fc: float) -> bool:
    """True if the middle value is not greater than either outer value."""
    return fa >= fb and fb <= fc


def bracket_minimum(
    fun: ScalarObjective,
    a: float,
    b: float,
    atol: float = ATOL,
    rtol: float = RTOL,
    maxiter: Optional[int] = None,
) -> Bracket:
    """Expand from the seeds ``a`` and ``b`` until a minimum is bracketed.

    Each step either accepts the quadratic estimate as a new interior point
    or extrapolates past the better end, by at most ``MAX_EXPANSION`` bracket
    widths. The window ``(a, b, c, d)`` shifts by one point per step and
    ``d`` keeps the bound that was displaced last.

    The search has no iteration cap by default: a function without a local
    minimum in the search direction never terminates. ``maxiter`` turns that
    into an :class:`IterationLimitError`.

    Returns:
        A bracket with ``a < c`` and ``f(a) >= f(b) <= f(c)``.
    """
    tolerance = Tolerance(atol, rtol)
    a = float(a)
    b = float(b)
    fa = float(fun(a))
    fb = float(fun(b))
    if fa < fb:
        c, fc = b, fb
        b, fb = a, fa
        a = b + (b - c)
        fa = float(fun(a))
    else:
        c = b + (b - a)
        fc = float(fun(c))
    if a > c:
        a, fa, c, fc = c, fc, a, fa
    d, fd = math.inf, 0.0

    nit = 0
    while not is_bracketed(fa, fb, fc):
        if maxiter is not None and nit >= maxiter:
            raise IterationLimitError(
                f"No minimum bracketed after {maxiter} expansions; "
                f"last interval [{a!r}, {c!r}]."
            )
        nit += 1
        x = quadratic(a, fa, b, fb, c, fc)
        if fa <= fb:
            if a + tolerance(a) < x < b - tolerance(b):
                fx = float(fun(x))
                d, fd = c, fc
                c, fc = b, fb
                b, fb = x, fx
            else:
                if x < a - tolerance(a):
                    x = max(x, a - (c - a) * MAX_EXPANSION)
                else:
                    x = a - (c - a)
                fx = float(fun(x))
                d, fd = c, fc
                c, fc = b, fb
                b, fb = a, fa
                a, fa = x, fx
        else:
            if b + tolerance(b) < x < c - tolerance(c):
                fx = float(fun(x))
                d, fd = a, fa
                a, fa = b, fb
                b, fb = x, fx
            else:
                if x > c + tolerance(c):
                    x = min(x, c + (c - a) * MAX_EXPANSION)
                else:
                    x = c + (c - a)
                fx = float(fun(x))
                d, fd = a, fa
                a, fa = b, fb
                b, fb = c, fc
                c, fc = x, fx
        logger.debug("bracket step %d: [%r, %r, %r]", nit, a, b, c)

    return Bracket(a, fa, b, fb, c, fc, d, fd)


__all__ = ["MAX_EXPANSION", "bracket_minimum", "is_bracketed"]
