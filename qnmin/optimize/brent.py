"""Brent's method for a bracketed univariate minimum."""

from __future__ import annotations

import math

from ..diagnostics import assert_bracketed, is_debug_enabled
from ..logging import get_logger
from .core import ATOL, RTOL, IterationLimitError, ScalarObjective, Tolerance

logger = get_logger(__name__)

CGOLD = 0.3819660
BRENT_MAXITER = 100


def _sign(value: float, direction: float) -> float:
    return value if direction >= 0 else -value


def minimize_brent(
    fun: ScalarObjective,
    a: float,
    b: float,
    c: float,
    atol: float = ATOL,
    rtol: float = RTOL,
    maxiter: int = BRENT_MAXITER,
) -> float:
    """Minimum of ``fun`` bracketed by ``a < b < c`` using Brent's method.

    Parabolic steps through the three best points ``v, w, x`` are accepted
    when they fall inside the bracket and move less than half the step
    before last; otherwise a golden-section step into the larger segment is
    taken.

    In debug mode the ends are evaluated once more so that the bracket
    ``f(a) >= f(x) <= f(c)`` is checked before every iteration.

    Raises:
        IterationLimitError: If the bracket is not within tolerance after
            ``maxiter`` iterations.
    """
    tolerance = Tolerance(atol, rtol)
    if a > c:
        a, c = c, a
    d = 0.0
    e = 0.0
    x = w = v = float(b)
    fx = fw = fv = float(fun(x))
    check = is_debug_enabled()
    fa = fc = math.nan
    if check:
        fa = float(fun(a))
        fc = float(fun(c))
    for iteration in range(maxiter):
        if check:
            assert_bracketed(a, fa, x, fx, c, fc)
        xm = 0.5 * (a + c)
        tol1 = tolerance(xm)
        tol2 = 2.0 * tol1
        if c - a < tol2:
            logger.debug("brent converged after %d iterations", iteration)
            return xm
        if abs(e) > tol1 and c - a > 4.0 * tol1:
            r = (x - w) * (fx - fv)
            q = (x - v) * (fx - fw)
            p = (x - v) * q - (x - w) * r
            q = 2.0 * (q - r)
            if q > 0.0:
                p = -p
            q = abs(q)
            etemp = e
            e = d
            if abs(p) >= abs(0.5 * q * etemp) or p <= q * (a - x) or p >= q * (c - x):
                e = a - x if x >= xm else c - x
                d = CGOLD * e
                u = x + d
            else:
                d = p / q
                u = x + d
                if u - a < tol2 or c - u < tol2:
                    d = _sign(tol1, xm - x)
                u = x + d if abs(d) >= tol1 else x + _sign(tol1, d)
        else:
            e = a - x if x >= xm else c - x
            d = CGOLD * e
            u = x + d
        fu = float(fun(u))
        if fu <= fx:
            if u >= x:
                a, fa = x, fx
            else:
                c, fc = x, fx
            v, w, x = w, x, u
            fv, fw, fx = fw, fx, fu
        else:
            if u <= x:
                a, fa = u, fu
            else:
                c, fc = u, fu
            if fu <= fw or w == x:
                v, w = w, u
                fv, fw = fw, fu
            elif fu <= fv or v == x or v == w:
                v = u
                fv = fu
    raise IterationLimitError(f"Too many iterations in Brent minimization ({maxiter}).")


__all__ = ["BRENT_MAXITER", "CGOLD", "minimize_brent"]
