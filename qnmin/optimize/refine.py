"""Refinement of a bracketed univariate minimum.

Estimators escalate by level: cubic interpolation, then quadratic
interpolation, then factor section. The level goes up after a step that
discards less than a third of the bracket and drops back to cubic after a
step that discards more. Interpolated points are kept at least one
tolerance from the current points, and a bracket within two tolerances of
convergence is bisected, so every step shrinks the bracket.
"""

from __future__ import annotations

from ..diagnostics import assert_bracketed, is_debug_enabled
from ..logging import get_logger
from .bracket import is_bracketed
from .core import ATOL, RTOL, Bracket, PreconditionError, ScalarObjective, Tolerance, bisect
from .interpolation import bisection, cubic, factor_section, not_too_close, quadratic

logger = get_logger(__name__)

LEVEL_FACTOR = 1.0 / 3.0
SECTION_FACTOR = 0.1


def _estimate(tolerance: Tolerance, br: Bracket, level: int) -> float:
    a, b, c = br.a, br.b, br.c
    if tolerance.within_2(a, c):
        return bisection(tolerance, a, b, c)
    if level == 0:
        x = cubic(a, br.fa, b, br.fb, c, br.fc, br.d, br.fd)
        return not_too_close(tolerance, a, b, c, x)
    if level == 1:
        x = quadratic(a, br.fa, b, br.fb, c, br.fc)
        return not_too_close(tolerance, a, b, c, x)
    return factor_section(a, b, c, SECTION_FACTOR)


def minimize_bracketed(
    fun: ScalarObjective,
    bracket: Bracket,
    atol: float = ATOL,
    rtol: float = RTOL,
) -> float:
    """Minimum of ``fun`` inside ``bracket`` to within ``atol + rtol * |x|``.

    Raises:
        PreconditionError: If ``bracket`` does not bracket a minimum or its
            middle point lies outside the outer points.
    """
    tolerance = Tolerance(atol, rtol)
    br = bracket.oriented()
    if not br.is_bracketed or not (br.a <= br.b <= br.c):
        raise PreconditionError(
            f"Not a bracket: f({br.a!r})={br.fa!r}, f({br.b!r})={br.fb!r}, "
            f"f({br.c!r})={br.fc!r}."
        )
    a, fa, b, fb, c, fc, d, fd = br.a, br.fa, br.b, br.fb, br.c, br.fc, br.d, br.fd

    level = 0
    while not tolerance.within(a, c):
        x = _estimate(tolerance, Bracket(a, fa, b, fb, c, fc, d, fd), level)
        fx = float(fun(x))
        width = c - a
        if x < b:
            if is_bracketed(fa, fx, fb):
                level = level + 1 if c - b < LEVEL_FACTOR * width else 0
                if d > c or a - d > c - b:
                    d, fd = c, fc
                c, fc = b, fb
                b, fb = x, fx
            else:
                level = level + 1 if b - a < LEVEL_FACTOR * width else 0
                if d < a or d - c > x - a:
                    d, fd = a, fa
                a, fa = x, fx
        else:
            if is_bracketed(fb, fx, fc):
                level = level + 1 if b - a < LEVEL_FACTOR * width else 0
                if d < a or d - c > b - a:
                    d, fd = a, fa
                a, fa = b, fb
                b, fb = x, fx
            else:
                level = level + 1 if c - b < LEVEL_FACTOR * width else 0
                if d > c or a - d > c - x:
                    d, fd = c, fc
                c, fc = x, fx
        logger.debug("refine level %d: [%r, %r, %r]", level, a, b, c)
        if is_debug_enabled():
            assert_bracketed(a, fa, b, fb, c, fc)

    return bisect(a, c)


__all__ = ["LEVEL_FACTOR", "SECTION_FACTOR", "minimize_bracketed"]
