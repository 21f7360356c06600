"""Finite-difference gradient probe with a first-order optimality test.

The probe works on two scales. Each coordinate is first moved by a full
tolerance in both directions; if no move lowers the objective the point is a
minimum to within tolerance. Otherwise the negative gradient is estimated
with forward differences one hundredth of a tolerance long. When every one
of those differences is exactly zero the function is flat at the small scale
but not at the tolerance scale, and the probe switches to end-game mode,
where the negative gradient comes from the tolerance-sized moves instead.
"""

from __future__ import annotations

from typing import Any, NamedTuple

from ..linalg import BackendLike, LinearAlgebra, get_backend
from ..logging import get_logger
from .core import ATOL, RTOL, Objective, Tolerance

logger = get_logger(__name__)

SMALL_STEP = 0.01


class ProbeResult(NamedTuple):
    optimal: bool
    end_game: bool
    fun: float


def _tol_step(
    la: LinearAlgebra, fun: Objective, x: Any, i: int, fx: float, tolerance: Tolerance
) -> float | None:
    """Negative slope along coordinate ``i`` from ``±tol`` moves.

    Returns None when neither move lowers the objective. ``x`` is restored.
    """
    xi = la.get(x, i)
    t = tolerance(xi)
    la.set(x, i, xi - t)
    f_lo = float(fun(x))
    if f_lo < fx:
        la.set(x, i, xi)
        return (f_lo - fx) / t
    la.set(x, i, xi + t)
    f_hi = float(fun(x))
    la.set(x, i, xi)
    if f_hi < fx:
        return (fx - f_hi) / t
    return None


def _fill_end_game(
    la: LinearAlgebra,
    fun: Objective,
    x: Any,
    df: Any,
    start: int,
    fx: float,
    tolerance: Tolerance,
) -> None:
    n = df.shape[0]
    for i in range(start, n):
        slope = _tol_step(la, fun, x, i, fx, tolerance)
        if slope is not None:
            la.set(df, i, slope)


def gradient_probe(
    fun: Objective,
    x: Any,
    df: Any,
    atol: float = ATOL,
    rtol: float = RTOL,
    end_game: bool = False,
    backend: BackendLike = None,
) -> ProbeResult:
    """Test ``x`` for optimality and estimate the negative gradient.

    Parameters
    ----------
    fun:
        Objective taking a backend vector.
    x:
        Point to probe. Coordinates are perturbed in place and restored.
    df:
        Output buffer for the negative gradient. Left untouched when the
        point is optimal.
    end_game:
        Whether the caller is already in end-game mode.

    Returns
    -------
    ProbeResult
        ``optimal`` if no tolerance-sized coordinate move improves ``fun``,
        the possibly updated ``end_game`` flag and ``fun(x)``.
    """
    la = get_backend(backend)
    tolerance = Tolerance(atol, rtol)
    n = x.shape[0]
    fx = float(fun(x))

    first = -1
    slope = 0.0
    for i in range(n):
        step = _tol_step(la, fun, x, i, fx, tolerance)
        if step is not None:
            first, slope = i, step
            break
    if first == -1:
        return ProbeResult(True, end_game, fx)

    if end_game:
        for i in range(n):
            la.set(df, i, 0.0)
        la.set(df, first, slope)
        _fill_end_game(la, fun, x, df, first + 1, fx, tolerance)
        return ProbeResult(False, True, fx)

    all_zero = True
    for i in range(n):
        xi = la.get(x, i)
        xi_d = xi + tolerance(xi) * SMALL_STEP
        h = xi_d - xi
        la.set(x, i, xi_d)
        df_i = (fx - float(fun(x))) / h if h != 0 else 0.0
        la.set(x, i, xi)
        la.set(df, i, df_i)
        if df_i != 0:
            all_zero = False

    if all_zero:
        logger.info("gradient vanished at probe scale, switching to end-game mode")
        la.set(df, first, slope)
        _fill_end_game(la, fun, x, df, first + 1, fx, tolerance)
        return ProbeResult(False, True, fx)
    return ProbeResult(False, False, fx)


__all__ = ["ProbeResult", "gradient_probe"]
