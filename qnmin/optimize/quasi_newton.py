"""Derivative-free BFGS minimization.

The driver alternates exact line searches with finite-difference gradient
probes and maintains an approximation ``H`` of the inverse Hessian through
the BFGS rank-two update. The probe reports optimality once no coordinate
move of one tolerance improves the objective, which is the only termination
test. When the curvature term ``sᵀy`` vanishes, or the probe enters end-game
mode, ``H`` is abandoned and the remaining steps follow the raw negative
gradient.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Sequence

import numpy as np

from ..diagnostics import assert_symmetric, is_debug_enabled
from ..linalg import BackendLike, LinearAlgebra, get_backend
from ..logging import get_logger
from .core import ATOL, RTOL, CountingObjective, Objective, OptimizeResult, Tolerance
from .gradient import gradient_probe
from .line_search import line_search

logger = get_logger(__name__)

# The first line search scales its step from the tolerance at x0[0].
SEED_STEP_FACTOR = 1000.0


def _bfgs_update(la: LinearAlgebra, h: Any, s: Any, y: Any, hy: Any, sty: float) -> None:
    """``H += (sᵀy + yᵀHy)/(sᵀy)² ssᵀ - (Hy sᵀ + s yᵀH)/sᵀy``."""
    la.symv(h, y, hy)
    la.syr((sty + la.dot(y, hy)) / sty / sty, s, h)
    la.syr2(-1.0 / sty, hy, s, h)
    if is_debug_enabled():
        assert_symmetric(la.to_numpy(h), "inverse Hessian")


def bfgs(
    fun: Objective,
    x0: Sequence[float] | np.ndarray | Any,
    atol: float = ATOL,
    rtol: float = RTOL,
    maxiter: Optional[int] = None,
    backend: BackendLike = None,
    history: bool = False,
) -> OptimizeResult:
    """Minimize ``fun`` from ``x0`` with finite-difference BFGS.

    Parameters
    ----------
    fun:
        Objective taking a vector of the backend's array type and returning
        a scalar.
    x0:
        Starting point. It is copied, never modified.
    atol, rtol:
        Each coordinate of the result is optimal to within
        ``atol + rtol * |x_i|``.
    maxiter:
        Optional cap on the number of line searches. Unbounded by default;
        when reached the result has ``success=False``.
    backend:
        Linear algebra backend name or instance.
    history:
        Record the point after every line search.
    """
    la = get_backend(backend)
    tolerance = Tolerance(atol, rtol)
    objective = CountingObjective(fun)
    start = la.asvector(x0)
    n = start.shape[0]
    hist: list[np.ndarray] = []
    nit = 0
    end_game = False
    if history:
        hist.append(la.to_numpy(start))

    def done(point: Any, fx: float, message: str, success: bool = True) -> OptimizeResult:
        logger.info(
            "%s nit=%d nfev=%d end_game=%s", message, nit, objective.nfev, end_game
        )
        return OptimizeResult(
            x=la.to_numpy(point),
            fun=fx,
            nit=nit,
            nfev=objective.nfev,
            success=success,
            message=message,
            end_game=end_game,
            history=hist,
        )

    def step(x_from: Any, direction: Any, dx: float, x_to: Any) -> None:
        nonlocal nit
        line_search(objective, x_from, direction, dx, atol=atol, rtol=rtol, out=x_to, backend=la)
        nit += 1
        if history:
            hist.append(la.to_numpy(x_to))

    def capped() -> bool:
        return maxiter is not None and nit >= maxiter

    with la.workspace() as ws:
        x2 = ws.copy_of(start)
        df1 = ws.vector(n)
        probe = gradient_probe(objective, x2, df1, atol, rtol, end_game, la)
        end_game = probe.end_game
        if probe.optimal:
            return done(x2, probe.fun, "Tolerance satisfied at starting point.")

        x1 = ws.copy_of(x2)
        p = ws.copy_of(df1)
        step(x1, p, tolerance(la.get(x1, 0)) * SEED_STEP_FACTOR, x2)
        df2 = ws.vector(n)
        probe = gradient_probe(objective, x2, df2, atol, rtol, end_game, la)
        end_game = probe.end_game
        if probe.optimal:
            return done(x2, probe.fun, "Tolerance satisfied.")

        # s and y reuse the x1 and df1 buffers.
        s, y = x1, df1
        la.sub(x2, x1, s)
        dx = la.norm(s)
        la.sub(df1, df2, y)
        sty = la.dot(s, y)

        h = ws.identity(n)
        hy = ws.vector(n)
        if sty != 0:
            la.syr((sty + la.dot(y, y)) / sty / sty, s, h)
            la.syr2(-1.0 / sty, y, s, h)

        while sty != 0 and not end_game:
            if capped():
                return done(x2, probe.fun, "Maximum iterations reached.", success=False)
            la.copy(x2, x1)
            la.copy(df2, df1)
            la.symv(h, df1, p)
            step(x1, p, dx, x2)
            probe = gradient_probe(objective, x2, df2, atol, rtol, end_game, la)
            end_game = probe.end_game
            if probe.optimal:
                return done(x2, probe.fun, "Tolerance satisfied.")
            la.sub(x2, x1, s)
            dx = la.norm(s)
            la.sub(df1, df2, y)
            sty = la.dot(s, y)
            if sty != 0 and not end_game:
                _bfgs_update(la, h, s, y, hy, sty)

        if not end_game:
            logger.info("curvature term vanished, switching to end-game mode")
        end_game = True
        while True:
            if capped():
                return done(x2, probe.fun, "Maximum iterations reached.", success=False)
            la.copy(x2, x1)
            step(x1, df2, dx, x2)
            probe = gradient_probe(objective, x2, df2, atol, rtol, end_game, la)
            if probe.optimal:
                return done(x2, probe.fun, "Tolerance satisfied.")
            la.sub(x2, x1, s)
            dx = la.norm(s)


def minimize(
    fun: Objective,
    x0: Sequence[float] | np.ndarray | Any,
    atol: float = ATOL,
    rtol: float = RTOL,
    maxiter: Optional[int] = None,
    backend: BackendLike = None,
    history: bool = False,
) -> OptimizeResult:
    """Local minimum of a function of a vector. See :func:`bfgs`."""
    return bfgs(fun, x0, atol=atol, rtol=rtol, maxiter=maxiter, backend=backend, history=history)


def minimize2(
    fun: Callable[[float, float], float],
    x1: float,
    x2: float,
    atol: float = ATOL,
    rtol: float = RTOL,
    maxiter: Optional[int] = None,
) -> tuple[float, float]:
    """Local minimum of a function of two floats, returned as a pair."""
    res = bfgs(lambda v: fun(float(v[0]), float(v[1])), [x1, x2], atol=atol, rtol=rtol, maxiter=maxiter)
    return float(res.x[0]), float(res.x[1])


__all__ = ["SEED_STEP_FACTOR", "bfgs", "minimize", "minimize2"]
