"""Nonlinear least squares and curve fitting on top of :func:`bfgs`."""

from __future__ import annotations

from typing import Any, Callable, Optional, Sequence

import numpy as np

from ..linalg import BackendLike, get_backend
from .core import ATOL, RTOL, OptimizeResult, PreconditionError
from .quasi_newton import bfgs

Residuals = Callable[[Any], Any]
Model = Callable[[Any, float], float]


def least_squares(
    residuals: Residuals,
    x0: Sequence[float] | np.ndarray | Any,
    atol: float = ATOL,
    rtol: float = RTOL,
    maxiter: Optional[int] = None,
    backend: BackendLike = None,
) -> OptimizeResult:
    """Minimize the sum of squared residuals ``sum(residuals(x) ** 2)``.

    ``residuals`` receives a backend vector and returns the residual vector
    in any array-like form. ``fun`` of the result is the final sum of
    squares.
    """
    la = get_backend(backend)

    def sum_of_squares(x: Any) -> float:
        r = la.asvector(residuals(x))
        return la.dot(r, r)

    return bfgs(sum_of_squares, x0, atol=atol, rtol=rtol, maxiter=maxiter, backend=la)


def curve_fit(
    model: Model,
    xdata: Sequence[float] | np.ndarray,
    ydata: Sequence[float] | np.ndarray,
    p0: Sequence[float] | np.ndarray | Any,
    atol: float = ATOL,
    rtol: float = RTOL,
    maxiter: Optional[int] = None,
    backend: BackendLike = None,
    residual: bool = True,
) -> OptimizeResult:
    """Fit the parameters of ``model`` to data by least squares.

    By default ``model(p, x_i)`` is taken to already be the residual at
    ``x_i`` and the objective is ``sum(model(p, x_i) ** 2)``; ``ydata`` is
    only checked against ``xdata``. With ``residual=False`` the model value
    is compared to the data, ``sum((model(p, x_i) - y_i) ** 2)``.

    Raises:
        PreconditionError: If ``xdata`` and ``ydata`` differ in length.
    """
    xs = np.asarray(xdata, dtype=float).reshape(-1)
    ys = np.asarray(ydata, dtype=float).reshape(-1)
    if xs.shape != ys.shape:
        raise PreconditionError(
            f"xdata and ydata must have the same length, got {xs.size} and {ys.size}."
        )

    if residual:
        def objective(p: Any) -> float:
            total = 0.0
            for xi in xs:
                r = float(model(p, float(xi)))
                total += r * r
            return total
    else:
        def objective(p: Any) -> float:
            total = 0.0
            for xi, yi in zip(xs, ys):
                r = float(model(p, float(xi))) - float(yi)
                total += r * r
            return total

    return bfgs(objective, p0, atol=atol, rtol=rtol, maxiter=maxiter, backend=backend)


__all__ = ["Model", "Residuals", "curve_fit", "least_squares"]
