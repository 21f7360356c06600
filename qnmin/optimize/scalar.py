"""Univariate minimization from one or two starting points."""

from __future__ import annotations

from typing import Optional

from .bracket import bracket_minimum
from .brent import BRENT_MAXITER, minimize_brent
from .core import ATOL, RTOL, ScalarObjective, Tolerance
from .refine import minimize_bracketed

METHODS = ("bracketed", "brent")


def minimize_scalar(
    fun: ScalarObjective,
    a: float,
    b: Optional[float] = None,
    atol: float = ATOL,
    rtol: float = RTOL,
    method: str = "bracketed",
    bracket_maxiter: Optional[int] = None,
) -> float:
    """Bracket and refine a local minimum of ``fun``.

    Parameters
    ----------
    fun:
        Function of one float.
    a, b:
        Starting points. ``b`` defaults to ``a + 1000 * tol(a)``.
    atol, rtol:
        The result is accurate to ``atol + rtol * |x|``.
    method:
        ``"bracketed"`` for the escalating interpolation refiner or
        ``"brent"`` for Brent's method.
    bracket_maxiter:
        Optional cap on bracket expansions.

    Example
    -------
    >>> round(minimize_scalar(lambda x: (x - 5.0) ** 2, 0.0, 1.0), 6)
    5.0
    """
    if method not in METHODS:
        raise ValueError(f"Unsupported method {method!r}. Supported methods: {list(METHODS)}")
    if b is None:
        b = a + Tolerance(atol, rtol)(a) * 1000.0
    bracket = bracket_minimum(fun, a, b, atol=atol, rtol=rtol, maxiter=bracket_maxiter)
    if method == "brent":
        return minimize_brent(
            fun, bracket.a, bracket.b, bracket.c, atol=atol, rtol=rtol, maxiter=BRENT_MAXITER
        )
    return minimize_bracketed(fun, bracket, atol=atol, rtol=rtol)


__all__ = ["METHODS", "minimize_scalar"]
