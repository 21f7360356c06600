"""Estimators of a minimizer location from sampled points.

The interpolation formulas are evaluated with NumPy float64 scalars so that
coincident or collinear points produce NaN or infinity instead of raising.
A NaN estimate is replaced by the next simpler estimator.
"""

from __future__ import annotations

import math

import numpy as np

from .core import Tolerance

GOLD = 0.381966011250105


def golden_section(a: float, b: float, c: float) -> float:
    """Point ``GOLD`` of the way into the longer of ``[a, b]`` and ``[b, c]``."""
    return b + (a - b) * GOLD if b - a >= c - b else b + (c - b) * GOLD


def factor_section(a: float, b: float, c: float, factor: float) -> float:
    """Like :func:`golden_section` with a caller supplied fraction."""
    return b + (a - b) * factor if b - a >= c - b else b + (c - b) * factor


def bisection(tolerance: Tolerance, a: float, b: float, c: float) -> float:
    """Midpoint of ``[a, c]``, nudged off ``b`` when the two coincide."""
    x = 0.5 * (a + c)
    if x == b:
        return x + tolerance(x) * 0.1
    return x


def quadratic(a: float, fa: float, b: float, fb: float, c: float, fc: float) -> float:
    """Vertex of the parabola through three points.

    Falls back to golden section when the vertex is undefined (NaN).
    """
    a_, fa_, b_, fb_, c_, fc_ = (np.float64(v) for v in (a, fa, b, fb, c, fc))
    with np.errstate(all="ignore"):
        num = (b_ - a_) ** 2 * (fb_ - fc_) - (b_ - c_) ** 2 * (fb_ - fa_)
        den = (b_ - a_) * (fb_ - fc_) - (b_ - c_) * (fb_ - fa_)
        x = b_ - 0.5 * num / den
    if math.isnan(x):
        return golden_section(a, b, c)
    return float(x)


def cubic(
    a: float,
    fa: float,
    b: float,
    fb: float,
    c: float,
    fc: float,
    d: float,
    fd: float,
) -> float:
    """Local minimum inside ``(a, c)`` of the cubic through four points.

    The cubic is built from its Lagrange form; its stationary points are
    ``(±r - a2) / (3 a3)`` with ``r = sqrt(a2² - 3 a3 a1)``. The ``+r`` root
    is tried first. When neither root lies strictly inside ``(a, c)`` the
    quadratic estimate through ``a, b, c`` is returned.
    """
    a_, fa_, b_, fb_, c_, fc_, d_, fd_ = (
        np.float64(v) for v in (a, fa, b, fb, c, fc, d, fd)
    )
    with np.errstate(all="ignore"):
        wa = fa_ / ((a_ - b_) * (a_ - c_) * (a_ - d_))
        wb = fb_ / ((b_ - a_) * (b_ - c_) * (b_ - d_))
        wc = fc_ / ((c_ - a_) * (c_ - b_) * (c_ - d_))
        wd = fd_ / ((d_ - a_) * (d_ - b_) * (d_ - c_))
        a1 = (
            wa * (b_ * c_ + b_ * d_ + c_ * d_)
            + wb * (a_ * c_ + a_ * d_ + c_ * d_)
            + wc * (a_ * b_ + a_ * d_ + b_ * d_)
            + wd * (a_ * b_ + a_ * c_ + b_ * c_)
        )
        a2 = -(
            wa * (b_ + c_ + d_)
            + wb * (a_ + c_ + d_)
            + wc * (a_ + b_ + d_)
            + wd * (a_ + b_ + c_)
        )
        a3 = wa + wb + wc + wd
        r = np.sqrt(a2 * a2 - 3.0 * a3 * a1)
        x = (r - a2) / a3 / 3.0
        if a < x < c:
            return float(x)
        x = (-r - a2) / a3 / 3.0
        if a < x < c:
            return float(x)
    return quadratic(a, fa, b, fb, c, fc)


def not_too_close(
    tolerance: Tolerance, a: float, b: float, c: float, x: float
) -> float:
    """Move ``x`` at least one tolerance away from ``a``, ``b`` and ``c``.

    A sub-interval narrower than two tolerances is split at its midpoint.
    Estimates outside ``[a, c]`` are first pulled onto the nearer end, and
    a NaN estimate is replaced by golden section.
    """
    if math.isnan(x):
        x = golden_section(a, b, c)
    x = min(max(x, a), c)
    t = tolerance(x)
    if x <= b:
        if b - a < t:
            return b + t
        if b - a < 2 * t:
            return 0.5 * (a + b)
        if x < a + t:
            return a + t
        if x > b - t:
            return b - t
    else:
        if c - b < t:
            return b - t
        if c - b < 2 * t:
            return 0.5 * (b + c)
        if x < b + t:
            return b + t
        if x > c - t:
            return c - t
    return x


__all__ = [
    "GOLD",
    "bisection",
    "cubic",
    "factor_section",
    "golden_section",
    "not_too_close",
    "quadratic",
]
