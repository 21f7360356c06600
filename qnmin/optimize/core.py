"""Core interfaces shared across the minimization routines."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Callable, List

import numpy as np

Array = np.ndarray
ScalarObjective = Callable[[float], float]
Objective = Callable[[Any], float]

RTOL = 1e-8
ATOL = 1e-10


class MinimizeError(RuntimeError):
    """Fatal failure that aborts a minimization call."""


class PreconditionError(MinimizeError, ValueError):
    """The inputs violate a documented precondition, e.g. a zero direction."""


class IterationLimitError(MinimizeError):
    """An iteration cap was exceeded before the tolerance was reached."""


def tol(atol: float, rtol: float, x: float) -> float:
    """Position dependent tolerance ``atol + rtol * |x|``."""
    return atol + rtol * abs(x)


@dataclass(frozen=True)
class Tolerance:
    """Absolute/relative tolerance pair.

    Calling the instance gives the tolerance at a position. An interval whose
    width is at most twice the tolerance at its midpoint is converged.
    """

    atol: float = ATOL
    rtol: float = RTOL

    def __post_init__(self) -> None:
        # atol is the floor for seed widths and interpolation spacing near 0.
        if not self.atol > 0:
            raise ValueError(f"atol must be positive, got {self.atol!r}.")
        if not self.rtol >= 0:
            raise ValueError(f"rtol must be non-negative, got {self.rtol!r}.")

    def __call__(self, x: float) -> float:
        return self.atol + self.rtol * abs(x)

    def within(self, a: float, c: float) -> bool:
        return abs(c - a) <= 2.0 * self(0.5 * (a + c))

    def within_2(self, a: float, c: float) -> bool:
        return abs(c - a) <= 4.0 * self(0.5 * (a + c))


def bisect(a: float, c: float) -> float:
    return 0.5 * (a + c)


@dataclass
class Bracket:
    """Three points ``a, b, c`` with ``f(a) >= f(b) <= f(c)`` once bracketed.

    ``d`` is an optional fourth point outside ``[a, c]`` that seeds cubic
    interpolation. ``d = inf`` marks it as absent.
    """

    a: float
    fa: float
    b: float
    fb: float
    c: float
    fc: float
    d: float = math.inf
    fd: float = 0.0

    @property
    def is_bracketed(self) -> bool:
        return self.fa >= self.fb and self.fb <= self.fc

    @property
    def width(self) -> float:
        return abs(self.c - self.a)

    def oriented(self) -> "Bracket":
        """Return the bracket with ``a < c``, swapping the ends if needed."""
        if self.a <= self.c:
            return self
        return Bracket(self.c, self.fc, self.b, self.fb, self.a, self.fa, self.d, self.fd)


@dataclass
class OptimizeResult:
    """Result of a multivariate minimization.

    Attributes:
        x: Minimizer, a NumPy array owned by the caller.
        fun: Objective value at ``x``.
        nit: Number of line searches performed.
        nfev: Number of objective evaluations.
        success: False only when an iteration cap stopped the solver.
        message: Human readable termination reason.
        end_game: Whether the solver finished in the gradient-only mode.
        history: Points after each line search, when requested.
    """

    x: Array
    fun: float
    nit: int
    nfev: int
    success: bool
    message: str
    end_game: bool = False
    history: List[Array] = field(default_factory=list)


class CountingObjective:
    """Wraps an objective, converting its output to float and counting calls."""

    def __init__(self, fun: Callable[..., Any]) -> None:
        self.fun = fun
        self.nfev = 0

    def __call__(self, x: Any) -> float:
        self.nfev += 1
        return float(self.fun(x))


__all__ = [
    "ATOL",
    "Array",
    "Bracket",
    "CountingObjective",
    "IterationLimitError",
    "MinimizeError",
    "Objective",
    "OptimizeResult",
    "PreconditionError",
    "RTOL",
    "ScalarObjective",
    "Tolerance",
    "bisect",
    "tol",
]
