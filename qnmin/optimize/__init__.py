"""Derivative-free minimization of univariate and multivariate functions.

Example
-------
>>> import numpy as np
>>> from qnmin.optimize import minimize, minimize_scalar
>>> def rosen(x):
...     return (1 - x[0])**2 + 100 * (x[1] - x[0]**2)**2
>>> res = minimize(rosen, np.array([-1.0, 1.0]), atol=1e-6, rtol=1e-6, maxiter=10000)
>>> bool(np.allclose(res.x, [1.0, 1.0], atol=1e-4))
True
>>> round(minimize_scalar(lambda x: (x - 5.0) ** 2, 0.0, 1.0), 6)
5.0
"""

from .bracket import MAX_EXPANSION, bracket_minimum, is_bracketed
from .brent import minimize_brent
from .core import (
    ATOL,
    RTOL,
    Bracket,
    CountingObjective,
    IterationLimitError,
    MinimizeError,
    OptimizeResult,
    PreconditionError,
    Tolerance,
    bisect,
    tol,
)
from .gradient import ProbeResult, gradient_probe
from .interpolation import (
    GOLD,
    bisection,
    cubic,
    factor_section,
    golden_section,
    not_too_close,
    quadratic,
)
from .least_squares import curve_fit, least_squares
from .line_search import line_search
from .quasi_newton import bfgs, minimize, minimize2
from .refine import minimize_bracketed
from .scalar import minimize_scalar

__all__ = [
    "ATOL",
    "Bracket",
    "CountingObjective",
    "GOLD",
    "IterationLimitError",
    "MAX_EXPANSION",
    "MinimizeError",
    "OptimizeResult",
    "PreconditionError",
    "ProbeResult",
    "RTOL",
    "Tolerance",
    "bfgs",
    "bisect",
    "bisection",
    "bracket_minimum",
    "cubic",
    "curve_fit",
    "factor_section",
    "golden_section",
    "gradient_probe",
    "is_bracketed",
    "least_squares",
    "line_search",
    "minimize",
    "minimize2",
    "minimize_bracketed",
    "minimize_brent",
    "minimize_scalar",
    "not_too_close",
    "quadratic",
    "tol",
]
