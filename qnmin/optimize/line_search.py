"""Exact line search along a direction using the univariate minimizer."""

from __future__ import annotations

from typing import Any, Optional

from ..linalg import BackendLike, get_backend
from ..logging import get_logger
from .core import ATOL, RTOL, CountingObjective, Objective, PreconditionError
from .scalar import minimize_scalar

logger = get_logger(__name__)


def line_search(
    fun: Objective,
    x: Any,
    p: Any,
    dx: float,
    atol: float = ATOL,
    rtol: float = RTOL,
    out: Optional[Any] = None,
    backend: BackendLike = None,
) -> tuple[Any, float, int]:
    """Minimize ``fun`` on the line through ``x`` along ``p``.

    The line is parametrized by distance, ``x + a / ||p|| * p``, and searched
    from the seeds ``0`` and ``max(dx / 4, 2 * atol)``, so ``dx`` should be a
    rough length of the expected step.

    Parameters
    ----------
    fun:
        Objective taking a vector of the backend's array type.
    x, p:
        Base point and direction, backend vectors.
    dx:
        Step scale hint.
    out:
        Buffer receiving the minimizing point. Must not alias ``x`` or
        ``p``. A new vector is allocated when omitted.

    Returns
    -------
    tuple
        ``(point, a, nfev)``: the point written to ``out``, the distance
        moved along the normalized direction and the number of evaluations.

    Raises
    ------
    PreconditionError
        If ``p`` is the zero vector.
    """
    la = get_backend(backend)
    norm = la.norm(p)
    if norm == 0:
        raise PreconditionError("Search direction p is zero.")
    if out is None:
        out = la.asvector(x)
    counted = CountingObjective(fun)

    def phi(a: float) -> float:
        la.axpy(x, a / norm, p, out)
        return counted(out)

    a = minimize_scalar(phi, 0.0, max(dx * 0.25, atol * 2.0), atol=atol, rtol=rtol)
    la.axpy(x, a / norm, p, out)
    logger.debug("line search moved %r in %d evaluations", a, counted.nfev)
    return out, a, counted.nfev


__all__ = ["line_search"]
