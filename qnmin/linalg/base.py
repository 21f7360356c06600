"""Abstract linear algebra provider consumed by the multivariate solvers.

The solvers only need a handful of dense BLAS-like primitives: dot product,
Euclidean norm, symmetric rank-1 and rank-2 updates, symmetric matrix-vector
product, identity construction and element-wise vector arithmetic. Each
backend implements them on its own array type.

Scratch buffers are handed out by :meth:`LinearAlgebra.workspace`, a context
manager that returns every buffer to the provider's pool when the block
exits, whether normally or through an exception.
"""

from __future__ import annotations

import math
import threading
from abc import ABC, abstractmethod
from collections import defaultdict
from contextlib import contextmanager
from typing import Any, Iterator, Sequence

import numpy as np

Vector = Any
Matrix = Any


class LinearAlgebra(ABC):
    """Dense vector and matrix primitives plus pooled scratch buffers.

    Released buffers are kept for reuse, at most ``max_pooled_per_shape``
    of each shape and none larger than ``max_pooled_size`` elements; the
    rest are left to the garbage collector.
    """

    name: str = "abstract"
    max_pooled_per_shape: int = 8
    max_pooled_size: int = 1 << 20

    def __init__(self) -> None:
        self._pool: dict[tuple[int, ...], list[Any]] = defaultdict(list)
        self._lock = threading.Lock()
        self._in_use = 0

    # -- buffer management -------------------------------------------------

    @abstractmethod
    def _allocate(self, shape: tuple[int, ...]) -> Any:
        """Return a new zero-filled buffer of the given shape."""

    @abstractmethod
    def _zero(self, buf: Any) -> None:
        """Fill ``buf`` with zeros in place."""

    def _acquire(self, shape: tuple[int, ...]) -> Any:
        with self._lock:
            free = self._pool.get(shape)
            buf = free.pop() if free else None
            self._in_use += 1
        if buf is None:
            return self._allocate(shape)
        self._zero(buf)
        return buf

    def _release(self, buf: Any) -> None:
        shape = tuple(buf.shape)
        with self._lock:
            self._in_use -= 1
            if math.prod(shape) > self.max_pooled_size:
                return
            free = self._pool[shape]
            if len(free) < self.max_pooled_per_shape:
                free.append(buf)

    @property
    def buffers_pooled(self) -> int:
        """Number of released buffers held for reuse."""
        with self._lock:
            return sum(len(free) for free in self._pool.values())

    def clear_pool(self) -> None:
        """Drop every released buffer held for reuse."""
        with self._lock:
            self._pool.clear()

    @property
    def buffers_in_use(self) -> int:
        """Number of pooled buffers currently held by open workspaces."""
        return self._in_use

    @contextmanager
    def workspace(self) -> Iterator["Workspace"]:
        """Open a scope whose buffers are released on exit.

        Example:
            >>> from qnmin.linalg import get_backend
            >>> la = get_backend("numpy")
            >>> with la.workspace() as ws:
            ...     v = ws.vector(3)
        """
        ws = Workspace(self)
        try:
            yield ws
        finally:
            ws.release()

    # -- conversions -------------------------------------------------------

    @abstractmethod
    def asvector(self, values: Sequence[float] | Any) -> Vector:
        """Return a new, unpooled float64 vector holding ``values``."""

    @abstractmethod
    def to_numpy(self, v: Vector) -> np.ndarray:
        """Return a NumPy copy of ``v`` that shares no memory with it."""

    # -- element access ----------------------------------------------------

    def get(self, v: Vector, i: int) -> float:
        return float(v[i])

    def set(self, v: Vector, i: int, value: float) -> None:
        v[i] = value

    # -- BLAS-like primitives ----------------------------------------------

    @abstractmethod
    def dot(self, u: Vector, v: Vector) -> float:
        """Return ``uᵀv``."""

    @abstractmethod
    def norm(self, v: Vector) -> float:
        """Return the Euclidean norm of ``v``."""

    @abstractmethod
    def copy(self, src: Vector, dst: Vector) -> None:
        """Copy ``src`` into ``dst``."""

    @abstractmethod
    def add(self, u: Vector, v: Vector, out: Vector) -> None:
        """``out = u + v``."""

    @abstractmethod
    def sub(self, u: Vector, v: Vector, out: Vector) -> None:
        """``out = u - v``."""

    @abstractmethod
    def axpy(self, x: Vector, alpha: float, p: Vector, out: Vector) -> None:
        """``out = x + alpha * p``. ``out`` may not alias ``x`` or ``p``."""

    @abstractmethod
    def set_identity(self, mat: Matrix) -> None:
        """Overwrite a square matrix with the identity."""

    @abstractmethod
    def syr(self, alpha: float, v: Vector, mat: Matrix) -> None:
        """Symmetric rank-1 update ``mat += alpha * v vᵀ``."""

    @abstractmethod
    def syr2(self, alpha: float, u: Vector, v: Vector, mat: Matrix) -> None:
        """Symmetric rank-2 update ``mat += alpha * (u vᵀ + v uᵀ)``."""

    @abstractmethod
    def symv(self, mat: Matrix, v: Vector, out: Vector) -> None:
        """Symmetric matrix-vector product ``out = mat @ v``."""


class Workspace:
    """Scratch buffers borrowed from a :class:`LinearAlgebra` pool."""

    def __init__(self, la: LinearAlgebra) -> None:
        self.la = la
        self._buffers: list[Any] = []

    def _take(self, shape: tuple[int, ...]) -> Any:
        buf = self.la._acquire(shape)
        self._buffers.append(buf)
        return buf

    def vector(self, n: int) -> Vector:
        """Zero vector of length ``n``."""
        return self._take((n,))

    def copy_of(self, v: Vector) -> Vector:
        """Pooled vector holding a copy of ``v``."""
        buf = self._take(tuple(v.shape))
        self.la.copy(v, buf)
        return buf

    def identity(self, n: int) -> Matrix:
        """``n``-by-``n`` identity matrix."""
        mat = self._take((n, n))
        self.la.set_identity(mat)
        return mat

    def release(self) -> None:
        """Return every buffer to the pool. Safe to call twice."""
        while self._buffers:
            self.la._release(self._buffers.pop())


__all__ = ["LinearAlgebra", "Matrix", "Vector", "Workspace"]
