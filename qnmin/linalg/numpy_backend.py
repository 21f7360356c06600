"""NumPy implementation of the linear algebra provider."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from .base import LinearAlgebra


class NumpyLinearAlgebra(LinearAlgebra):
    """Float64 ``ndarray`` backend. This is the default backend."""

    name = "numpy"

    def _allocate(self, shape: tuple[int, ...]) -> np.ndarray:
        return np.zeros(shape, dtype=np.float64)

    def _zero(self, buf: np.ndarray) -> None:
        buf.fill(0.0)

    def asvector(self, values: Sequence[float] | np.ndarray) -> np.ndarray:
        return np.array(values, dtype=np.float64).reshape(-1)

    def to_numpy(self, v: np.ndarray) -> np.ndarray:
        return np.array(v, dtype=np.float64, copy=True)

    def dot(self, u: np.ndarray, v: np.ndarray) -> float:
        return float(np.dot(u, v))

    def norm(self, v: np.ndarray) -> float:
        return float(np.linalg.norm(v))

    def copy(self, src: np.ndarray, dst: np.ndarray) -> None:
        np.copyto(dst, src)

    def add(self, u: np.ndarray, v: np.ndarray, out: np.ndarray) -> None:
        np.add(u, v, out=out)

    def sub(self, u: np.ndarray, v: np.ndarray, out: np.ndarray) -> None:
        np.subtract(u, v, out=out)

    def axpy(self, x: np.ndarray, alpha: float, p: np.ndarray, out: np.ndarray) -> None:
        np.multiply(p, alpha, out=out)
        out += x

    def set_identity(self, mat: np.ndarray) -> None:
        mat.fill(0.0)
        np.fill_diagonal(mat, 1.0)

    def syr(self, alpha: float, v: np.ndarray, mat: np.ndarray) -> None:
        mat += alpha * np.outer(v, v)

    def syr2(self, alpha: float, u: np.ndarray, v: np.ndarray, mat: np.ndarray) -> None:
        uv = np.outer(u, v)
        mat += alpha * (uv + uv.T)

    def symv(self, mat: np.ndarray, v: np.ndarray, out: np.ndarray) -> None:
        np.matmul(mat, v, out=out)


__all__ = ["NumpyLinearAlgebra"]
