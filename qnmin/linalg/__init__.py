"""Linear algebra providers for the multivariate solvers.

Example
-------
>>> from qnmin.linalg import get_backend
>>> la = get_backend("numpy")
>>> with la.workspace() as ws:
...     h = ws.identity(2)
...     v = la.asvector([1.0, 2.0])
...     la.syr(0.5, v, h)
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional, Union

from .base import LinearAlgebra, Matrix, Vector, Workspace
from .device import Device, default_device, device
from .numpy_backend import NumpyLinearAlgebra
from .torch_backend import TorchLinearAlgebra

BackendLike = Union[None, str, LinearAlgebra]


@lru_cache(maxsize=None)
def _named_backend(name: str) -> LinearAlgebra:
    if name == "numpy":
        return NumpyLinearAlgebra()
    if name == "torch":
        return TorchLinearAlgebra(default_device())
    supported = ["numpy", "torch"]
    raise ValueError(f"Unsupported backend {name!r}. Supported backends: {supported}")


def get_backend(backend: BackendLike = None) -> LinearAlgebra:
    """Resolve a backend name or instance to a provider.

    Args:
        backend: None (NumPy), "numpy", "torch" (CPU device), or an existing
            :class:`LinearAlgebra` instance, which is returned unchanged.

    Raises:
        ValueError: For an unknown backend name.
    """
    if isinstance(backend, LinearAlgebra):
        return backend
    return _named_backend((backend or "numpy").lower())


def torch_backend(name: Optional[str] = None) -> TorchLinearAlgebra:
    """Create a torch backend on the named device ("cpu" or "cuda")."""
    return TorchLinearAlgebra(device(name) if name is not None else default_device())


__all__ = [
    "BackendLike",
    "Device",
    "LinearAlgebra",
    "Matrix",
    "NumpyLinearAlgebra",
    "TorchLinearAlgebra",
    "Vector",
    "Workspace",
    "default_device",
    "device",
    "get_backend",
    "torch_backend",
]
