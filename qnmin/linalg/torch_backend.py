"""PyTorch implementation of the linear algebra provider.

Vectors live on a :class:`~qnmin.linalg.device.Device` as float64 tensors,
so objective functions written with torch operations can run on the GPU.
"""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np
import torch

from .base import LinearAlgebra
from .device import Device, default_device


class TorchLinearAlgebra(LinearAlgebra):
    """Tensor backend bound to a single device."""

    name = "torch"

    def __init__(self, device: Optional[Device] = None) -> None:
        super().__init__()
        self.device = device if device is not None else default_device()

    def __repr__(self) -> str:
        return f"TorchLinearAlgebra(device={self.device!r})"

    def _allocate(self, shape: tuple[int, ...]) -> torch.Tensor:
        return torch.zeros(
            shape, dtype=self.device.dtype, device=self.device.as_torch_device()
        )

    def _zero(self, buf: torch.Tensor) -> None:
        buf.zero_()

    def asvector(self, values: Sequence[float] | torch.Tensor | np.ndarray) -> torch.Tensor:
        if isinstance(values, torch.Tensor):
            tensor = values.detach().to(
                dtype=self.device.dtype, device=self.device.as_torch_device()
            )
            return tensor.reshape(-1).clone()
        return torch.tensor(
            np.asarray(values, dtype=np.float64).reshape(-1),
            dtype=self.device.dtype,
            device=self.device.as_torch_device(),
        )

    def to_numpy(self, v: torch.Tensor) -> np.ndarray:
        return v.detach().cpu().numpy().astype(np.float64, copy=True)

    def dot(self, u: torch.Tensor, v: torch.Tensor) -> float:
        return float(torch.dot(u, v))

    def norm(self, v: torch.Tensor) -> float:
        return float(torch.linalg.vector_norm(v))

    def copy(self, src: torch.Tensor, dst: torch.Tensor) -> None:
        dst.copy_(src)

    def add(self, u: torch.Tensor, v: torch.Tensor, out: torch.Tensor) -> None:
        torch.add(u, v, out=out)

    def sub(self, u: torch.Tensor, v: torch.Tensor, out: torch.Tensor) -> None:
        torch.sub(u, v, out=out)

    def axpy(self, x: torch.Tensor, alpha: float, p: torch.Tensor, out: torch.Tensor) -> None:
        torch.add(x, p, alpha=alpha, out=out)

    def set_identity(self, mat: torch.Tensor) -> None:
        mat.zero_()
        mat.fill_diagonal_(1.0)

    def syr(self, alpha: float, v: torch.Tensor, mat: torch.Tensor) -> None:
        mat.add_(torch.outer(v, v), alpha=alpha)

    def syr2(self, alpha: float, u: torch.Tensor, v: torch.Tensor, mat: torch.Tensor) -> None:
        uv = torch.outer(u, v)
        mat.add_(uv + uv.T, alpha=alpha)

    def symv(self, mat: torch.Tensor, v: torch.Tensor, out: torch.Tensor) -> None:
        torch.mv(mat, v, out=out)


__all__ = ["TorchLinearAlgebra"]
