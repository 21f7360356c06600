"""Pytest configuration and shared fixtures for qnmin tests.

This module provides:
- Deterministic RNG fixtures for numpy and torch
- Both linear algebra backends as a parametrized fixture
- Debug mode restoration around every test
"""

import os

import numpy as np
import pytest
import torch

from qnmin.diagnostics import is_debug_enabled, set_debug_enabled
from qnmin.linalg import NumpyLinearAlgebra, TorchLinearAlgebra


def _seed() -> int:
    return int(os.environ.get("TEST_RNG_SEED", "0"))


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    """
    return np.random.default_rng(_seed())


@pytest.fixture(scope="function")
def torch_rng() -> torch.Generator:
    """Provide a deterministic CPU torch RNG for tests."""
    generator = torch.Generator(device="cpu")
    generator.manual_seed(_seed())
    return generator


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds() -> None:
    """Set global random seeds so every test is reproducible."""
    np.random.seed(_seed())
    torch.manual_seed(_seed())


@pytest.fixture(scope="function", autouse=True)
def restore_debug_mode():
    """Restore the global debug flag after each test."""
    original = is_debug_enabled()
    yield
    set_debug_enabled(original)


@pytest.fixture(params=["numpy", "torch"])
def la(request):
    """A fresh provider of each backend, so pool counters start at zero."""
    if request.param == "numpy":
        return NumpyLinearAlgebra()
    return TorchLinearAlgebra()
