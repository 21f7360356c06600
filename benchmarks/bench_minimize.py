"""Benchmark multivariate minimization on both linear algebra backends."""

import time
from typing import Dict

import numpy as np

from qnmin.linalg import get_backend
from qnmin.optimize import bfgs


def extended_rosenbrock(x) -> float:
    total = 0.0
    for i in range(0, x.shape[0] - 1, 2):
        total += float((1 - x[i]) ** 2 + 100 * (x[i + 1] - x[i] ** 2) ** 2)
    return total


def benchmark_bfgs(
    n: int,
    backend: str = "numpy",
    repeats: int = 3,
) -> Dict[str, float]:
    """Benchmark BFGS on the extended Rosenbrock function.

    Args:
        n: Problem dimension (even).
        backend: "numpy" or "torch".
        repeats: Number of timed runs.

    Returns:
        Dictionary with timing results.
    """
    la = get_backend(backend)
    x0 = np.tile([-1.0, 1.0], n // 2)

    # Warmup
    bfgs(extended_rosenbrock, x0, atol=1e-6, rtol=1e-6, backend=la, maxiter=10000)

    start = time.perf_counter()
    for _ in range(repeats):
        res = bfgs(extended_rosenbrock, x0, atol=1e-6, rtol=1e-6, backend=la, maxiter=10000)
    end = time.perf_counter()

    total_time = end - start
    return {
        "n": n,
        "nit": res.nit,
        "nfev": res.nfev,
        "time_per_run_sec": total_time / repeats,
        "evals_per_sec": res.nfev * repeats / total_time,
    }


if __name__ == "__main__":
    print("Benchmarking BFGS on extended Rosenbrock...")
    for backend in ("numpy", "torch"):
        for n in (2, 8, 16):
            results = benchmark_bfgs(n, backend=backend)
            print(f"{backend} n={n}:")
            print(f"  Time per run: {results['time_per_run_sec']*1e3:.2f} ms")
            print(f"  Evaluations: {results['nfev']} ({results['evals_per_sec']:.0f}/s)")
