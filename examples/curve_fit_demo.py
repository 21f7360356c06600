"""
Example: Derivative-free minimization with qnmin

This example walks through the three layers of the package: univariate
minimization, multivariate BFGS driven only by function values, and curve
fitting by least squares. The last section runs the same fit on the PyTorch
backend.
"""

import math

import numpy as np
import torch

from qnmin import bfgs, curve_fit, least_squares, minimize_scalar


def example_univariate():
    """Example: Minimum of a function of one variable."""
    print("=" * 60)
    print("Example 1: Univariate minimization")
    print("=" * 60)

    x = minimize_scalar(lambda t: (t - 5.0) ** 2, 0.0, 1.0)
    print(f"argmin (x - 5)^2          = {x:.10f}")

    x = minimize_scalar(math.cos, 2.0, 2.5, method="brent")
    print(f"argmin cos(x) near 2 (Brent) = {x:.10f} (pi = {math.pi:.10f})")
    print()


def example_rosenbrock():
    """Example: Rosenbrock valley without gradients."""
    print("=" * 60)
    print("Example 2: BFGS on the Rosenbrock function")
    print("=" * 60)

    def rosen(x):
        return (1 - x[0]) ** 2 + 100 * (x[1] - x[0] ** 2) ** 2

    result = bfgs(rosen, np.array([-1.0, 1.0]), atol=1e-8, rtol=1e-8, maxiter=10000)
    print(f"Message: {result.message}")
    print(f"Minimizer: {result.x}")
    print(f"Line searches: {result.nit}, evaluations: {result.nfev}")
    print()


def example_least_squares():
    """Example: Mean of data as a least-squares problem."""
    print("=" * 60)
    print("Example 3: Least squares")
    print("=" * 60)

    data = np.array([1.0, 2.0, 3.0])
    result = least_squares(lambda x: x[0] - data, [0.0])
    print(f"Mean of {data}: {result.x[0]:.8f}")
    print()


def example_curve_fit():
    """Example: Exponential decay fitted to noisy samples."""
    print("=" * 60)
    print("Example 4: Curve fitting")
    print("=" * 60)

    rng = np.random.default_rng(0)
    t = np.linspace(0.0, 2.0, 20)
    y = 2.0 * np.exp(-1.5 * t) + 0.01 * rng.standard_normal(t.size)

    def model(p, ti):
        return p[0] * np.exp(-p[1] * ti)

    result = curve_fit(model, t, y, [1.0, 1.0], atol=1e-8, rtol=1e-8, residual=False)
    print(f"Fitted amplitude: {result.x[0]:.4f} (true 2.0)")
    print(f"Fitted rate:      {result.x[1]:.4f} (true 1.5)")

    def torch_model(p, ti):
        return p[0] * torch.exp(-p[1] * ti)

    result = curve_fit(
        torch_model, t, y, [1.0, 1.0], atol=1e-8, rtol=1e-8, backend="torch", residual=False
    )
    print(f"Torch backend:    {result.x}")
    print()


if __name__ == "__main__":
    example_univariate()
    example_rosenbrock()
    example_least_squares()
    example_curve_fit()
    print("All examples completed.")
