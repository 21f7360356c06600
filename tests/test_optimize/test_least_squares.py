import numpy as np
import pytest
import torch

from qnmin.optimize import PreconditionError, curve_fit, least_squares


def test_least_squares_mean_of_data():
    data = np.array([1.0, 2.0, 3.0])
    res = least_squares(lambda x: x[0] - data, [0.0])
    assert res.success
    assert res.x[0] == pytest.approx(2.0, abs=1e-6)
    assert res.fun == pytest.approx(2.0)


def test_least_squares_torch_residuals():
    data = torch.tensor([1.0, 2.0, 3.0], dtype=torch.float64)
    res = least_squares(lambda x: x[0] - data, [0.0], backend="torch")
    assert res.x[0] == pytest.approx(2.0, abs=1e-6)


def test_least_squares_linear_regression():
    t = np.linspace(0.0, 1.0, 6)
    y = 0.5 + 3.0 * t

    def residuals(p):
        return y - (p[0] + p[1] * t)

    res = least_squares(residuals, [0.0, 0.0], atol=1e-9, rtol=1e-9)
    assert np.allclose(res.x, [0.5, 3.0], atol=1e-6)
    assert res.fun < 1e-10


def test_curve_fit_default_treats_model_as_residual():
    # The model value itself is squared; ydata only has to match in length.
    xdata = np.array([1.0, 2.0, 3.0])
    ydata = np.array([10.0, 20.0, 30.0])
    res = curve_fit(lambda p, x: p[0] - x, xdata, ydata, [0.0])
    assert res.x[0] == pytest.approx(2.0, abs=1e-6)


def test_curve_fit_against_data():
    xdata = np.array([0.0, 1.0, 2.0, 3.0])
    ydata = 1.0 + 2.0 * xdata
    res = curve_fit(
        lambda p, x: p[0] + p[1] * x,
        xdata,
        ydata,
        [0.0, 0.0],
        atol=1e-9,
        rtol=1e-9,
        residual=False,
    )
    assert res.success
    assert np.allclose(res.x, [1.0, 2.0], atol=1e-6)


def test_curve_fit_exponential_decay():
    xdata = np.linspace(0.0, 2.0, 8)
    ydata = 2.0 * np.exp(-1.5 * xdata)
    res = curve_fit(
        lambda p, x: p[0] * np.exp(-p[1] * x),
        xdata,
        ydata,
        [1.0, 1.0],
        atol=1e-9,
        rtol=1e-9,
        maxiter=1000,
        residual=False,
    )
    assert np.allclose(res.x, [2.0, 1.5], atol=1e-5)


def test_curve_fit_length_mismatch():
    with pytest.raises(PreconditionError, match="same length"):
        curve_fit(lambda p, x: p[0] - x, [1.0, 2.0], [1.0], [0.0])


def test_curve_fit_does_not_mutate_parameters():
    p0 = np.array([0.0])
    curve_fit(lambda p, x: p[0] - x, [1.0, 2.0, 3.0], [0.0, 0.0, 0.0], p0)
    np.testing.assert_array_equal(p0, [0.0])
