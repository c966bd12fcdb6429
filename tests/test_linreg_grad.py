import numpy as np
import pytest

from noisyfit.datasets.synthetic import DataSet, make_linear_data
from noisyfit.models.linreg import EmptyDataError, cost_derivative, fn_cost, test_model as mae


def numerical_grad(w, b, data, eps=1e-6):
    # L(w, b) = mean((w x + b - y)^2)
    gw = (fn_cost(w + eps, b, data) - fn_cost(w - eps, b, data)) / (2 * eps)
    gb = (fn_cost(w, b + eps, data) - fn_cost(w, b - eps, data)) / (2 * eps)
    return gw, gb


def test_linreg_gradient_check():
    rng = np.random.default_rng(0)
    data = make_linear_data(1.5, -0.5, 20, rng, input_min=-2.0, input_max=2.0, noise_range=0.1)
    dw, db = cost_derivative(0.3, 0.2, data)
    gw, gb = numerical_grad(0.3, 0.2, data)
    # analytic gradient drops the factor 2
    assert np.allclose([2 * dw, 2 * db], [gw, gb], atol=1e-5)


def test_cost_matches_independent_mse():
    rng = np.random.default_rng(1)
    data = make_linear_data(2.0, 5.0, 300, rng)
    for w, b in [(0.0, 0.0), (1.9, 4.0), (-3.0, 12.5)]:
        expected = sum((w * s.input + b - s.output) ** 2 for s in data) / len(data)
        assert fn_cost(w, b, data) == pytest.approx(expected, rel=1e-12)


def test_exact_parameters_give_exact_zeros():
    rng = np.random.default_rng(2)
    for w, b in [(2.0, 5.0), (-0.37, 123.456), (1e3, -7.1)]:
        data = make_linear_data(w, b, 500, rng)
        assert fn_cost(w, b, data) == 0.0
        assert cost_derivative(w, b, data) == (0.0, 0.0)
        assert mae(w, b, data) == 0.0


def test_small_hand_case():
    data = DataSet.from_samples([(0.0, 1.0), (1.0, 1.0)])
    # residuals w x + b - y with (w, b) = (1, 0): [-1, 0]
    assert fn_cost(1.0, 0.0, data) == 0.5
    assert mae(1.0, 0.0, data) == 0.5
    assert cost_derivative(1.0, 0.0, data) == (0.0, -0.5)


@pytest.mark.parametrize("fn", [fn_cost, cost_derivative, mae])
def test_empty_data_fails_loudly(fn):
    with pytest.raises(EmptyDataError):
        fn(1.0, 1.0, DataSet.empty())
