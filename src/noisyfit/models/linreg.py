from __future__ import annotations

import numpy as np

from noisyfit.datasets.synthetic import DataSet


class EmptyDataError(ValueError):
    """Raised when a mean over the data set is requested for zero samples."""


def _residual(w: float, b: float, data: DataSet, what: str) -> np.ndarray:
    if len(data) == 0:
        raise EmptyDataError(f"{what} needs at least one sample")
    # same operand order as the generator, so exact parameters give exact zeros
    return data.x * w + b - data.y


def fn_cost(w: float, b: float, data: DataSet) -> float:
    """Mean squared error of y_hat = w * x + b over `data`."""
    r = _residual(w, b, data, "fn_cost")
    return float(np.mean(r * r))


def cost_derivative(w: float, b: float, data: DataSet) -> tuple[float, float]:
    """
    Mean partial derivatives of (w * x + b - y)^2 w.r.t. w and b, without the
    factor 2 (it is folded into the learning rate):

        dw = mean(x * (w * x + b - y))
        db = mean(w * x + b - y)
    """
    r = _residual(w, b, data, "cost_derivative")
    return float(np.mean(data.x * r)), float(np.mean(r))


def test_model(w: float, b: float, data: DataSet) -> float:
    """Mean absolute error of the model on held-out data."""
    r = _residual(w, b, data, "test_model")
    return float(np.mean(np.abs(r)))

