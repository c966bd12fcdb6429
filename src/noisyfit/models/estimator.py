from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from noisyfit.config import CHUNK_SIZE, LEARNING_RATE
from noisyfit.datasets.synthetic import DataSet
from noisyfit.models.linreg import fn_cost, test_model
from noisyfit.training.loop import train


@dataclass
class ChunkedLinearRegression:
    lr: float = LEARNING_RATE
    chunk_size: int = CHUNK_SIZE
    verbose: bool = False
    w: float | None = None
    b: float = 0.0

    def fit(self, data: DataSet, w0: float = 0.0, b0: float = 0.0, callback=None):
        self.w, self.b = train(w0, b0, data, self.lr, self.chunk_size, self.verbose, callback)
        return self

    def predict(self, x: np.ndarray) -> np.ndarray:
        assert self.w is not None
        return np.asarray(x, dtype=np.float64) * self.w + self.b

    def mse(self, data: DataSet) -> float:
        assert self.w is not None
        return fn_cost(self.w, self.b, data)

    def mae(self, data: DataSet) -> float:
        assert self.w is not None
        return test_model(self.w, self.b, data)
