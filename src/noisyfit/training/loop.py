from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from noisyfit.config import CHUNK_SIZE, LEARNING_RATE, ConfigError, as_count
from noisyfit.datasets.synthetic import DataSet, num_chunks
from noisyfit.models.linreg import cost_derivative, fn_cost
from noisyfit.training.progress import LogProgress, ProgressCallback

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrainConfig:
    learning_rate: float = LEARNING_RATE
    chunk_size: int = CHUNK_SIZE
    verbose: bool = False
    report_every: int = 500

    def __post_init__(self):
        object.__setattr__(self, "chunk_size", as_count("chunk_size", self.chunk_size))
        object.__setattr__(self, "report_every", as_count("report_every", self.report_every))
        if self.chunk_size <= 0:
            raise ConfigError(f"chunk_size must be a positive integer, got {self.chunk_size}")
        if self.report_every <= 0:
            raise ConfigError(f"report_every must be a positive integer, got {self.report_every}")


def _run(
    w: float,
    b: float,
    chunks: Iterable[DataSet],
    total: int,
    cfg: TrainConfig,
    callback: Optional[ProgressCallback],
) -> tuple[float, float]:
    lr = cfg.learning_rate
    report = callback if cfg.verbose else None
    if report is None and cfg.verbose:
        report = LogProgress(log)

    step = 0
    cost = None
    for chunk in chunks:
        if report is not None and step == 0:
            # initial parameters, measured on the first chunk
            report(0, total, w, b, fn_cost(w, b, chunk))

        dw, db = cost_derivative(w, b, chunk)
        w = w - dw * lr
        b = b - db * lr

        # chunk cost only; full-set cost would make each step O(n)
        cost = fn_cost(w, b, chunk)
        step += 1

        if report is not None and (step % cfg.report_every == 0 or step == total):
            report(step, total, w, b, cost)

    if report is not None and cost is not None and step != total:
        # total was an estimate (streamed input ended early or ran long)
        report(step, step, w, b, cost)
    return float(w), float(b)


def train(
    w0: float,
    b0: float,
    data: DataSet,
    learning_rate: float = LEARNING_RATE,
    chunk_size: int = CHUNK_SIZE,
    verbose: bool = False,
    callback: Optional[ProgressCallback] = None,
    report_every: int = 500,
) -> tuple[float, float]:
    """
    Gradient descent over consecutive chunks of `data`, one update per chunk.

    Each chunk's step sees the (w, b) left by the previous one. There is no
    convergence check or divergence guard: a learning rate that is too large
    yields inf/nan, returned as-is. With `verbose`, progress goes to `callback`
    (or the module logger) on step 0, every `report_every` steps and on the
    last step; reporting never changes the result.
    """
    cfg = TrainConfig(learning_rate, chunk_size, verbose, report_every)
    total = num_chunks(len(data), cfg.chunk_size)
    return _run(float(w0), float(b0), data.chunks(cfg.chunk_size), total, cfg, callback)


def train_stream(
    w0: float,
    b0: float,
    chunks: Iterable[DataSet],
    total: int,
    learning_rate: float = LEARNING_RATE,
    verbose: bool = False,
    callback: Optional[ProgressCallback] = None,
    report_every: int = 500,
) -> tuple[float, float]:
    """
    Same loop over already-chunked input (e.g. iter_linear_chunks), so the
    full data set never has to be materialized. `total` is the expected chunk
    count, used for progress only.
    """
    # chunk size is fixed by the producer; only the report cadence is validated here
    cfg = TrainConfig(learning_rate, 1, verbose, report_every)
    return _run(float(w0), float(b0), chunks, total, cfg, callback)
