from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

import numpy as np

from noisyfit.config import RunConfig
from noisyfit.core.seeding import make_rng
from noisyfit.core.timers import timed
from noisyfit.datasets.synthetic import DataSet, iter_linear_chunks, make_train_test, num_chunks, split_sizes
from noisyfit.models.linreg import EmptyDataError, fn_cost, test_model
from noisyfit.training.loop import train, train_stream
from noisyfit.training.progress import ProgressCallback

log = logging.getLogger(__name__)


@dataclass
class RunReport:
    # data set
    size: int
    train_size: int
    test_size: int
    true_w: float
    true_b: float
    input_min: float
    input_max: float
    noise_range: float
    # parameters
    initial_w: float
    initial_b: float
    learning_rate: float
    chunk_size: int
    # results
    w: float
    b: float
    test_cost: float
    test_error: float
    train_seconds: float

    @property
    def w_distance(self) -> float:
        return abs(self.true_w - self.w)

    @property
    def b_distance(self) -> float:
        return abs(self.true_b - self.b)


def evaluate_stream(w: float, b: float, chunks: Iterable[DataSet]) -> tuple[float, float, int]:
    """(mse, mae, count) accumulated chunk by chunk."""
    sq = 0.0
    ab = 0.0
    n = 0
    for chunk in chunks:
        r = chunk.x * w + b - chunk.y
        sq += float(np.sum(r * r))
        ab += float(np.sum(np.abs(r)))
        n += len(chunk)
    if n == 0:
        raise EmptyDataError("evaluate_stream needs at least one sample")
    return sq / n, ab / n, n


def _phase(msg: str, on_phase: Optional[Callable[[str], None]]) -> None:
    log.info(msg)
    if on_phase is not None:
        on_phase(msg)


def _initial_params(cfg: RunConfig, rng: np.random.Generator) -> tuple[float, float]:
    # both drawn even when one is fixed, so a seed gives the same data either way
    w0 = float(rng.uniform(-cfg.init_range, cfg.init_range))
    b0 = float(rng.uniform(-cfg.init_range, cfg.init_range))
    w0 = w0 if cfg.initial_w is None else float(cfg.initial_w)
    b0 = b0 if cfg.initial_b is None else float(cfg.initial_b)
    return w0, b0


def run(
    cfg: RunConfig,
    rng: Optional[np.random.Generator] = None,
    callback: Optional[ProgressCallback] = None,
    on_phase: Optional[Callable[[str], None]] = None,
) -> RunReport:
    """
    Generate the 80/20 data sets, train from random (or configured) initial
    parameters and evaluate on the noise-free test set. `on_phase` receives a
    short message as training starts (the CLI echoes it).
    """
    cfg.validate()
    rng = rng if rng is not None else make_rng(cfg.seed)
    # size >= 1 always leaves at least one test sample
    n_train, n_test = split_sizes(cfg.size)
    w0, b0 = _initial_params(cfg, rng)
    gen = dict(input_min=cfg.input_min, input_max=cfg.input_max)

    log.info("Generating the data set (%d train / %d test)", n_train, n_test)
    if cfg.stream:
        train_rng, test_rng = rng.spawn(2)
        train_chunks = iter_linear_chunks(
            cfg.w, cfg.b, n_train, cfg.chunk_size, train_rng, noise_range=cfg.noise_range, **gen
        )
        _phase("Training the model (streamed)...", on_phase)
        with timed("training", log) as t:
            w, b = train_stream(
                w0, b0, train_chunks, num_chunks(n_train, cfg.chunk_size), cfg.learning_rate,
                verbose=cfg.verbose, callback=callback, report_every=cfg.report_every,
            )
        seconds = t.elapsed
        test_chunks = iter_linear_chunks(cfg.w, cfg.b, n_test, max(cfg.chunk_size, 100_000), test_rng, **gen)
        cost, err, _ = evaluate_stream(w, b, test_chunks)
    else:
        train_set, test_set = make_train_test(cfg.w, cfg.b, cfg.size, cfg.noise_range, rng, **gen)
        _phase("Training the model...", on_phase)
        with timed("training", log) as t:
            w, b = train(
                w0, b0, train_set, cfg.learning_rate, cfg.chunk_size,
                verbose=cfg.verbose, callback=callback, report_every=cfg.report_every,
            )
        seconds = t.elapsed
        cost, err = fn_cost(w, b, test_set), test_model(w, b, test_set)

    return RunReport(
        size=cfg.size,
        train_size=n_train,
        test_size=n_test,
        true_w=float(cfg.w),
        true_b=float(cfg.b),
        input_min=cfg.input_min,
        input_max=cfg.input_max,
        noise_range=cfg.noise_range,
        initial_w=w0,
        initial_b=b0,
        learning_rate=cfg.learning_rate,
        chunk_size=cfg.chunk_size,
        w=w,
        b=b,
        test_cost=cost,
        test_error=err,
        train_seconds=seconds,
    )
