from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, NamedTuple, Optional

import numpy as np

INPUT_MIN = -255.0
INPUT_MAX = 255.0
TRAIN_PERCENT = 80


class Sample(NamedTuple):
    input: float
    output: float


@dataclass(frozen=True, eq=False)
class DataSet:
    """Ordered (input, output) pairs stored as two float64 columns."""

    x: np.ndarray
    y: np.ndarray

    def __post_init__(self):
        x = np.asarray(self.x, dtype=np.float64).reshape(-1)
        y = np.asarray(self.y, dtype=np.float64).reshape(-1)
        if x.shape != y.shape:
            raise ValueError(f"inputs and outputs differ in length: {x.shape[0]} vs {y.shape[0]}")
        object.__setattr__(self, "x", x)
        object.__setattr__(self, "y", y)

    @classmethod
    def empty(cls) -> "DataSet":
        return cls(np.empty(0), np.empty(0))

    @classmethod
    def from_samples(cls, samples) -> "DataSet":
        pairs = np.asarray(list(samples), dtype=np.float64).reshape(-1, 2)
        return cls(pairs[:, 0], pairs[:, 1])

    def __len__(self) -> int:
        return int(self.x.shape[0])

    def __iter__(self) -> Iterator[Sample]:
        for xi, yi in zip(self.x, self.y):
            yield Sample(float(xi), float(yi))

    def chunks(self, size: int) -> Iterator["DataSet"]:
        """Consecutive views of `size` samples; the last one may be shorter."""
        if size <= 0:
            raise ValueError("chunk size must be positive")
        for start in range(0, len(self), size):
            yield DataSet(self.x[start : start + size], self.y[start : start + size])


def num_chunks(n: int, size: int) -> int:
    if size <= 0:
        raise ValueError("chunk size must be positive")
    return math.ceil(n / size) if n > 0 else 0


def epsilon_noise(range_: float, rng: np.random.Generator, size: Optional[int] = None):
    """
    Uniform noise in [-range_, range_]: one float, or an array of `size`
    independent draws. A zero range gives 0.0 (or zeros) and leaves the
    generator untouched.
    """
    if range_ < 0:
        raise ValueError(f"noise range must be >= 0, got {range_}")
    if range_ == 0:
        return 0.0 if size is None else np.zeros(size)
    if size is None:
        return float(rng.uniform(-range_, range_))
    return rng.uniform(-range_, range_, size=size)


def _check_args(count: int, input_min: float, input_max: float) -> None:
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")
    if input_min > input_max:
        raise ValueError(f"input_min ({input_min}) > input_max ({input_max})")


def make_linear_data(
    w: float,
    b: float,
    count: int,
    rng: np.random.Generator,
    input_min: float = INPUT_MIN,
    input_max: float = INPUT_MAX,
    noise_range: float = 0.0,
) -> DataSet:
    """
    y = x * w + b (+ noise). Inputs are uniform over [input_min, input_max].
    With noise_range == 0 no noise is drawn at all (the test-set variant).
    """
    _check_args(count, input_min, input_max)
    x = rng.uniform(input_min, input_max, size=count)
    y = x * w + b
    if noise_range != 0:
        y = y + epsilon_noise(noise_range, rng, size=count)
    return DataSet(x, y)


def iter_linear_chunks(
    w: float,
    b: float,
    count: int,
    chunk_size: int,
    rng: np.random.Generator,
    input_min: float = INPUT_MIN,
    input_max: float = INPUT_MAX,
    noise_range: float = 0.0,
) -> Iterator[DataSet]:
    """
    Same distribution as make_linear_data, generated `chunk_size` samples at a
    time so that only one chunk lives in memory.
    """
    _check_args(count, input_min, input_max)
    if chunk_size <= 0:
        raise ValueError("chunk size must be positive")
    remaining = count
    while remaining > 0:
        n = min(chunk_size, remaining)
        yield make_linear_data(w, b, n, rng, input_min, input_max, noise_range)
        remaining -= n


def split_sizes(size: int) -> tuple[int, int]:
    """80/20 split: (train, test) with train = floor(size * 0.8)."""
    if size < 0:
        raise ValueError(f"size must be >= 0, got {size}")
    train = size * TRAIN_PERCENT // 100
    return train, size - train


def make_train_test(
    w: float,
    b: float,
    size: int,
    noise_range: float,
    rng: np.random.Generator,
    input_min: float = INPUT_MIN,
    input_max: float = INPUT_MAX,
) -> tuple[DataSet, DataSet]:
    """Noisy training set and noise-free test set for the 80/20 split of `size`."""
    n_train, n_test = split_sizes(size)
    train = make_linear_data(w, b, n_train, rng, input_min, input_max, noise_range=noise_range)
    test = make_linear_data(w, b, n_test, rng, input_min, input_max)
    return train, test
