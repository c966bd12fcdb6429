from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from noisyfit.core.io import load_yaml
from noisyfit.datasets.synthetic import INPUT_MAX, INPUT_MIN

log = logging.getLogger(__name__)

MAX_DATA_SET_SIZE = 1_000_000_000
LEARNING_RATE = 1e-5
CHUNK_SIZE = 10
INIT_RANGE = 100.0


class ConfigError(ValueError):
    """Invalid run or training configuration."""


def as_number(name: str, value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{name} must be a number, got {value!r}") from e


def as_count(name: str, value: Any) -> int:
    """Whole numbers only: 10, 10.0 and "10" pass, 2.5 does not."""
    v = as_number(name, value)
    if not (math.isfinite(v) and v.is_integer()):
        raise ConfigError(f"{name} must be a whole number, got {value!r}")
    return int(v)


def normalize_size(value: float) -> int:
    """Truncate to an integer count, reject <= 0, clamp to MAX_DATA_SET_SIZE."""
    v = as_number("data set size", value)
    if not math.isfinite(v):
        raise ConfigError(f"data set size must be a finite number, got {value}")
    size = int(v)
    if size <= 0:
        raise ConfigError("please provide a non-null positive size")
    if size > MAX_DATA_SET_SIZE:
        log.warning("data set size %d capped at %d", size, MAX_DATA_SET_SIZE)
        size = MAX_DATA_SET_SIZE
    return size


@dataclass
class RunConfig:
    # data set
    w: float
    b: float
    noise_range: float
    size: int
    input_min: float = INPUT_MIN
    input_max: float = INPUT_MAX

    # model / training
    learning_rate: float = LEARNING_RATE
    chunk_size: int = CHUNK_SIZE
    init_range: float = INIT_RANGE
    initial_w: Optional[float] = None  # drawn from [-init_range, init_range) when None
    initial_b: Optional[float] = None
    report_every: int = 500

    # runtime
    seed: Optional[int] = None
    stream: bool = False  # generate/consume chunk by chunk instead of in memory
    verbose: bool = True
    log_level: str = "INFO"
    log_file: Optional[str] = None

    def __post_init__(self):
        # YAML hands over strings for "1e-5" and quoted numbers
        for name in ("w", "b", "noise_range", "input_min", "input_max", "learning_rate", "init_range"):
            setattr(self, name, as_number(name, getattr(self, name)))
        for name in ("initial_w", "initial_b"):
            if getattr(self, name) is not None:
                setattr(self, name, as_number(name, getattr(self, name)))
        self.chunk_size = as_count("chunk_size", self.chunk_size)
        self.report_every = as_count("report_every", self.report_every)
        if self.seed is not None:
            self.seed = as_count("seed", self.seed)
        self.noise_range = abs(self.noise_range)
        self.size = normalize_size(self.size)

    def validate(self) -> "RunConfig":
        if not all(math.isfinite(v) for v in (self.w, self.b, self.noise_range)):
            raise ConfigError("w, b and noise_range must be finite")
        if int(self.chunk_size) <= 0:
            raise ConfigError(f"chunk_size must be a positive integer, got {self.chunk_size}")
        if int(self.report_every) <= 0:
            raise ConfigError(f"report_every must be a positive integer, got {self.report_every}")
        if not (math.isfinite(self.learning_rate) and self.learning_rate > 0):
            raise ConfigError(f"learning_rate must be a positive finite float, got {self.learning_rate}")
        if self.input_min > self.input_max:
            raise ConfigError(f"input_min ({self.input_min}) > input_max ({self.input_max})")
        if self.init_range < 0:
            raise ConfigError(f"init_range must be >= 0, got {self.init_range}")
        return self

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "RunConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(d) - known)
        if unknown:
            raise ConfigError(f"unknown config keys: {', '.join(unknown)}")
        missing = [k for k in ("w", "b", "noise_range", "size") if k not in d]
        if missing:
            raise ConfigError(f"missing config keys: {', '.join(missing)}")
        return cls(**d).validate()

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def read_config_values(path: Path | str) -> Dict[str, Any]:
    """Raw YAML mapping of RunConfig fields; required keys may still be missing."""
    try:
        raw = load_yaml(path) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"{path}: not valid YAML ({e})") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"{path}: expected a mapping at top level")
    unknown = sorted(set(raw) - {f.name for f in fields(RunConfig)})
    if unknown:
        raise ConfigError(f"unknown config keys: {', '.join(unknown)}")
    return raw


def load_config(path: Path | str, **overrides: Any) -> RunConfig:
    """
    Read a YAML mapping of RunConfig fields. Keyword overrides that are not None
    win over the file (CLI flags).
    """
    raw = read_config_values(path)
    raw.update({k: v for k, v in overrides.items() if v is not None})
    return RunConfig.from_dict(raw)
