from __future__ import annotations

from typing import Optional

import numpy as np


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """
    Build the random source threaded through noise, data and initial weights.
    `None` pulls fresh entropy from the OS.
    """
    return np.random.default_rng(seed)
