from __future__ import annotations

import logging
import sys
from typing import Optional, Protocol, TextIO

"""
src/noisyfit/training/progress.py

Progress observers for the training loop:
- ConsoleProgress: bar + w/b/cost, redrawn in place on a terminal
- LogProgress: one log line per report
"""

# ANSI "cursor previous line", enough to climb back over one report block
_REDRAW = "\x1b[5F"


class ProgressCallback(Protocol):
    def __call__(self, step: int, total: int, w: float, b: float, cost: float) -> None: ...


def progress_bar(percentage: float, size: int = 50) -> str:
    full = int(round(percentage * size / 100.0))
    full = max(0, min(size, full))
    return "█" * full + "▁" * (size - full)


def _percent(step: int, total: int) -> float:
    return step * 100.0 / total if total else 100.0


class ConsoleProgress:
    """Bar, percentage and current parameters, four lines per report."""

    def __init__(self, stream: Optional[TextIO] = None, width: int = 50, redraw: Optional[bool] = None) -> None:
        self.stream = stream or sys.stdout
        self.width = width
        if redraw is None:
            isatty = getattr(self.stream, "isatty", None)
            redraw = bool(isatty and isatty())
        self.redraw = redraw
        self._drawn = False

    def __call__(self, step: int, total: int, w: float, b: float, cost: float) -> None:
        pct = _percent(step, total)
        if self.redraw and self._drawn:
            print(_REDRAW, file=self.stream)
        print(f"{progress_bar(pct, self.width)} {pct:.2f}% ", file=self.stream)
        print(f"w: {w:.8f}", file=self.stream)
        print(f"b: {b:.8f}", file=self.stream)
        print(f"cost: {cost:.8f}", file=self.stream)
        self.stream.flush()
        self._drawn = True


class LogProgress:
    def __init__(self, log: Optional[logging.Logger] = None) -> None:
        self.log = log or logging.getLogger("noisyfit.training")

    def __call__(self, step: int, total: int, w: float, b: float, cost: float) -> None:
        self.log.info(
            "[%d/%d] %.2f%% w=%.8f b=%.8f cost=%.8f", step, total, _percent(step, total), w, b, cost
        )
