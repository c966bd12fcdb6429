from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from .io import ensure_dir

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"


def get_logger(
    name: str = "noisyfit", level: str = "INFO", log_file: Optional[str | Path] = None
) -> logging.Logger:
    """
    Configure the project logger once: console handler plus an optional file handler.
    Library modules only call logging.getLogger(__name__) and inherit from here.
    """
    log = logging.getLogger(name)
    lvl = getattr(logging, str(level).upper(), logging.INFO)
    log.setLevel(lvl)
    # Avoid adding multiple handlers on repeated runs
    if not log.handlers:
        fmt = logging.Formatter(LOG_FORMAT)
        ch = logging.StreamHandler()
        ch.setLevel(lvl)
        ch.setFormatter(fmt)
        log.addHandler(ch)
        if log_file:
            ensure_dir(Path(log_file).parent)
            fh = logging.FileHandler(log_file)
            fh.setLevel(lvl)
            fh.setFormatter(fmt)
            log.addHandler(fh)
    else:
        for h in log.handlers:
            h.setLevel(lvl)
    return log
