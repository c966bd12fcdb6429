# Shared utilities. Explicit re-exports for a clean public API.

from .io import ensure_dir as ensure_dir, load_yaml as load_yaml, save_yaml as save_yaml
from .logs import get_logger as get_logger
from .seeding import make_rng as make_rng
from .timers import Timer as Timer, timed as timed

__all__ = [
    "make_rng",
    "ensure_dir",
    "load_yaml",
    "save_yaml",
    "get_logger",
    "Timer",
    "timed",
]
