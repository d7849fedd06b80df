"""
Environment-driven settings for the snake simulation.

Values come from the process environment (or a local .env file) and can be
overridden by command line flags in main.py.
"""

import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _optional_int_env(name: str) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    return _int_env(name, 0)


BOARD_WIDTH = _int_env("SNAKE_WIDTH", 40)
BOARD_HEIGHT = _int_env("SNAKE_HEIGHT", 20)
MAX_TICKS = _int_env("SNAKE_MAX_TICKS", 500)
SEED = _optional_int_env("SNAKE_SEED")
LOG_LEVEL = os.getenv("SNAKE_LOG_LEVEL", "INFO").strip().upper() or "INFO"
