from __future__ import annotations

import os

MAX_PIECE = 2048
DEFAULT_SIZE = 4


def _env_flag(name: str, default: str = '0') -> bool:
    return os.getenv(name, default).lower() in ('1', 'true', 'yes', 'on')


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f'{name} must be an integer, got {raw!r}')


def max_piece() -> int:
    """Winning tile value; TILT2048_MAX_PIECE overrides the default 2048."""
    return _env_int('TILT2048_MAX_PIECE', MAX_PIECE)


def default_size() -> int:
    return _env_int('TILT2048_SIZE', DEFAULT_SIZE)


def debug_enabled() -> bool:
    return _env_flag('TILT2048_DEBUG')


def debug(tag: str, message: str) -> None:
    """Prints a tagged trace line when TILT2048_DEBUG is set."""
    if debug_enabled():
        print(f"[{tag}] {message}")
