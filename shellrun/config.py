from __future__ import annotations
from typing import Optional

from .db import init_db, get_config as _get, set_config as _set, all_config as _all

# Runner settings (max_output_bytes, timeout_seconds); every accessor bootstraps the DB

def ensure_bootstrapped() -> None:
    init_db()


def get_value(key: str, default: Optional[str] = None) -> Optional[str]:
    ensure_bootstrapped()
    return _get(key, default)


def set_value(key: str, value: str) -> None:
    ensure_bootstrapped()
    _set(key, value)


def get_all() -> dict:
    ensure_bootstrapped()
    return _all()


def get_int(key: str, default: int) -> int:
    v = get_value(key, str(default))
    try:
        return int(v) if v is not None else default
    except ValueError:
        return default


def load_runner(**kwargs):
    """CommandRunner using the stored output ceiling."""
    from .constants import MAX_EXECUTE_OUTPUT_LEN_B
    from .executor import CommandRunner

    return CommandRunner(max_output_bytes=get_int("max_output_bytes", MAX_EXECUTE_OUTPUT_LEN_B), **kwargs)
