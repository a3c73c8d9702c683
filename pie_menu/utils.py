"""Environment parsing helpers shared by the config and entrypoints."""
from __future__ import annotations

import os
from typing import Optional

_TRUE_VALUES = ("1", "true", "yes", "on")


def resolve_path(value: str, base_dir: str) -> str:
    """Resolve a path relative to base_dir when value is not absolute."""
    if os.path.isabs(value):
        return value
    return os.path.join(base_dir, value)


def env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in _TRUE_VALUES


def env_str(name: str, default: str) -> str:
    """Return the stripped variable, or default when unset or blank."""
    return os.getenv(name, default).strip() or default


def parse_int_env(
    name: str,
    default: int,
    *,
    min_value: Optional[int] = None,
    max_value: Optional[int] = None,
) -> int:
    """Parse an integer environment variable, clamped to the optional bounds."""
    raw = os.getenv(name)
    try:
        value = default if raw is None else int(raw.strip())
    except ValueError:
        value = default
    if min_value is not None and value < min_value:
        return min_value
    if max_value is not None and value > max_value:
        return max_value
    return value
