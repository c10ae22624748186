"""Runtime configuration for :mod:`thermokernels`."""

import os
from typing import Any, Dict

DEFAULT_SORT_THRESHOLD = 25


def _read_env_threshold() -> int:
    raw = os.environ.get("THERMOKERNELS_SORT_THRESHOLD", "")
    if not raw:
        return DEFAULT_SORT_THRESHOLD
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(
            f"THERMOKERNELS_SORT_THRESHOLD must be an integer, got '{raw}'"
        ) from None
    if value < 1:
        raise ValueError(f"THERMOKERNELS_SORT_THRESHOLD must be >= 1, got {value}")
    return value


_SORT_THRESHOLD = _read_env_threshold()


def set_sort_threshold(threshold: int):
    """Set the range length at or below which insertion sort is used."""
    global _SORT_THRESHOLD

    if isinstance(threshold, bool) or not isinstance(threshold, int):
        raise ValueError(f"Sort threshold must be an int, got {type(threshold).__name__}")
    if threshold < 1:
        raise ValueError(f"Sort threshold must be >= 1, got {threshold}")

    _SORT_THRESHOLD = threshold


def get_sort_threshold() -> int:
    """Get the current insertion sort threshold."""
    return _SORT_THRESHOLD


def get_config() -> Dict[str, Any]:
    """Get the current configuration as a dictionary."""
    return {
        "sort_threshold": _SORT_THRESHOLD,
        "default_sort_threshold": DEFAULT_SORT_THRESHOLD,
    }
