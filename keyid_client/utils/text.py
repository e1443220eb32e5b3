"""Coercion of loosely typed wire values."""

from __future__ import annotations

from typing import Any


def alpha_to_bool(value: Any) -> bool:
    """Normalize a textual boolean; only 'true' in any case is truthy."""
    if isinstance(value, bool):
        return value
    if not isinstance(value, str):
        return False
    return value.upper() == "TRUE"


def to_float(value: Any, default: float = 0.0) -> float:
    if isinstance(value, bool) or value is None:
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default
