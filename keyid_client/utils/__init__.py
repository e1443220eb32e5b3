"""Utility helpers for time conversion and wire value coercion."""

from .text import alpha_to_bool, to_float
from .time import DOTNET_EPOCH_OFFSET, TICKS_PER_MS, dotnet_ticks, utc_now, utc_now_naive

__all__ = [
    "alpha_to_bool",
    "to_float",
    "DOTNET_EPOCH_OFFSET",
    "TICKS_PER_MS",
    "dotnet_ticks",
    "utc_now",
    "utc_now_naive",
]
