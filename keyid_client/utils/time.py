"""UTC time helpers and .NET tick conversion."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

# Ticks between 0001-01-01T00:00:00 and the Unix epoch; one tick is 100ns.
DOTNET_EPOCH_OFFSET = 621_355_968_000_000_000
TICKS_PER_MS = 10_000


def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)


def utc_now_naive() -> datetime:
    """Return naive UTC now for Postgres timestamp compatibility."""
    return utc_now().replace(tzinfo=None)


def dotnet_ticks(unix_millis: Optional[int] = None) -> int:
    """Convert Unix milliseconds (default: now) to .NET ticks."""
    if unix_millis is None:
        unix_millis = int(utc_now().timestamp() * 1000)
    return unix_millis * TICKS_PER_MS + DOTNET_EPOCH_OFFSET
