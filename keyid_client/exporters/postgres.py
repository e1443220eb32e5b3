"""PostgreSQL exporter for KeyID workflow traces."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Optional

import asyncpg

from .base import Exporter
from .memory import InMemoryExporter

if TYPE_CHECKING:
    from ..core.context import WorkflowContext


INSERT_SQL = """
INSERT INTO keyid_workflow_traces (
    trace_id,
    span_id,
    parent_span_id,
    service,
    workflow,
    entity_id,
    session_id,
    start_time,
    end_time,
    retries,
    token_used,
    error_kind,
    matched,
    enrollment_attempted,
    enrollment_error
)
VALUES (
    $1::uuid, $2::uuid, $3::uuid, $4, $5, $6, $7,
    $8, $9, $10, $11, $12, $13, $14, $15
)
"""


class PostgresExporter(Exporter):
    """Exporter that persists workflow spans into PostgreSQL using ``asyncpg``."""

    def __init__(
        self,
        dsn: Optional[str] = None,
        *,
        pool: Optional[asyncpg.Pool] = None,
        min_size: int = 1,
        max_size: int = 10,
    ) -> None:
        self._dsn = dsn
        self._pool = pool
        self._min_size = min_size
        self._max_size = max_size

    async def connect(self) -> None:
        """Initialize a connection pool if one was not supplied."""
        if self._pool is not None:
            return
        if not self._dsn:
            raise ValueError("Either `dsn` or `pool` must be provided for PostgresExporter.")

        self._pool = await asyncpg.create_pool(
            dsn=self._dsn,
            min_size=self._min_size,
            max_size=self._max_size,
        )

    async def export(self, context: "WorkflowContext") -> None:
        """Insert a completed workflow span into PostgreSQL."""
        if self._pool is None:
            await self.connect()

        assert self._pool is not None
        payload = context.to_dict()

        async with self._pool.acquire() as conn:
            await conn.execute(
                INSERT_SQL,
                payload["trace_id"],
                payload["span_id"],
                payload["parent_span_id"],
                payload["service"],
                payload["workflow"],
                payload["entity_id"],
                payload["session_id"],
                payload["start_time"],
                payload["end_time"],
                payload["retries"],
                payload["token_used"],
                payload["error_kind"],
                payload["matched"],
                payload["enrollment_attempted"],
                payload["enrollment_error"],
            )

    async def close(self) -> None:
        """Close the underlying pool if it exists."""
        if self._pool is not None:
            await self._pool.close()
            self._pool = None


def create_exporter_from_env() -> Exporter:
    """Create a Postgres exporter if a DSN is configured, otherwise in-memory."""
    dsn = os.getenv("KEYID_TRACE_DSN") or os.getenv("DATABASE_URL")
    if dsn:
        return PostgresExporter(dsn=dsn)
    return InMemoryExporter()
