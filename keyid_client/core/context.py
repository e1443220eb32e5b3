"""Trace context recorded for each workflow invocation."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from uuid import uuid4

from ..utils.time import utc_now_naive


def _new_id() -> str:
    """Generate a unique trace/span identifier as UUID text."""
    return str(uuid4())


@dataclass
class WorkflowContext:
    """Telemetry for one workflow run against the KeyID service.

    Fields are aligned with the ``keyid_workflow_traces`` table in
    ``schema/postgres.sql``. The caller's session id is only ever recorded
    here and in log lines.
    """

    service: str
    workflow: str
    entity_id: str
    session_id: Optional[str] = None
    trace_id: str = field(default_factory=_new_id)
    span_id: str = field(default_factory=_new_id)
    parent_span_id: Optional[str] = None
    start_time: datetime = field(default_factory=utc_now_naive)
    end_time: Optional[datetime] = None
    retries: int = 0
    token_used: bool = False
    error_kind: Optional[str] = None
    matched: Optional[bool] = None
    enrollment_attempted: bool = False
    enrollment_error: Optional[str] = None

    def finish(self) -> None:
        """Mark the span as finished."""
        self.end_time = utc_now_naive()

    @property
    def duration_ms(self) -> Optional[float]:
        if self.end_time is None:
            return None
        return (self.end_time - self.start_time).total_seconds() * 1000.0

    def to_dict(self) -> dict:
        """Serialize context for exporters."""
        return {
            "trace_id": self.trace_id,
            "span_id": self.span_id,
            "parent_span_id": self.parent_span_id,
            "service": self.service,
            "workflow": self.workflow,
            "entity_id": self.entity_id,
            "session_id": self.session_id,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "retries": self.retries,
            "token_used": self.token_used,
            "error_kind": self.error_kind,
            "matched": self.matched,
            "enrollment_attempted": self.enrollment_attempted,
            "enrollment_error": self.enrollment_error,
        }
