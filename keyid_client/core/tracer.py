"""Tracer creating workflow spans."""

from __future__ import annotations

from typing import Optional
from uuid import uuid4

from .context import WorkflowContext


class Tracer:
    """Simple tracer that creates and finalizes :class:`WorkflowContext` spans."""

    def __init__(self, service: str = "keyid-client") -> None:
        self.service = service

    def start_span(
        self,
        *,
        workflow: str,
        entity_id: str,
        session_id: Optional[str] = None,
        parent: Optional[WorkflowContext] = None,
    ) -> WorkflowContext:
        """Create a new span; child spans share the parent's trace id."""
        return WorkflowContext(
            service=self.service,
            workflow=workflow,
            entity_id=entity_id,
            session_id=session_id or (parent.session_id if parent else None),
            trace_id=parent.trace_id if parent else str(uuid4()),
            parent_span_id=parent.span_id if parent else None,
        )

    def end_span(self, span: WorkflowContext) -> WorkflowContext:
        """Mark a span as finished."""
        span.finish()
        return span

