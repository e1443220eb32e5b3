"""In-memory exporter for tests and local debugging."""

from __future__ import annotations

from typing import TYPE_CHECKING, List

from .base import Exporter

if TYPE_CHECKING:
    from ..core.context import WorkflowContext


class InMemoryExporter(Exporter):
    """Keeps exported spans in a list, in completion order."""

    def __init__(self) -> None:
        self.spans: List["WorkflowContext"] = []

    async def export(self, context: "WorkflowContext") -> None:
        self.spans.append(context)

    def by_workflow(self, workflow: str) -> List["WorkflowContext"]:
        return [span for span in self.spans if span.workflow == workflow]
