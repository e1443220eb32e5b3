"""Base exporter interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..core.context import WorkflowContext


class Exporter(ABC):
    """Abstract base class for workflow span exporters."""

    @abstractmethod
    async def export(self, context: "WorkflowContext") -> None:
        """Export one completed workflow span."""

    async def close(self) -> None:
        """Close exporter resources if needed."""
