"""Evaluation result model."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..classify.types import ErrorKind, ServiceError, ServiceResponse
from ..utils.text import alpha_to_bool, to_float

_KNOWN_FIELDS = {"EntityID", "Match", "IsReady", "Confidence", "Fidelity", "Error"}


@dataclass(frozen=True)
class EvaluationResult:
    """Outcome of an evaluation, with ``Match``/``IsReady`` normalized to bools.

    ``extra`` carries every other field the service returned, untouched.
    """

    entity_id: str
    matched: bool = False
    is_ready: bool = False
    confidence: float = 0.0
    fidelity: float = 0.0
    error: Optional[ServiceError] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def error_kind(self) -> ErrorKind:
        return self.error.kind if self.error is not None else ErrorKind.NONE

    @classmethod
    def from_response(cls, entity_id: str, response: ServiceResponse) -> "EvaluationResult":
        data = response.data
        return cls(
            entity_id=entity_id,
            matched=alpha_to_bool(data.get("Match", "")),
            is_ready=alpha_to_bool(data.get("IsReady", "")),
            confidence=to_float(data.get("Confidence")),
            fidelity=to_float(data.get("Fidelity")),
            error=response.error,
            extra={k: v for k, v in data.items() if k not in _KNOWN_FIELDS},
        )

    def to_dict(self) -> Dict[str, Any]:
        """Service-shaped mapping, for callers that forward results verbatim."""
        payload = dict(self.extra)
        payload.update(
            {
                "EntityID": self.entity_id,
                "Match": self.matched,
                "IsReady": self.is_ready,
                "Confidence": self.confidence,
                "Fidelity": self.fidelity,
                "Error": self.error.message if self.error is not None else "",
            }
        )
        return payload
