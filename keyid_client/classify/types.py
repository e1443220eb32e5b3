"""Classified service error datatypes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    """Closed set of conditions the service reports through its Error text."""

    NONE = "NONE"
    FATAL_LICENSE = "FATAL_LICENSE"
    ENROLLMENT_TOKEN_REQUIRED = "ENROLLMENT_TOKEN_REQUIRED"
    ENTITY_NOT_FOUND = "ENTITY_NOT_FOUND"
    INSUFFICIENT_DATA = "INSUFFICIENT_DATA"
    TOO_MUCH_VARIANCE = "TOO_MUCH_VARIANCE"
    OTHER = "OTHER"


@dataclass(frozen=True)
class ServiceError:
    """A classified error with the raw server text it came from."""

    kind: ErrorKind
    message: str


@dataclass(frozen=True)
class ServiceResponse:
    """Decoded 2xx response body plus its classification."""

    data: Dict[str, Any] = field(default_factory=dict)
    error: Optional[ServiceError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def error_kind(self) -> ErrorKind:
        return self.error.kind if self.error is not None else ErrorKind.NONE

    @property
    def token(self) -> Optional[str]:
        value = self.data.get("Token")
        if value is None:
            return None
        value = str(value)
        return value or None
