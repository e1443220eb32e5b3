"""Security token datatypes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..classify.types import ServiceResponse


class TokenScope(str, Enum):
    """Operation a token authorizes; values are the service's wire names."""

    SAVE = "enrollment"
    REMOVE = "remove"


@dataclass(frozen=True)
class SecurityToken:
    value: str
    scope: TokenScope
    entity_id: str


@dataclass(frozen=True)
class TokenGrant:
    """Outcome of a token exchange; ``token`` is None when none was issued."""

    response: ServiceResponse
    token: Optional[SecurityToken] = None
