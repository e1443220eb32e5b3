"""Endpoint gateway interface consumed by the workflow core."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

from ..token.types import TokenScope


@dataclass(frozen=True)
class RawResponse:
    """Undecoded service answer: status, parsed JSON body (if any) and text."""

    status_code: int
    body: Any = None
    text: str = ""


class EndpointGateway(ABC):
    """One async operation per remote KeyID capability.

    Implementations raise :class:`~keyid_client.errors.TransportError` when the
    service cannot be reached; HTTP status handling is left to the classifier.
    """

    @abstractmethod
    async def request_nonce(self, ticks: int) -> RawResponse:
        """Fetch an evaluation nonce for a .NET tick timestamp."""

    @abstractmethod
    async def request_token(self, entity_id: str, scope: TokenScope) -> RawResponse:
        """Fetch a raw challenge token for a save or remove."""

    @abstractmethod
    async def confirm_token(self, entity_id: str, raw_token: str, scope: TokenScope, sample: str) -> RawResponse:
        """Exchange a challenge token and typing sample for a usable token."""

    @abstractmethod
    async def submit_profile(self, entity_id: str, sample: str, token: Optional[str] = None) -> RawResponse:
        """Create or extend a profile."""

    @abstractmethod
    async def submit_evaluation(self, entity_id: str, sample: str, nonce: str) -> RawResponse:
        """Score a typing sample against an existing profile."""

    @abstractmethod
    async def remove_profile(self, entity_id: str, token: str) -> RawResponse:
        """Delete a profile."""

    @abstractmethod
    async def get_profile_info(self, entity_id: str) -> RawResponse:
        """Read profile metadata."""

    @abstractmethod
    async def typing_mistake(
        self,
        entity_id: str,
        *,
        mistype: str = "",
        session_id: str = "",
        source: str = "",
        action: str = "",
        template: str = "",
        page: str = "",
    ) -> RawResponse:
        """Record a typing mistake."""

    async def close(self) -> None:
        """Release transport resources if needed."""
