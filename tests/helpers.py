"""Scripted gateway double shared by the workflow tests."""

from __future__ import annotations

import json
from collections import defaultdict, deque
from typing import Any, Deque, Dict, List, Optional, Tuple, Union

from keyid_client.gateway.base import EndpointGateway, RawResponse
from keyid_client.token.types import TokenScope

Scripted = Union[RawResponse, Exception]


def json_response(body: Any, status_code: int = 200) -> RawResponse:
    return RawResponse(status_code=status_code, body=body, text=json.dumps(body))


def text_response(text: str, status_code: int = 200) -> RawResponse:
    return RawResponse(status_code=status_code, body=None, text=text)


def evaluation_body(**fields: Any) -> Dict[str, Any]:
    body = {"Error": "", "Match": "True", "IsReady": "True", "Confidence": 80, "Fidelity": 60}
    body.update(fields)
    return body


class ScriptedGateway(EndpointGateway):
    """Answers each operation from its own queue and records every call."""

    def __init__(self) -> None:
        self.responses: Dict[str, Deque[Scripted]] = defaultdict(deque)
        self.calls: List[Tuple[str, Dict[str, Any]]] = []
        self.closed = False

    def script(self, operation: str, *responses: Scripted) -> "ScriptedGateway":
        self.responses[operation].extend(responses)
        return self

    def script_token(self, confirm: Scripted, challenge: str = "challenge-1") -> "ScriptedGateway":
        self.script("request_token", text_response(challenge))
        return self.script("confirm_token", confirm)

    def script_evaluation(self, body: Any, nonce: str = "nonce-1") -> "ScriptedGateway":
        self.script("request_nonce", text_response(nonce))
        return self.script("submit_evaluation", json_response(body))

    def calls_to(self, operation: str) -> List[Dict[str, Any]]:
        return [kwargs for name, kwargs in self.calls if name == operation]

    @property
    def operations(self) -> List[str]:
        return [name for name, _ in self.calls]

    async def _answer(self, operation: str, **kwargs: Any) -> RawResponse:
        self.calls.append((operation, kwargs))
        queue = self.responses[operation]
        if not queue:
            raise AssertionError(f"unexpected call to {operation}")
        answer = queue.popleft()
        if isinstance(answer, Exception):
            raise answer
        return answer

    async def request_nonce(self, ticks: int) -> RawResponse:
        return await self._answer("request_nonce", ticks=ticks)

    async def request_token(self, entity_id: str, scope: TokenScope) -> RawResponse:
        return await self._answer("request_token", entity_id=entity_id, scope=scope)

    async def confirm_token(self, entity_id: str, raw_token: str, scope: TokenScope, sample: str) -> RawResponse:
        return await self._answer("confirm_token", entity_id=entity_id, raw_token=raw_token, scope=scope, sample=sample)

    async def submit_profile(self, entity_id: str, sample: str, token: Optional[str] = None) -> RawResponse:
        return await self._answer("submit_profile", entity_id=entity_id, sample=sample, token=token)

    async def submit_evaluation(self, entity_id: str, sample: str, nonce: str) -> RawResponse:
        return await self._answer("submit_evaluation", entity_id=entity_id, sample=sample, nonce=nonce)

    async def remove_profile(self, entity_id: str, token: str) -> RawResponse:
        return await self._answer("remove_profile", entity_id=entity_id, token=token)

    async def get_profile_info(self, entity_id: str) -> RawResponse:
        return await self._answer("get_profile_info", entity_id=entity_id)

    async def typing_mistake(self, entity_id: str, **fields: str) -> RawResponse:
        return await self._answer("typing_mistake", entity_id=entity_id, **fields)

    async def close(self) -> None:
        self.closed = True
