"""httpx-backed gateway for the KeyID REST service."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import httpx

from ..errors import TransportError
from ..token.types import TokenScope
from .base import EndpointGateway, RawResponse
from .encoding import FORM_CONTENT_TYPE, encode_post_body, entity_path

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0


class HttpGateway(EndpointGateway):
    """Gateway sharing one ``httpx.AsyncClient`` across all workflows."""

    def __init__(
        self,
        url: str,
        license_key: str,
        *,
        timeout: float = 0,
        strict_ssl: bool = True,
        client: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.url = url
        self._license = license_key
        self._owns_client = client is None
        self._client = client if client is not None else httpx.AsyncClient(
            base_url=url,
            timeout=timeout or DEFAULT_TIMEOUT_SECONDS,
            verify=strict_ssl,
            transport=transport,
        )

    async def request_nonce(self, ticks: int) -> RawResponse:
        return await self._get(f"/token/{ticks}", {"type": "nonce"})

    async def request_token(self, entity_id: str, scope: TokenScope) -> RawResponse:
        return await self._get(entity_path("/token", entity_id), {"Type": scope.value, "Return": "value"})

    async def confirm_token(self, entity_id: str, raw_token: str, scope: TokenScope, sample: str) -> RawResponse:
        return await self._post(
            "/token",
            {
                "EntityID": entity_id,
                "Token": raw_token,
                "ReturnToken": "True",
                "ReturnValidation": sample,
                "Type": scope.value,
                "Return": "JSON",
            },
        )

    async def submit_profile(self, entity_id: str, sample: str, token: Optional[str] = None) -> RawResponse:
        data = {
            "EntityID": entity_id,
            "tsData": sample,
            "Return": "JSON",
            "Action": "v2",
            "Statistics": "extended",
        }
        if token:
            data["Code"] = token
        return await self._post("/profile", data)

    async def submit_evaluation(self, entity_id: str, sample: str, nonce: str) -> RawResponse:
        return await self._post(
            "/evaluate",
            {
                "EntityID": entity_id,
                "tsData": sample,
                "Nonce": nonce,
                "Return": "JSON",
                "Statistics": "extended",
            },
        )

    async def remove_profile(self, entity_id: str, token: str) -> RawResponse:
        return await self._post(
            "/profile",
            {"EntityID": entity_id, "Code": token, "Action": "remove", "Return": "JSON"},
        )

    async def get_profile_info(self, entity_id: str) -> RawResponse:
        return await self._get(entity_path("/profile", entity_id), {})

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
        return await self._post(
            "/typingmistake",
            {
                "EntityID": entity_id,
                "Mistype": mistype,
                "SessionID": session_id,
                "Source": source,
                "Action": action,
                "Template": template,
                "Page": page,
            },
        )

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _get(self, path: str, params: Mapping[str, Any]) -> RawResponse:
        return await self._send("GET", path, params=dict(params))

    async def _post(self, path: str, data: Mapping[str, Any]) -> RawResponse:
        return await self._send(
            "POST",
            path,
            content=encode_post_body(data, self._license),
            headers={"Content-Type": FORM_CONTENT_TYPE},
        )

    async def _send(self, method: str, path: str, **kwargs: Any) -> RawResponse:
        try:
            resp = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning({"event": "keyid_http_error", "method": method, "path": path, "error": str(exc)})
            raise TransportError(f"KeyID request {method} {path} failed: {exc}") from exc

        logger.debug({"event": "keyid_http_response", "method": method, "path": path, "status": resp.status_code})
        body: Any = None
        try:
            body = resp.json()
        except ValueError:
            pass
        return RawResponse(status_code=resp.status_code, body=body, text=resp.text)
