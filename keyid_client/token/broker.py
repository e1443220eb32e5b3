"""Two-step save/remove token exchange."""

from __future__ import annotations

import logging

from ..classify.classifier import classify, classify_text
from ..classify.types import ErrorKind
from ..errors import LicenseError
from ..gateway.base import EndpointGateway
from .types import SecurityToken, TokenGrant, TokenScope

logger = logging.getLogger(__name__)


class TokenBroker:
    """Obtain single-use tokens gating mutating profile operations."""

    def __init__(self, gateway: EndpointGateway) -> None:
        self.gateway = gateway

    async def acquire_token(self, entity_id: str, scope: TokenScope, sample: str = "") -> TokenGrant:
        """Request a challenge, confirm it with ``sample`` and classify the answer.

        A grant without a token is a valid outcome: the service either needed
        none or already finished the operation during the exchange.
        """
        challenge = classify_text(await self.gateway.request_token(entity_id, scope))
        response = classify(await self.gateway.confirm_token(entity_id, challenge, scope, sample))
        if response.error_kind == ErrorKind.FATAL_LICENSE:
            assert response.error is not None
            raise LicenseError(response.error)

        value = response.token
        logger.debug({"event": "token_exchange", "scope": scope.value, "issued": value is not None})
        if value is None:
            return TokenGrant(response=response)
        return TokenGrant(response=response, token=SecurityToken(value=value, scope=scope, entity_id=entity_id))
