"""Maps raw service responses onto the closed ErrorKind vocabulary.

This is the only module that inspects the service's free-text ``Error``
field. Everything downstream branches on :class:`ErrorKind`.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from ..errors import TransportError
from ..gateway.base import RawResponse
from .types import ErrorKind, ServiceError, ServiceResponse

logger = logging.getLogger(__name__)

LICENSE_MESSAGE = "Invalid license key."
MALFORMED_MESSAGE = "Malformed service response."

KNOWN_MESSAGES: Dict[str, ErrorKind] = {
    "New enrollment code required.": ErrorKind.ENROLLMENT_TOKEN_REQUIRED,
    "EntityID does not exist.": ErrorKind.ENTITY_NOT_FOUND,
    "The profile has too little data for a valid evaluation.": ErrorKind.INSUFFICIENT_DATA,
    "The entry varied so much from the model, no evaluation is possible.": ErrorKind.TOO_MUCH_VARIANCE,
}


def classify_error(message: Any) -> Optional[ServiceError]:
    """Classify an ``Error`` field value; ``None`` means no error."""
    if message is None:
        return None
    text = str(message)
    if not text:
        return None
    # License text may be embedded in a longer message, so it is checked first.
    if LICENSE_MESSAGE in text:
        return ServiceError(ErrorKind.FATAL_LICENSE, text)
    return ServiceError(KNOWN_MESSAGES.get(text, ErrorKind.OTHER), text)


def ensure_success(raw: RawResponse) -> None:
    """Raise :class:`TransportError` unless the status is 2xx."""
    if not 200 <= raw.status_code < 300:
        raise TransportError(
            f"KeyID service answered HTTP {raw.status_code}.",
            status_code=raw.status_code,
            body=raw.text,
        )


def classify(raw: RawResponse) -> ServiceResponse:
    """Classify a JSON object response."""
    ensure_success(raw)
    return _classify_body(raw.body)


def classify_single(raw: RawResponse) -> ServiceResponse:
    """Classify a response the service wraps in a one-element array."""
    ensure_success(raw)
    body = raw.body
    if isinstance(body, list):
        if len(body) != 1:
            return ServiceResponse(error=ServiceError(ErrorKind.OTHER, MALFORMED_MESSAGE))
        body = body[0]
    return _classify_body(body)


def classify_text(raw: RawResponse) -> str:
    """Return the body of a plain-text endpoint (nonce, token challenge)."""
    ensure_success(raw)
    return raw.text.strip()


def _classify_body(body: Any) -> ServiceResponse:
    if not isinstance(body, dict):
        logger.debug({"event": "classify_malformed", "body_type": type(body).__name__})
        return ServiceResponse(error=ServiceError(ErrorKind.OTHER, MALFORMED_MESSAGE))
    error = classify_error(body.get("Error"))
    if error is not None:
        logger.debug({"event": "classify_error", "kind": error.kind.value})
    return ServiceResponse(data=dict(body), error=error)
