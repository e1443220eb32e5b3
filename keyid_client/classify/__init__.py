"""Response classification against the service's error vocabulary."""

from .classifier import (
    KNOWN_MESSAGES,
    LICENSE_MESSAGE,
    classify,
    classify_error,
    classify_single,
    classify_text,
    ensure_success,
)
from .types import ErrorKind, ServiceError, ServiceResponse

__all__ = [
    "KNOWN_MESSAGES",
    "LICENSE_MESSAGE",
    "classify",
    "classify_error",
    "classify_single",
    "classify_text",
    "ensure_success",
    "ErrorKind",
    "ServiceError",
    "ServiceResponse",
]
