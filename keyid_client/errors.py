"""Exceptions raised by the KeyID client."""

from __future__ import annotations

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .classify.types import ServiceError


class KeyIDError(Exception):
    """Base class for all client errors."""


class ConfigError(KeyIDError):
    """Client configuration is missing or invalid."""


class TransportError(KeyIDError):
    """The service could not be reached or answered with a non-2xx status."""

    def __init__(self, message: str, *, status_code: Optional[int] = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class LicenseError(KeyIDError):
    """The service rejected the configured license key."""

    def __init__(self, error: "ServiceError") -> None:
        super().__init__(error.message)
        self.error = error
