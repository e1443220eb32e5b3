"""KeyID typing-biometrics client.

Orchestrates enrollment, evaluation and removal of behavioral typing profiles
on the KeyID service, including its token exchange and match policy.
"""

from .core import EvaluationResult, ProfileOrchestrator, Tracer, WorkflowContext
from .classify import ErrorKind, ServiceError, ServiceResponse
from .client import KeyIDClient, connect
from .config import ClientConfig
from .errors import ConfigError, KeyIDError, LicenseError, TransportError
from .token import SecurityToken, TokenScope

__all__ = [
    "connect",
    "KeyIDClient",
    "ClientConfig",
    "ProfileOrchestrator",
    "EvaluationResult",
    "Tracer",
    "WorkflowContext",
    "ErrorKind",
    "ServiceError",
    "ServiceResponse",
    "SecurityToken",
    "TokenScope",
    "KeyIDError",
    "ConfigError",
    "LicenseError",
    "TransportError",
]
