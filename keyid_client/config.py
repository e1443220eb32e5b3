"""Client configuration snapshot."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Any

from .errors import ConfigError

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class ClientConfig:
    """Immutable KeyID settings; updates produce a new snapshot."""

    url: str = ""
    license: str = ""
    timeout: float = 0
    passive_validation: bool = False
    passive_enrollment: bool = False
    custom_threshold: bool = False
    threshold_confidence: float = 70.0
    threshold_fidelity: float = 50.0
    strict_ssl: bool = True

    def with_changes(self, **changes: Any) -> "ClientConfig":
        return replace(self, **changes)

    @classmethod
    def from_env(cls, **overrides: Any) -> "ClientConfig":
        """Build a config from ``KEYID_*`` environment variables."""
        defaults = cls()
        values: dict[str, Any] = {
            "url": os.getenv("KEYID_URL", defaults.url),
            "license": os.getenv("KEYID_LICENSE", defaults.license),
            "timeout": _env_float("KEYID_TIMEOUT", defaults.timeout),
            "passive_validation": _env_bool("KEYID_PASSIVE_VALIDATION", defaults.passive_validation),
            "passive_enrollment": _env_bool("KEYID_PASSIVE_ENROLLMENT", defaults.passive_enrollment),
            "custom_threshold": _env_bool("KEYID_CUSTOM_THRESHOLD", defaults.custom_threshold),
            "threshold_confidence": _env_float("KEYID_THRESHOLD_CONFIDENCE", defaults.threshold_confidence),
            "threshold_fidelity": _env_float("KEYID_THRESHOLD_FIDELITY", defaults.threshold_fidelity),
            "strict_ssl": _env_bool("KEYID_STRICT_SSL", defaults.strict_ssl),
        }
        values.update(overrides)
        return cls(**values)


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in _TRUE_VALUES


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number, got {raw!r}.") from exc
