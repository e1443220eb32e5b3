"""Request body encoding for the KeyID REST service."""

from __future__ import annotations

import json
from typing import Any, Mapping
from urllib.parse import quote

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def encode_properties(data: Mapping[str, Any]) -> dict[str, str]:
    """Percent-encode every value as text, keeping keys as-is."""
    return {key: quote(str(value), safe="") for key, value in data.items()}


def encode_post_body(data: Mapping[str, Any], license_key: str) -> str:
    """Build the ``=[{...}]`` form body the service expects, license included."""
    payload = dict(data)
    payload["License"] = license_key
    encoded = json.dumps(encode_properties(payload), separators=(",", ":"))
    return f"=[{encoded}]"


def entity_path(prefix: str, entity_id: str) -> str:
    return f"{prefix}/{quote(entity_id, safe='')}"
