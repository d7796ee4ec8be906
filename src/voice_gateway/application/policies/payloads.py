"""Schema-checked projections of loosely typed client payloads.

Unknown keys and unsupported value types are dropped, not rejected.
"""
from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from voice_gateway.application.exceptions import ValidationError

SESSION_METADATA_KEYS = frozenset(
    {
        "participantName",
        "language",
        "voice",
        "gender",
        "llmChoice",
        "system_prompt",
        "prompt_text",
    }
)

_SCALAR_TYPES = (str, int, float, bool)


def project_session_metadata(payload: Mapping[str, Any] | None) -> dict[str, Any]:
    if not payload:
        return {}
    return {
        key: value
        for key, value in payload.items()
        if key in SESSION_METADATA_KEYS and isinstance(value, _SCALAR_TYPES)
    }


def project_attributes(attributes: Any) -> dict[str, str]:
    """Keep only flat string-to-string pairs; nothing is coerced."""
    if attributes is None:
        return {}
    if not isinstance(attributes, Mapping):
        raise ValidationError("attributes must be an object of string values")
    return {
        key: value
        for key, value in attributes.items()
        if isinstance(key, str) and isinstance(value, str)
    }


def serialize_metadata(metadata: Any) -> str | None:
    if metadata is None:
        return None
    if isinstance(metadata, str):
        return metadata or None
    if isinstance(metadata, Mapping):
        try:
            return json.dumps(dict(metadata), separators=(",", ":"), ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            raise ValidationError("metadata must be JSON-serializable") from exc
    raise ValidationError("metadata must be a string or an object")
