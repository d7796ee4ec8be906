from __future__ import annotations

import time
from collections.abc import Callable, Mapping
from typing import Any

import jwt

from voice_gateway.application.exceptions import InvalidIdentity, ValidationError
from voice_gateway.application.policies.payloads import project_attributes, serialize_metadata
from voice_gateway.domain.entities.credentials import CredentialSet
from voice_gateway.domain.value_objects.room import is_valid_room_name

ALGORITHM = "HS256"


def video_grant(room_name: str) -> dict[str, Any]:
    """The fixed capability set; partial grants are never issued."""
    return {
        "room": room_name,
        "roomJoin": True,
        "canPublish": True,
        "canPublishData": True,
        "canSubscribe": True,
    }


class LiveKitTokenMinter:
    """Mint LiveKit participant access tokens (HS256 JWT).

    Only produces tokens; the media server verifies them with the same
    api key/secret pair.
    """

    def __init__(self, clock: Callable[[], float] | None = None) -> None:
        self._clock = clock or time.time

    def mint(
        self,
        *,
        identity: str,
        display_name: str,
        room_name: str,
        credentials: CredentialSet,
        ttl_seconds: int,
        metadata: str | Mapping[str, Any] | None = None,
        attributes: Mapping[str, Any] | None = None,
        agent_name: str | None = None,
    ) -> str:
        if not isinstance(identity, str) or not identity.strip():
            raise InvalidIdentity("Participant identity is required")
        if not is_valid_room_name(room_name):
            raise ValidationError("Invalid room name")
        if ttl_seconds <= 0:
            raise ValidationError("Token ttl must be positive")

        now = int(self._clock())
        claims: dict[str, Any] = {
            "iss": credentials.api_key,
            "sub": identity,
            "jti": identity,
            "name": display_name,
            "nbf": now,
            "exp": now + ttl_seconds,
            "video": video_grant(room_name),
        }

        encoded_metadata = serialize_metadata(metadata)
        if encoded_metadata is not None:
            claims["metadata"] = encoded_metadata

        flat_attributes = project_attributes(attributes)
        if flat_attributes:
            claims["attributes"] = flat_attributes

        if agent_name:
            claims["roomConfig"] = {"agents": [{"agentName": agent_name}]}

        return jwt.encode(claims, credentials.api_secret, algorithm=ALGORITHM)
