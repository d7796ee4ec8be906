from __future__ import annotations

from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ConnectionDetailsRequest(BaseModel):
    """Connection request body; unknown keys are kept for the metadata whitelist."""

    participant_name: str | None = Field(default=None, alias="participantName")
    participant_id: str | None = Field(default=None, alias="participantId")
    voice: str | None = None
    language: str | None = None
    credentials_key: str | None = Field(default=None, alias="credentialsKey")
    room: str | None = None
    agent_name: str | None = Field(default=None, alias="agentName")
    metadata: str | dict[str, Any] | None = None
    attributes: dict[str, Any] | None = None
    room_config: dict[str, Any] | None = None
    uid: str | None = None
    uid_sig: str | None = Field(default=None, alias="uidSig")

    model_config = ConfigDict(extra="allow", populate_by_name=True)


class ConnectionBundleResponse(BaseModel):
    server_url: str
    room_name: str
    participant_token: str
    participant_name: str
    session_id: UUID | None = None

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )
