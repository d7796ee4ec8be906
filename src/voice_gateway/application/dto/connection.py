from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
from uuid import UUID


@dataclass(frozen=True, slots=True)
class ConnectionRequest:
    participant_name: str | None = None
    participant_id: str | None = None
    voice: str | None = None
    language: str | None = None
    credentials_key: str | None = None
    room: str | None = None
    agent_name: str | None = None
    metadata: Any = None
    attributes: Any = None
    room_config: Any = None
    # raw body, projected onto the session metadata whitelist
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class ConnectionBundle:
    server_url: str
    room_name: str
    participant_token: str
    participant_name: str
    session_id: UUID | None = None
