from __future__ import annotations

from typing import Protocol

from voice_gateway.domain.entities.session import SessionRecord


class SessionReader(Protocol):
    async def get_latest_by_room(self, room_name: str) -> SessionRecord | None:
        """Most recently created session for the room, expired or not."""
        ...


class SessionWriter(Protocol):
    async def add(self, record: SessionRecord) -> None: ...
