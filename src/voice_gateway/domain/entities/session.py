from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID


@dataclass(frozen=True, slots=True)
class SessionRecord:
    session_id: UUID
    room_name: str
    uid: str
    metadata: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None
    expire_at: datetime | None = None
    status: str = "active"
    version: int = 1

    def is_live(self, now: datetime) -> bool:
        return self.expire_at is not None and now < self.expire_at
