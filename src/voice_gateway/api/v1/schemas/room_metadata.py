from __future__ import annotations

from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class RoomMetadataResponse(BaseModel):
    found: bool
    metadata: dict[str, Any] | None = None
    session_id: UUID | None = Field(default=None, serialization_alias="sessionId")
    uid: str | None = None

    model_config = ConfigDict(populate_by_name=True)
