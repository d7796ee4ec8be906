from __future__ import annotations

import json
import logging
from typing import Any

from voice_gateway.domain.entities.session import SessionRecord
from voice_gateway.infrastructure.db.models.session import SessionModel

logger = logging.getLogger(__name__)


def dump_metadata(metadata: dict[str, Any]) -> str:
    return json.dumps(metadata, separators=(",", ":"), ensure_ascii=False)


def load_metadata(raw: str | None) -> dict[str, Any]:
    if not raw:
        return {}
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Discarding unreadable session metadata")
        return {}
    return data if isinstance(data, dict) else {}


def model_to_entity(model: SessionModel) -> SessionRecord:
    return SessionRecord(
        session_id=model.session_id,
        room_name=model.room_name,
        uid=model.uid,
        metadata=load_metadata(model.metadata_json),
        created_at=model.created_at,
        expire_at=model.expire_at,
        status=model.status,
        version=model.version,
    )


def entity_to_model(entity: SessionRecord) -> SessionModel:
    return SessionModel(
        session_id=entity.session_id,
        room_name=entity.room_name,
        uid=entity.uid,
        metadata_json=dump_metadata(entity.metadata),
        created_at=entity.created_at,
        expire_at=entity.expire_at,
        status=entity.status,
        version=entity.version,
    )
