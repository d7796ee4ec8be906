from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any
from uuid import UUID

from voice_gateway.application.exceptions import SessionCreateFailed, SessionLookupFailed
from voice_gateway.application.policies.payloads import project_session_metadata
from voice_gateway.application.ports.clock import Clock, SystemClock
from voice_gateway.application.uow import UnitOfWork
from voice_gateway.domain.entities.session import SessionRecord
from voice_gateway.domain.value_objects.enums import SessionStatus

logger = logging.getLogger(__name__)

_system_clock = SystemClock()


async def create_session(
    session_id: UUID,
    room_name: str,
    uid: str,
    metadata: dict[str, Any] | None,
    ttl_seconds: int,
    uow: UnitOfWork,
    clock: Clock = _system_clock,
) -> SessionRecord:
    """Insert one session row in its own transaction.

    Any failure between insert and commit is rolled back before it surfaces,
    so the row is either fully committed or absent.
    """
    created_at = clock.now()
    record = SessionRecord(
        session_id=session_id,
        room_name=room_name,
        uid=uid,
        metadata=project_session_metadata(metadata),
        created_at=created_at,
        expire_at=created_at + timedelta(seconds=ttl_seconds),
        status=SessionStatus.ACTIVE,
        version=1,
    )
    try:
        await uow.sessions_w.add(record)
        await uow.commit()
    except Exception as exc:
        logger.exception("Session insert failed (session_id=%s room=%s)", session_id, room_name)
        try:
            await uow.rollback()
        except Exception:
            logger.exception("Rollback failed (session_id=%s)", session_id)
        raise SessionCreateFailed("Could not create session") from exc

    logger.info("Session %s created for room %s", session_id, room_name)
    return record


async def get_session_by_room(
    room_name: str,
    uow: UnitOfWork,
    clock: Clock = _system_clock,
) -> SessionRecord | None:
    """Return the live session for a room, or None.

    Expiry is evaluated lazily here; expired rows stay in the table.
    """
    try:
        record = await uow.sessions.get_latest_by_room(room_name)
    except Exception as exc:
        logger.exception("Session lookup failed (room=%s)", room_name)
        raise SessionLookupFailed("Could not read session") from exc

    if record is None or not record.is_live(clock.now()):
        return None
    return record
