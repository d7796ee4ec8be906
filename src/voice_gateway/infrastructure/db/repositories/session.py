from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from voice_gateway.domain.entities.session import SessionRecord
from voice_gateway.infrastructure.db.mappers import session as mapper
from voice_gateway.infrastructure.db.models.session import SessionModel


class SessionReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_latest_by_room(self, room_name: str) -> SessionRecord | None:
        stmt = (
            select(SessionModel)
            .where(SessionModel.room_name == room_name)
            .order_by(SessionModel.created_at.desc())
            .limit(1)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return mapper.model_to_entity(model) if model else None


class SessionWriterRepo:
    """Insert-only: session rows are an append-only log."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, record: SessionRecord) -> None:
        self._session.add(mapper.entity_to_model(record))
        await self._session.flush()
