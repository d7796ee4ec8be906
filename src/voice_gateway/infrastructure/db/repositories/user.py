from __future__ import annotations

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from voice_gateway.domain.entities.user import UserAccount
from voice_gateway.infrastructure.db.mappers import user as mapper
from voice_gateway.infrastructure.db.models.user import UserModel


class UserReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _first(self, *criteria) -> UserAccount | None:
        stmt = select(UserModel).where(*criteria).limit(1)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return mapper.model_to_entity(model) if model else None

    async def get_by_mail(self, mail: str) -> UserAccount | None:
        return await self._first(UserModel.mail == mail)

    async def get_by_phone(self, phone: str) -> UserAccount | None:
        return await self._first(UserModel.phone == phone)

    async def get_by_uuid(self, uuid: str) -> UserAccount | None:
        return await self._first(UserModel.uuid == uuid)


class UserWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def update_password_hash(self, uuid: str, password_hash: str) -> None:
        stmt = (
            update(UserModel)
            .where(UserModel.uuid == uuid)
            .values(password=password_hash)
        )
        await self._session.execute(stmt)
