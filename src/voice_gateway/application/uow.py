from __future__ import annotations

from typing import Protocol

from voice_gateway.application.repositories.session import SessionReader, SessionWriter
from voice_gateway.application.repositories.user import UserReader, UserWriter


class UnitOfWork(Protocol):
    sessions: SessionReader
    sessions_w: SessionWriter
    users: UserReader
    users_w: UserWriter

    async def commit(self) -> None: ...
    async def rollback(self) -> None: ...
    async def flush(self) -> None: ...
