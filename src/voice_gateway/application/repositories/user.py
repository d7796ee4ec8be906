from __future__ import annotations

from typing import Protocol

from voice_gateway.domain.entities.user import UserAccount


class UserReader(Protocol):
    async def get_by_mail(self, mail: str) -> UserAccount | None: ...

    async def get_by_phone(self, phone: str) -> UserAccount | None: ...

    async def get_by_uuid(self, uuid: str) -> UserAccount | None: ...


class UserWriter(Protocol):
    async def update_password_hash(self, uuid: str, password_hash: str) -> None: ...
