from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class UserAccount:
    uuid: str
    name: str
    mail: str | None
    phone: str | None
    password_hash: str
