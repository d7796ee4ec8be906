from __future__ import annotations

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from voice_gateway.infrastructure.db.base import Base


class UserModel(Base):
    """Account table owned by the wider product; this service only reads it
    and upgrades legacy password hashes."""

    __tablename__ = "user_table"

    uuid: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    mail: Mapped[str | None] = mapped_column(String(255), nullable=True, unique=True)
    phone: Mapped[str | None] = mapped_column(String(32), nullable=True, unique=True)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
