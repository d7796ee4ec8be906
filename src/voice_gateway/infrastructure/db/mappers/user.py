from __future__ import annotations

from voice_gateway.domain.entities.user import UserAccount
from voice_gateway.infrastructure.db.models.user import UserModel


def model_to_entity(model: UserModel) -> UserAccount:
    return UserAccount(
        uuid=model.uuid,
        name=model.name or "",
        mail=model.mail,
        phone=model.phone,
        password_hash=model.password or "",
    )
