"""Seed a development account: python -m voice_gateway.scripts.seed_dev_user"""
from __future__ import annotations

import asyncio
import logging
import uuid

from voice_gateway.infrastructure.auth.passwords import Argon2PasswordChecker
from voice_gateway.infrastructure.db.models.user import UserModel
from voice_gateway.infrastructure.db.session import AsyncSessionLocal

logger = logging.getLogger(__name__)

DEV_MAIL = "dev@example.com"
DEV_PHONE = "13800000000"
DEV_PASSWORD = "dev-password"


async def seed() -> None:
    passwords = Argon2PasswordChecker()
    async with AsyncSessionLocal() as session:
        user = UserModel(
            uuid=str(uuid.uuid4()),
            name="Dev User",
            mail=DEV_MAIL,
            phone=DEV_PHONE,
            password=passwords.hash(DEV_PASSWORD),
        )
        session.add(user)
        await session.commit()
        logger.info("Seeded user %s (%s / %s)", user.uuid, DEV_MAIL, DEV_PHONE)


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    asyncio.run(seed())


if __name__ == "__main__":
    main()
