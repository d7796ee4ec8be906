from __future__ import annotations

import logging
import re

from voice_gateway.application.dto.identity import IdentityToken, LoginResult
from voice_gateway.application.exceptions import (
    AccountLookupFailed,
    AuthenticationFailed,
    ValidationError,
)
from voice_gateway.application.ports.auth import IdentitySigner, PasswordChecker
from voice_gateway.application.uow import UnitOfWork
from voice_gateway.domain.entities.user import UserAccount
from voice_gateway.services.connection_service import authenticate

logger = logging.getLogger(__name__)

_EMAIL_RE = re.compile(r"\S+@\S+\.\S+")

LOGIN_FAILED = "Invalid username or password"


def is_email(identifier: str) -> bool:
    return _EMAIL_RE.search(identifier) is not None


async def _find_user(uow: UnitOfWork, identifier: str) -> UserAccount | None:
    try:
        if is_email(identifier):
            return await uow.users.get_by_mail(identifier)
        return await uow.users.get_by_phone(identifier)
    except Exception as exc:
        logger.exception("Account lookup failed")
        raise AccountLookupFailed("Could not read account") from exc


async def _upgrade_password_hash(uow: UnitOfWork, user: UserAccount, new_hash: str) -> None:
    """Best effort: a failed upgrade is retried on the next successful login."""
    try:
        await uow.users_w.update_password_hash(user.uuid, new_hash)
        await uow.commit()
    except Exception:
        logger.exception("Password hash upgrade failed for user %s", user.uuid)
        try:
            await uow.rollback()
        except Exception:
            logger.exception("Rollback failed (user=%s)", user.uuid)
        return
    logger.info("Upgraded password hash for user %s", user.uuid)


async def login(
    identifier: str,
    password: str,
    uow: UnitOfWork,
    signer: IdentitySigner,
    passwords: PasswordChecker,
) -> LoginResult:
    """Check an identifier (mail or phone) + password and mint the identity token."""
    identifier = (identifier or "").strip()
    password = (password or "").strip()
    if not identifier or not password:
        raise ValidationError("Username and password are required")

    user = await _find_user(uow, identifier)

    if user is None or not passwords.check(user.password_hash, password):
        raise AuthenticationFailed(LOGIN_FAILED)

    if passwords.needs_upgrade(user.password_hash):
        await _upgrade_password_hash(uow, user, passwords.hash(password))

    return LoginResult(uid=user.uuid, name=user.name, signature=signer.sign(user.uuid))


async def current_user(
    token: IdentityToken,
    uow: UnitOfWork,
    signer: IdentitySigner,
) -> tuple[str, str]:
    """Return (uid, display name) for a verified identity token."""
    uid = authenticate(token, signer)
    try:
        user = await uow.users.get_by_uuid(uid)
    except Exception as exc:
        logger.exception("Account lookup failed (uid=%s)", uid)
        raise AccountLookupFailed("Could not read account") from exc
    return uid, user.name if user else ""
