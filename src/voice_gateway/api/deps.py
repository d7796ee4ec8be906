"""FastAPI dependency injection helpers."""
from __future__ import annotations

from typing import Annotated, AsyncIterator

from fastapi import Cookie, Depends

from voice_gateway.application.dto.identity import UID_COOKIE, UID_SIG_COOKIE
from voice_gateway.application.ports.auth import IdentitySigner, PasswordChecker
from voice_gateway.application.ports.clock import Clock, SystemClock
from voice_gateway.application.ports.rtc import CredentialResolver, TokenMinter
from voice_gateway.config import IssuanceConfig, build_issuance_config, settings
from voice_gateway.infrastructure.auth.passwords import Argon2PasswordChecker
from voice_gateway.infrastructure.auth.uid_signer import HmacUidSigner
from voice_gateway.infrastructure.db.session import AsyncSessionLocal
from voice_gateway.infrastructure.db.uow import SqlAlchemyUoW
from voice_gateway.infrastructure.rtc.credential_resolver import ConfiguredCredentialResolver
from voice_gateway.infrastructure.rtc.token_minter import LiveKitTokenMinter


async def get_uow() -> AsyncIterator[SqlAlchemyUoW]:
    async with AsyncSessionLocal() as session, SqlAlchemyUoW(session) as uow:
        yield uow


UoWDep = Annotated[SqlAlchemyUoW, Depends(get_uow)]


_config: IssuanceConfig | None = None


def get_issuance_config() -> IssuanceConfig:
    global _config  # noqa: PLW0603
    if _config is None:
        _config = build_issuance_config(settings)
    return _config


ConfigDep = Annotated[IssuanceConfig, Depends(get_issuance_config)]


def get_signer(config: ConfigDep) -> IdentitySigner:
    return HmacUidSigner(config.signing_secret)


def get_resolver(config: ConfigDep) -> CredentialResolver:
    return ConfiguredCredentialResolver(config)


_minter = LiveKitTokenMinter()
_passwords = Argon2PasswordChecker()
_clock = SystemClock()


def get_minter() -> TokenMinter:
    return _minter


def get_password_checker() -> PasswordChecker:
    return _passwords


def get_clock() -> Clock:
    return _clock


SignerDep = Annotated[IdentitySigner, Depends(get_signer)]
ResolverDep = Annotated[CredentialResolver, Depends(get_resolver)]
MinterDep = Annotated[TokenMinter, Depends(get_minter)]
PasswordsDep = Annotated[PasswordChecker, Depends(get_password_checker)]
ClockDep = Annotated[Clock, Depends(get_clock)]

UidCookie = Annotated[str | None, Cookie(alias=UID_COOKIE)]
UidSigCookie = Annotated[str | None, Cookie(alias=UID_SIG_COOKIE)]
