"""Issue connection bundles: verify identity, pick credentials, mint, record."""
from __future__ import annotations

import logging
import uuid
from typing import Any

from voice_gateway.application.dto.connection import ConnectionBundle, ConnectionRequest
from voice_gateway.application.dto.identity import IdentityToken
from voice_gateway.application.exceptions import InvalidIdentity, SignatureInvalid, ValidationError
from voice_gateway.application.ports.auth import IdentitySigner
from voice_gateway.application.ports.clock import Clock, SystemClock
from voice_gateway.application.ports.rtc import CredentialResolver, TokenMinter
from voice_gateway.application.uow import UnitOfWork
from voice_gateway.config import IssuanceConfig
from voice_gateway.domain.value_objects.room import derive_room_name, is_valid_room_name
from voice_gateway.services import session_service

logger = logging.getLogger(__name__)

DEFAULT_PARTICIPANT_NAME = "user"

_system_clock = SystemClock()


def _clean(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _legacy_agent_name(room_config: Any) -> str | None:
    """``room_config.agents[0].agent_name`` from older clients."""
    if not isinstance(room_config, dict):
        return None
    agents = room_config.get("agents")
    if not isinstance(agents, list) or not agents or not isinstance(agents[0], dict):
        return None
    return _clean(agents[0].get("agent_name"))


def authenticate(token: IdentityToken, signer: IdentitySigner) -> str:
    """Return the verified uid.

    The failure message is identical for unknown and known uids.
    """
    uid = _clean(token.uid)
    if uid is None:
        raise InvalidIdentity("Missing uid")
    if not token.signature or not signer.verify(uid, token.signature):
        raise SignatureInvalid("Invalid uid signature")
    return uid


async def issue_connection(
    request: ConnectionRequest,
    token: IdentityToken,
    *,
    signer: IdentitySigner,
    resolver: CredentialResolver,
    minter: TokenMinter,
    config: IssuanceConfig,
    uow: UnitOfWork,
    clock: Clock = _system_clock,
) -> ConnectionBundle:
    uid = authenticate(token, signer)

    requested_room = _clean(request.room)
    if requested_room is not None and not is_valid_room_name(requested_room):
        raise ValidationError("Invalid room name")

    room_name = derive_room_name(uid, prefix=config.room_prefix)
    participant_name = _clean(request.participant_name) or DEFAULT_PARTICIPANT_NAME
    identity = _clean(request.participant_id) or uid
    agent_name = _clean(request.agent_name) or _legacy_agent_name(request.room_config)

    credentials = resolver.resolve(request.voice, request.language, request.credentials_key)

    participant_token = minter.mint(
        identity=identity,
        display_name=participant_name,
        room_name=room_name,
        credentials=credentials,
        ttl_seconds=config.token_ttl_seconds,
        metadata=request.metadata,
        attributes=request.attributes,
        agent_name=agent_name,
    )

    session_id = uuid.uuid4()
    await session_service.create_session(
        session_id,
        room_name,
        uid,
        request.extra,
        config.session_ttl_seconds,
        uow,
        clock,
    )

    logger.info(
        "Issued connection for room %s (session=%s, agent=%s)",
        room_name,
        session_id,
        agent_name or "-",
    )
    return ConnectionBundle(
        server_url=credentials.url,
        room_name=room_name,
        participant_token=participant_token,
        participant_name=participant_name,
        session_id=session_id,
    )
