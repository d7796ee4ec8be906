from __future__ import annotations

from fastapi import APIRouter, Response

from voice_gateway.api.deps import (
    ClockDep,
    ConfigDep,
    MinterDep,
    ResolverDep,
    SignerDep,
    UidCookie,
    UidSigCookie,
    UoWDep,
)
from voice_gateway.api.v1.schemas.connection import (
    ConnectionBundleResponse,
    ConnectionDetailsRequest,
)
from voice_gateway.application.dto.connection import ConnectionRequest
from voice_gateway.application.dto.identity import IdentityToken
from voice_gateway.application.ports.auth import IdentitySigner
from voice_gateway.application.ports.clock import Clock
from voice_gateway.application.ports.rtc import CredentialResolver, TokenMinter
from voice_gateway.application.uow import UnitOfWork
from voice_gateway.config import IssuanceConfig
from voice_gateway.services import connection_service

router = APIRouter(prefix="/api", tags=["connection"])

_IDENTITY_FIELDS = {"uid", "uidSig"}


def _to_request(body: ConnectionDetailsRequest) -> ConnectionRequest:
    raw = body.model_dump(by_alias=True, exclude_none=True)
    return ConnectionRequest(
        participant_name=body.participant_name,
        participant_id=body.participant_id,
        voice=body.voice,
        language=body.language,
        credentials_key=body.credentials_key,
        room=body.room,
        agent_name=body.agent_name,
        metadata=body.metadata,
        attributes=body.attributes,
        room_config=body.room_config,
        extra={k: v for k, v in raw.items() if k not in _IDENTITY_FIELDS},
    )


async def _issue(
    body: ConnectionDetailsRequest | None,
    response: Response,
    uid_cookie: str | None,
    uid_sig_cookie: str | None,
    signer: IdentitySigner,
    resolver: CredentialResolver,
    minter: TokenMinter,
    config: IssuanceConfig,
    uow: UnitOfWork,
    clock: Clock,
) -> ConnectionBundleResponse:
    body = body or ConnectionDetailsRequest()
    token = IdentityToken.pick(body.uid, body.uid_sig, uid_cookie, uid_sig_cookie)
    bundle = await connection_service.issue_connection(
        _to_request(body),
        token,
        signer=signer,
        resolver=resolver,
        minter=minter,
        config=config,
        uow=uow,
        clock=clock,
    )
    response.headers["Cache-Control"] = "no-store"
    return ConnectionBundleResponse(
        server_url=bundle.server_url,
        room_name=bundle.room_name,
        participant_token=bundle.participant_token,
        participant_name=bundle.participant_name,
        session_id=bundle.session_id,
    )


@router.post("/connection-details", response_model=ConnectionBundleResponse)
async def connection_details(
    response: Response,
    signer: SignerDep,
    resolver: ResolverDep,
    minter: MinterDep,
    config: ConfigDep,
    uow: UoWDep,
    clock: ClockDep,
    dt_uid: UidCookie = None,
    dt_uid_sig: UidSigCookie = None,
    body: ConnectionDetailsRequest | None = None,
) -> ConnectionBundleResponse:
    return await _issue(body, response, dt_uid, dt_uid_sig, signer, resolver, minter, config, uow, clock)


@router.post("/sessions", response_model=ConnectionBundleResponse)
async def create_session(
    response: Response,
    signer: SignerDep,
    resolver: ResolverDep,
    minter: MinterDep,
    config: ConfigDep,
    uow: UoWDep,
    clock: ClockDep,
    dt_uid: UidCookie = None,
    dt_uid_sig: UidSigCookie = None,
    body: ConnectionDetailsRequest | None = None,
) -> ConnectionBundleResponse:
    return await _issue(body, response, dt_uid, dt_uid_sig, signer, resolver, minter, config, uow, clock)
