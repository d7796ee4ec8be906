from __future__ import annotations

from fastapi import APIRouter, Response

from voice_gateway.api.deps import PasswordsDep, SignerDep, UidCookie, UidSigCookie, UoWDep
from voice_gateway.api.v1.schemas.auth import LoginRequest, LogoutResponse, WhoAmIResponse
from voice_gateway.application.dto.identity import UID_COOKIE, UID_SIG_COOKIE, IdentityToken
from voice_gateway.config import settings
from voice_gateway.services import auth_service

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=WhoAmIResponse)
async def login(
    body: LoginRequest,
    response: Response,
    uow: UoWDep,
    signer: SignerDep,
    passwords: PasswordsDep,
) -> WhoAmIResponse:
    result = await auth_service.login(body.username, body.password, uow, signer, passwords)
    # readable by the client, which echoes them back in request bodies
    for key, value in ((UID_COOKIE, result.uid), (UID_SIG_COOKIE, result.signature)):
        response.set_cookie(
            key,
            value,
            path="/",
            samesite="lax",
            secure=settings.is_production,
        )
    return WhoAmIResponse(uuid=result.uid, name=result.name)


@router.get("/me", response_model=WhoAmIResponse)
async def me(
    uow: UoWDep,
    signer: SignerDep,
    dt_uid: UidCookie = None,
    dt_uid_sig: UidSigCookie = None,
) -> WhoAmIResponse:
    token = IdentityToken(uid=dt_uid or "", signature=dt_uid_sig or "")
    uid, name = await auth_service.current_user(token, uow, signer)
    return WhoAmIResponse(uuid=uid, name=name)


@router.post("/logout", response_model=LogoutResponse)
async def logout(response: Response) -> LogoutResponse:
    for key in (UID_COOKIE, UID_SIG_COOKIE):
        response.delete_cookie(
            key,
            path="/",
            domain=settings.AUTH_COOKIE_DOMAIN,
            secure=settings.is_production,
            httponly=True,
            samesite="lax",
        )
    return LogoutResponse()
