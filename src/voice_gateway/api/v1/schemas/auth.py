from __future__ import annotations

from pydantic import BaseModel


class LoginRequest(BaseModel):
    username: str = ""
    password: str = ""


class WhoAmIResponse(BaseModel):
    ok: bool = True
    uuid: str
    name: str


class LogoutResponse(BaseModel):
    ok: bool = True
