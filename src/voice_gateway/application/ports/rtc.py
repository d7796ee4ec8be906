from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

from voice_gateway.domain.entities.credentials import CredentialSet


class CredentialResolver(Protocol):
    def resolve(
        self,
        voice: str | None,
        language: str | None,
        explicit_key: str | None = None,
    ) -> CredentialSet: ...


class TokenMinter(Protocol):
    def mint(
        self,
        *,
        identity: str,
        display_name: str,
        room_name: str,
        credentials: CredentialSet,
        ttl_seconds: int,
        metadata: str | Mapping[str, Any] | None = None,
        attributes: Mapping[str, Any] | None = None,
        agent_name: str | None = None,
    ) -> str: ...
