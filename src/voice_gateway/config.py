from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import ConfigDict, ValidationError
from pydantic_settings import BaseSettings

from voice_gateway.application.exceptions import ConfigMissing
from voice_gateway.domain.entities.credentials import CredentialSet

logger = logging.getLogger(__name__)

NAMED_CREDENTIAL_PREFIX = "LIVEKIT_"


class Settings(BaseSettings):
    POSTGRES_USER: str
    POSTGRES_PASSWORD: str
    POSTGRES_DB: str
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432

    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 0
    DB_POOL_TIMEOUT: float = 10.0
    DB_POOL_RECYCLE: int = 300

    APP_ENV: str = "development"
    CORS_ORIGINS: list[str] = ["*"]

    UID_SIGNING_SECRET: str = ""

    LIVEKIT_URL: str = ""
    LIVEKIT_API_KEY: str = ""
    LIVEKIT_API_SECRET: str = ""
    LIVEKIT_CREDENTIALS_JSON: str = ""

    ROOM_PREFIX: str = "voice_assistant_"
    TOKEN_TTL_SECONDS: int = 900
    SESSION_TTL_SECONDS: int = 900

    METADATA_API_KEY: str = ""
    AUTH_COOKIE_DOMAIN: str | None = None

    @property
    def database_url(self) -> str:
        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.POSTGRES_DB}"
        )

    @property
    def is_production(self) -> bool:
        return self.APP_ENV.lower() == "production"

    model_config = ConfigDict(
        env_file=".env",
        extra="allow",
    )


settings = Settings()  # type: ignore[call-arg]


@dataclass(frozen=True, slots=True)
class IssuanceConfig:
    """Immutable snapshot of everything the signer and resolver read.

    Built once per process and passed explicitly; nothing downstream touches
    the environment again.
    """

    signing_secret: str = ""
    credential_map: Mapping[str, CredentialSet] = field(default_factory=dict)
    named_variables: Mapping[str, str] = field(default_factory=dict)
    global_credentials: CredentialSet | None = None
    room_prefix: str = "voice_assistant_"
    token_ttl_seconds: int = 900
    session_ttl_seconds: int = 900
    metadata_api_key: str = ""


def parse_credential_map(raw: str) -> dict[str, CredentialSet]:
    """Parse the JSON credential map, skipping incomplete entries."""
    if not raw or not raw.strip():
        return {}
    try:
        data: Any = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ConfigMissing("LIVEKIT_CREDENTIALS_JSON is not valid JSON") from exc
    if not isinstance(data, dict):
        raise ConfigMissing("LIVEKIT_CREDENTIALS_JSON must be a JSON object")

    result: dict[str, CredentialSet] = {}
    for key, entry in data.items():
        try:
            result[str(key)] = CredentialSet.model_validate(entry)
        except ValidationError:
            logger.warning("Skipping incomplete credential entry %r", key)
    return result


def build_issuance_config(
    source: Settings,
    environ: Mapping[str, str] | None = None,
) -> IssuanceConfig:
    env = os.environ if environ is None else environ
    # per-key variables from .env land in model_extra; the live environment wins
    named = {
        str(name).upper(): str(value)
        for name, value in (source.model_extra or {}).items()
        if str(name).upper().startswith(NAMED_CREDENTIAL_PREFIX) and value is not None
    }
    named.update(
        (name, value)
        for name, value in env.items()
        if name.startswith(NAMED_CREDENTIAL_PREFIX)
    )

    global_credentials: CredentialSet | None = None
    if source.LIVEKIT_URL and source.LIVEKIT_API_KEY and source.LIVEKIT_API_SECRET:
        global_credentials = CredentialSet(
            url=source.LIVEKIT_URL,
            api_key=source.LIVEKIT_API_KEY,
            api_secret=source.LIVEKIT_API_SECRET,
        )

    credential_map = parse_credential_map(source.LIVEKIT_CREDENTIALS_JSON)
    logger.info(
        "Issuance config built (map_entries=%d, named_vars=%d, global=%s)",
        len(credential_map),
        len(named),
        global_credentials is not None,
    )
    return IssuanceConfig(
        signing_secret=source.UID_SIGNING_SECRET,
        credential_map=credential_map,
        named_variables=named,
        global_credentials=global_credentials,
        room_prefix=source.ROOM_PREFIX,
        token_ttl_seconds=source.TOKEN_TTL_SECONDS,
        session_ttl_seconds=source.SESSION_TTL_SECONDS,
        metadata_api_key=source.METADATA_API_KEY,
    )
