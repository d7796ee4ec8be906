"""Pick the LiveKit endpoint/key/secret for a request.

Operators add tenants or voices purely through configuration: either an
entry in ``LIVEKIT_CREDENTIALS_JSON`` or a trio of ``LIVEKIT_URL_<KEY>``,
``LIVEKIT_API_KEY_<KEY>`` and ``LIVEKIT_API_SECRET_<KEY>`` variables.
"""
from __future__ import annotations

import logging
import re
from collections.abc import Mapping

from voice_gateway.application.exceptions import CredentialsNotConfigured
from voice_gateway.config import IssuanceConfig
from voice_gateway.domain.entities.credentials import CredentialSet

logger = logging.getLogger(__name__)

DEFAULT_ENTRY = "default"

_KEY_UNSAFE_RE = re.compile(r"[^A-Za-z0-9_]")


def normalize_key(value: object) -> str:
    """Uppercase and replace anything outside ``[A-Za-z0-9_]`` with ``_``."""
    if value is None:
        return ""
    text = value if isinstance(value, str) else str(value)
    return _KEY_UNSAFE_RE.sub("_", text.upper())


def _blank(value: str | None) -> bool:
    return value is None or not str(value).strip()


class ConfiguredCredentialResolver:
    def __init__(self, config: IssuanceConfig) -> None:
        self._map: Mapping[str, CredentialSet] = config.credential_map
        self._named = config.named_variables
        self._global = config.global_credentials

    def _from_map(self, key: str) -> CredentialSet | None:
        if key in self._map:
            return self._map[key]
        for name, entry in self._map.items():
            if name.upper() == key:
                return entry
        return None

    def _from_named_variables(self, key: str) -> CredentialSet | None:
        url = self._named.get(f"LIVEKIT_URL_{key}", "").strip()
        api_key = self._named.get(f"LIVEKIT_API_KEY_{key}", "").strip()
        api_secret = self._named.get(f"LIVEKIT_API_SECRET_{key}", "").strip()
        if url and api_key and api_secret:
            return CredentialSet(url=url, api_key=api_key, api_secret=api_secret)
        return None

    def _lookup(self, key: str) -> CredentialSet | None:
        if not key:
            return None
        return self._from_map(key) or self._from_named_variables(key)

    def resolve(
        self,
        voice: str | None,
        language: str | None,
        explicit_key: str | None = None,
    ) -> CredentialSet:
        candidates: list[tuple[str, str]] = []
        if not _blank(explicit_key):
            candidates.append(("explicit", normalize_key(explicit_key)))
        if not _blank(voice) and not _blank(language):
            candidates.append(("voice_language", normalize_key(f"{voice}_{language}")))
        if not _blank(voice):
            candidates.append(("voice", normalize_key(voice)))

        for tier, key in candidates:
            found = self._lookup(key)
            if found is not None:
                logger.debug("Resolved credentials via %s tier (key=%s)", tier, key)
                return found

        found = self._map.get(DEFAULT_ENTRY)
        if found is not None:
            logger.debug("Resolved credentials via default entry")
            return found

        if self._global is not None:
            logger.debug("Resolved credentials via global fallback")
            return self._global

        logger.warning(
            "No credentials configured for voice=%r language=%r key=%r",
            voice,
            language,
            explicit_key,
        )
        raise CredentialsNotConfigured("No media server credentials are configured for this request")
