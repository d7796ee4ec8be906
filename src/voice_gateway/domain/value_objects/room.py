"""Deterministic room names derived from user ids."""
from __future__ import annotations

import re

DEFAULT_ROOM_PREFIX = "voice_assistant_"
MAX_ROOM_NAME_LENGTH = 64

_ROOM_NAME_RE = re.compile(r"^[A-Za-z0-9_-]{1,64}$")
_UNSAFE_CHARS_RE = re.compile(r"[^A-Za-z0-9_-]")


def sanitize(value: str) -> str:
    return _UNSAFE_CHARS_RE.sub("_", value or "")


def derive_room_name(uid: str, prefix: str = DEFAULT_ROOM_PREFIX) -> str:
    """Map a uid onto its room name.

    The same uid always lands in the same room, so a client can reconnect
    without any server-side lookup. Long uids are truncated, which means two
    uids sharing their first ``64 - len(prefix)`` characters collide.
    """
    safe_prefix = sanitize(prefix)[:MAX_ROOM_NAME_LENGTH]
    budget = MAX_ROOM_NAME_LENGTH - len(safe_prefix)
    name = safe_prefix + sanitize(uid)[:budget]
    # empty prefix and empty uid
    return name or "_"


def is_valid_room_name(name: object) -> bool:
    return isinstance(name, str) and _ROOM_NAME_RE.fullmatch(name) is not None
