from __future__ import annotations

import hashlib
import hmac
import logging
import re

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

logger = logging.getLogger(__name__)

_LEGACY_MD5_RE = re.compile(r"^[0-9a-fA-F]{32}$")


class Argon2PasswordChecker:
    """argon2id verification with read-through support for legacy MD5 digests.

    Rows still holding an unsalted MD5 hex digest verify once more and are
    flagged for upgrade so the caller can store an argon2id hash instead.
    """

    def __init__(self, hasher: PasswordHasher | None = None) -> None:
        self._hasher = hasher or PasswordHasher()

    @staticmethod
    def is_legacy(stored_hash: str) -> bool:
        return bool(stored_hash) and _LEGACY_MD5_RE.fullmatch(stored_hash) is not None

    def hash(self, password: str) -> str:
        return self._hasher.hash(password)

    def check(self, stored_hash: str, password: str) -> bool:
        if not stored_hash:
            return False
        if self.is_legacy(stored_hash):
            digest = hashlib.md5(password.encode("utf-8")).hexdigest()
            return hmac.compare_digest(digest, stored_hash.lower())
        try:
            return self._hasher.verify(stored_hash, password)
        except VerifyMismatchError:
            return False
        except (InvalidHashError, VerificationError):
            logger.warning("Unrecognised password hash format")
            return False

    def needs_upgrade(self, stored_hash: str) -> bool:
        if self.is_legacy(stored_hash):
            return True
        try:
            return self._hasher.check_needs_rehash(stored_hash)
        except InvalidHashError:
            return False
