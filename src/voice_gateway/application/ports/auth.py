from __future__ import annotations

from typing import Protocol


class IdentitySigner(Protocol):
    def sign(self, uid: str) -> str: ...

    def verify(self, uid: str, signature: str) -> bool:
        """Return False for any mismatch or malformed signature; never raise on input."""
        ...


class PasswordChecker(Protocol):
    def check(self, stored_hash: str, password: str) -> bool: ...

    def needs_upgrade(self, stored_hash: str) -> bool: ...

    def hash(self, password: str) -> str: ...
