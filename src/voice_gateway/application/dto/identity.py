from __future__ import annotations

from dataclasses import dataclass

UID_COOKIE = "dt_uid"
UID_SIG_COOKIE = "dt_uid_sig"


@dataclass(frozen=True, slots=True)
class IdentityToken:
    """uid + signature pair; the client holds it, the server only re-verifies it."""

    uid: str
    signature: str

    @classmethod
    def pick(
        cls,
        body_uid: object,
        body_sig: object,
        cookie_uid: str | None,
        cookie_sig: str | None,
    ) -> IdentityToken:
        """Prefer non-blank body values, falling back to cookies."""
        uid = body_uid.strip() if isinstance(body_uid, str) and body_uid.strip() else (cookie_uid or "")
        sig = body_sig.strip() if isinstance(body_sig, str) and body_sig.strip() else (cookie_sig or "")
        return cls(uid=uid, signature=sig)


@dataclass(frozen=True, slots=True)
class LoginResult:
    uid: str
    name: str
    signature: str
