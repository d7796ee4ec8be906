from __future__ import annotations

import base64
import hashlib
import hmac

from voice_gateway.application.exceptions import ConfigMissing


class HmacUidSigner:
    """Sign opaque user ids with HMAC-SHA256 (base64url, no padding).

    The signature *is* the session: there is no server-side table, so
    anyone holding ``(uid, sign(uid))`` is that user until the secret rotates.
    """

    def __init__(self, secret: str) -> None:
        self._secret = secret.encode("utf-8") if secret else b""

    def _digest(self, uid: str) -> bytes:
        if not self._secret:
            raise ConfigMissing("UID_SIGNING_SECRET is not set")
        mac = hmac.new(self._secret, uid.encode("utf-8", "surrogatepass"), hashlib.sha256)
        return base64.urlsafe_b64encode(mac.digest()).rstrip(b"=")

    def sign(self, uid: str) -> str:
        return self._digest(uid).decode("ascii")

    def verify(self, uid: str, signature: str) -> bool:
        if not self._secret:
            raise ConfigMissing("UID_SIGNING_SECRET is not set")
        if not isinstance(uid, str) or not isinstance(signature, str) or not signature:
            return False
        try:
            provided = signature.encode("ascii")
        except UnicodeEncodeError:
            return False
        return hmac.compare_digest(self._digest(uid), provided)
