from __future__ import annotations


class AppError(Exception):
    """Base application error.

    ``kind`` is the stable identifier returned to callers; ``detail`` is the
    human-readable message and must never carry driver or internal output.
    """

    kind: str = "InternalError"
    status_code: int = 500

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__(detail)


class ConfigMissing(AppError):
    kind = "ConfigMissing"
    status_code = 500


class InvalidIdentity(AppError):
    kind = "InvalidIdentity"
    status_code = 400


class SignatureInvalid(AppError):
    kind = "SignatureInvalid"
    status_code = 401


class AuthenticationFailed(AppError):
    kind = "AuthenticationFailed"
    status_code = 401


class CredentialsNotConfigured(AppError):
    kind = "CredentialsNotConfigured"
    status_code = 500


class SessionCreateFailed(AppError):
    kind = "SessionCreateFailed"
    status_code = 503


class SessionLookupFailed(AppError):
    kind = "SessionLookupFailed"
    status_code = 503


class AccountLookupFailed(AppError):
    kind = "AccountLookupFailed"
    status_code = 503


class ValidationError(AppError):
    kind = "ValidationError"
    status_code = 422
