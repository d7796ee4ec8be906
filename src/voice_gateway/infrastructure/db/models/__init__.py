"""Import all models so they register on Base.metadata."""
from voice_gateway.infrastructure.db.models.session import SessionModel
from voice_gateway.infrastructure.db.models.user import UserModel

__all__ = [
    "SessionModel",
    "UserModel",
]
