"""Shared test fixtures."""
from __future__ import annotations

import dataclasses
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest

from voice_gateway.config import IssuanceConfig
from voice_gateway.domain.entities.credentials import CredentialSet
from voice_gateway.domain.entities.session import SessionRecord
from voice_gateway.domain.entities.user import UserAccount
from voice_gateway.infrastructure.auth.uid_signer import HmacUidSigner

SIGNING_SECRET = "unit-test-signing-secret-0123456789abcdef"
GLOBAL_SECRET = "global-secret-0123456789abcdef0123456789"


@dataclass
class FixedClock:
    current: datetime = field(default_factory=lambda: datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc))

    def now(self) -> datetime:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current = self.current + timedelta(seconds=seconds)


def make_credentials(name: str = "a") -> CredentialSet:
    return CredentialSet(
        url=f"wss://{name}.livekit.test",
        api_key=f"key-{name}",
        api_secret=f"secret-{name}-0123456789abcdef0123456789abcdef",
    )


def make_config(**overrides: Any) -> IssuanceConfig:
    values: dict[str, Any] = {
        "signing_secret": SIGNING_SECRET,
        "credential_map": {},
        "named_variables": {},
        "global_credentials": CredentialSet(
            url="wss://global.livekit.test", api_key="global-key", api_secret=GLOBAL_SECRET,
        ),
        "metadata_api_key": "test-metadata-key",
    }
    values.update(overrides)
    return IssuanceConfig(**values)


def make_session(
    *,
    room_name: str = "voice_assistant_abc123",
    uid: str = "abc123",
    created_at: datetime | None = None,
    ttl_seconds: int = 900,
    metadata: dict[str, Any] | None = None,
) -> SessionRecord:
    created = created_at or datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
    return SessionRecord(
        session_id=uuid.uuid4(),
        room_name=room_name,
        uid=uid,
        metadata=metadata or {},
        created_at=created,
        expire_at=created + timedelta(seconds=ttl_seconds),
    )


@dataclass
class FakeSessionReader:
    _rows: list[SessionRecord] = field(default_factory=list)
    fail: bool = False

    async def get_latest_by_room(self, room_name: str) -> SessionRecord | None:
        if self.fail:
            raise RuntimeError("server closed the connection unexpectedly")
        matches = [r for r in self._rows if r.room_name == room_name]
        return max(matches, key=lambda r: r.created_at) if matches else None


@dataclass
class FakeSessionWriter:
    """Buffers inserts until the owning UoW commits."""

    _reader: FakeSessionReader
    _pending: list[SessionRecord] = field(default_factory=list)
    fail_on_add: bool = False

    async def add(self, record: SessionRecord) -> None:
        if self.fail_on_add:
            raise RuntimeError("insert failed")
        if any(r.session_id == record.session_id for r in self._reader._rows + self._pending):
            raise RuntimeError("duplicate key value violates unique constraint")
        self._pending.append(record)


@dataclass
class FakeUserReader:
    _users: dict[str, UserAccount] = field(default_factory=dict)
    fail: bool = False

    def _check(self) -> None:
        if self.fail:
            raise RuntimeError("connection reset by peer")

    async def get_by_mail(self, mail: str) -> UserAccount | None:
        self._check()
        return next((u for u in self._users.values() if u.mail == mail), None)

    async def get_by_phone(self, phone: str) -> UserAccount | None:
        self._check()
        return next((u for u in self._users.values() if u.phone == phone), None)

    async def get_by_uuid(self, uuid: str) -> UserAccount | None:
        self._check()
        return self._users.get(uuid)


@dataclass
class FakeUserWriter:
    _reader: FakeUserReader

    async def update_password_hash(self, uuid: str, password_hash: str) -> None:
        user = self._reader._users[uuid]
        self._reader._users[uuid] = dataclasses.replace(user, password_hash=password_hash)


@dataclass
class FakeUoW:
    """In-memory UoW for unit tests; uncommitted inserts are invisible to readers."""
    sessions: FakeSessionReader = field(default_factory=FakeSessionReader)
    sessions_w: FakeSessionWriter | None = None
    users: FakeUserReader = field(default_factory=FakeUserReader)
    users_w: FakeUserWriter | None = None
    fail_on_commit: bool = False
    _committed: bool = False
    _rolled_back: bool = False

    def __post_init__(self) -> None:
        if self.sessions_w is None:
            self.sessions_w = FakeSessionWriter(self.sessions)
        if self.users_w is None:
            self.users_w = FakeUserWriter(self.users)

    async def flush(self) -> None:
        pass

    async def commit(self) -> None:
        if self.fail_on_commit:
            raise RuntimeError("could not serialize access")
        self.sessions._rows.extend(self.sessions_w._pending)
        self.sessions_w._pending.clear()
        self._committed = True

    async def rollback(self) -> None:
        self.sessions_w._pending.clear()
        self._rolled_back = True


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def config() -> IssuanceConfig:
    return make_config()


@pytest.fixture
def signer() -> HmacUidSigner:
    return HmacUidSigner(SIGNING_SECRET)
