from __future__ import annotations

import re

import pytest

from voice_gateway.domain.value_objects.room import derive_room_name, is_valid_room_name

ROOM_RE = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


@pytest.mark.parametrize(
    "uid",
    [
        "",
        "abc123",
        "用户-42",
        "a b/c?d=e&f",
        "x" * 200,
        "🎤" * 70,
        "550e8400-e29b-41d4-a716-446655440000",
    ],
)
def test_derived_name_always_matches_room_pattern(uid):
    assert ROOM_RE.fullmatch(derive_room_name(uid))


def test_derive_example():
    assert derive_room_name("abc123") == "voice_assistant_abc123"


def test_derive_is_deterministic():
    assert derive_room_name("user@example.com") == derive_room_name("user@example.com")


def test_unsafe_characters_replaced():
    assert derive_room_name("a.b c") == "voice_assistant_a_b_c"


def test_long_uid_truncated_to_64():
    name = derive_room_name("u" * 200)
    assert len(name) == 64
    assert name.startswith("voice_assistant_")


def test_truncation_collision_for_shared_prefix():
    base = "u" * 100
    assert derive_room_name(base + "1") == derive_room_name(base + "2")


def test_distinct_short_uids_get_distinct_rooms():
    assert derive_room_name("alice") != derive_room_name("bob")


def test_custom_prefix():
    assert derive_room_name("abc", prefix="room-") == "room-abc"


def test_empty_uid_yields_prefix():
    assert derive_room_name("") == "voice_assistant_"


@pytest.mark.parametrize(
    ("name", "valid"),
    [
        ("voice_assistant_abc", True),
        ("a", True),
        ("A-b_9", True),
        ("", False),
        ("x" * 65, False),
        ("room 1", False),
        ("room/1", False),
        (None, False),
        (123, False),
    ],
)
def test_is_valid_room_name(name, valid):
    assert is_valid_room_name(name) is valid
