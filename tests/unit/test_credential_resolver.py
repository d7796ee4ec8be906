from __future__ import annotations

import pytest

from voice_gateway.application.exceptions import CredentialsNotConfigured
from voice_gateway.infrastructure.rtc.credential_resolver import (
    ConfiguredCredentialResolver,
    normalize_key,
)
from tests.conftest import make_config, make_credentials


@pytest.fixture
def creds():
    return {
        "voice_lang": make_credentials("voicelang"),
        "voice": make_credentials("voice"),
        "default": make_credentials("default"),
    }


def _resolver(credential_map, **overrides):
    return ConfiguredCredentialResolver(make_config(credential_map=credential_map, **overrides))


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("yuting_yue", "YUTING_YUE"),
        ("xiao-bai", "XIAO_BAI"),
        ("a b.c", "A_B_C"),
        ("小白", "__"),
        ("", ""),
        (None, ""),
        (42, "42"),
    ],
)
def test_normalize_key(raw, expected):
    assert normalize_key(raw) == expected


@pytest.mark.parametrize("raw", ["yuting yue", "Ünïcode-ß", "ok_KEY_1", "小白-mandarin"])
def test_normalize_key_is_idempotent(raw):
    once = normalize_key(raw)
    assert normalize_key(once) == once


def test_precedence_voice_language_first(creds):
    resolver = _resolver(
        {"XIAOBAI_YUE": creds["voice_lang"], "XIAOBAI": creds["voice"], "default": creds["default"]},
        global_credentials=None,
    )
    assert resolver.resolve("xiaobai", "yue") == creds["voice_lang"]


def test_precedence_falls_back_to_voice(creds):
    resolver = _resolver(
        {"XIAOBAI": creds["voice"], "default": creds["default"]},
        global_credentials=None,
    )
    assert resolver.resolve("xiaobai", "yue") == creds["voice"]


def test_precedence_falls_back_to_default(creds):
    resolver = _resolver({"default": creds["default"]}, global_credentials=None)
    assert resolver.resolve("xiaobai", "yue") == creds["default"]


def test_precedence_falls_back_to_global():
    resolver = _resolver({})
    assert resolver.resolve("xiaobai", "yue").url == "wss://global.livekit.test"


def test_nothing_configured_raises():
    resolver = _resolver({}, global_credentials=None)
    with pytest.raises(CredentialsNotConfigured):
        resolver.resolve("xiaobai", "yue")


def test_end_to_end_example_entry():
    entry = make_credentials("a")
    resolver = _resolver({"YUTING_YUE": entry})
    assert resolver.resolve("yuting", "yue") is entry


def test_map_lookup_is_case_insensitive(creds):
    resolver = _resolver({"yuting_yue": creds["voice_lang"]}, global_credentials=None)
    assert resolver.resolve("Yuting", "Yue") == creds["voice_lang"]


def test_explicit_key_wins(creds):
    resolver = _resolver(
        {"TENANT_B": creds["default"], "XIAOBAI_YUE": creds["voice_lang"]},
        global_credentials=None,
    )
    assert resolver.resolve("xiaobai", "yue", explicit_key="tenant-b") == creds["default"]


def test_unknown_explicit_key_falls_through(creds):
    resolver = _resolver({"XIAOBAI_YUE": creds["voice_lang"]}, global_credentials=None)
    assert resolver.resolve("xiaobai", "yue", explicit_key="nope") == creds["voice_lang"]


def test_named_variables_after_map(creds):
    named = {
        "LIVEKIT_URL_XIAOBAI_YUE": "wss://named.livekit.test",
        "LIVEKIT_API_KEY_XIAOBAI_YUE": "named-key",
        "LIVEKIT_API_SECRET_XIAOBAI_YUE": "named-secret",
    }
    resolver = _resolver({"XIAOBAI": creds["voice"]}, named_variables=named)
    found = resolver.resolve("xiaobai", "yue")
    assert found.url == "wss://named.livekit.test"
    assert found.api_key == "named-key"
    assert found.api_secret == "named-secret"


def test_map_beats_named_variables_for_same_key(creds):
    named = {
        "LIVEKIT_URL_XIAOBAI": "wss://named.livekit.test",
        "LIVEKIT_API_KEY_XIAOBAI": "named-key",
        "LIVEKIT_API_SECRET_XIAOBAI": "named-secret",
    }
    resolver = _resolver({"XIAOBAI": creds["voice"]}, named_variables=named)
    assert resolver.resolve("xiaobai", None) == creds["voice"]


def test_incomplete_named_variables_ignored():
    named = {
        "LIVEKIT_URL_XIAOBAI": "wss://named.livekit.test",
        "LIVEKIT_API_KEY_XIAOBAI": "named-key",
    }
    resolver = _resolver({}, named_variables=named, global_credentials=None)
    with pytest.raises(CredentialsNotConfigured):
        resolver.resolve("xiaobai", None)


def test_blank_voice_skips_voice_tiers(creds):
    resolver = _resolver({"_YUE": creds["voice_lang"], "default": creds["default"]})
    assert resolver.resolve("", "yue") == creds["default"]
    assert resolver.resolve(None, None) == creds["default"]
