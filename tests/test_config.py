from __future__ import annotations

import pytest

from ratefeed.config import DEFAULT_UPSTREAM_URL, load_settings


def test_load_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("CACHE_TTL_SECONDS", "PORT", "RATEFEED_UPSTREAM_URL"):
        monkeypatch.delenv(name, raising=False)

    settings = load_settings()

    assert settings.cache_ttl_seconds == 60.0
    assert settings.api_port == 8787
    assert settings.upstream_url == DEFAULT_UPSTREAM_URL


def test_load_settings_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CACHE_TTL_SECONDS", "15")
    monkeypatch.setenv("PORT", "3000")
    monkeypatch.setenv("RATEFEED_UPSTREAM_URL", "  ")

    settings = load_settings()

    assert settings.cache_ttl_seconds == 15.0
    assert settings.api_port == 3000
    assert settings.upstream_url == DEFAULT_UPSTREAM_URL
