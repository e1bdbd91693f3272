"""Environment-driven configuration for ratefeed."""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_UPSTREAM_URL = "https://call2.tgju.org/ajax.json"


def _env_str(name: str, default: str) -> str:
    value = os.getenv(name)
    return value.strip() if value is not None and value.strip() else default


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return int(value)


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return float(value)


@dataclass(frozen=True)
class Settings:
    upstream_url: str = DEFAULT_UPSTREAM_URL
    cache_ttl_seconds: float = 60.0
    request_timeout_seconds: float = 10.0
    user_agent: str = "ratefeed/1.0"
    debug_sample_size: int = 300
    api_host: str = "0.0.0.0"
    api_port: int = 8787
    log_level: str = "INFO"


def load_settings() -> Settings:
    """Load settings from environment variables."""
    return Settings(
        upstream_url=_env_str("RATEFEED_UPSTREAM_URL", DEFAULT_UPSTREAM_URL),
        cache_ttl_seconds=_env_float("CACHE_TTL_SECONDS", 60.0),
        request_timeout_seconds=_env_float("RATEFEED_TIMEOUT_SECONDS", 10.0),
        user_agent=_env_str("RATEFEED_USER_AGENT", "ratefeed/1.0"),
        debug_sample_size=_env_int("RATEFEED_DEBUG_SAMPLE", 300),
        api_host=_env_str("API_HOST", "0.0.0.0"),
        api_port=_env_int("PORT", 8787),
        log_level=_env_str("LOG_LEVEL", "INFO"),
    )
