"""Upstream market-data fetch over HTTP."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import httpx

from .config import Settings

LOGGER = logging.getLogger(__name__)

CONTAINER_FIELD = "current"

FETCH_FAILED = "Failed to fetch upstream JSON"
CONTAINER_MISSING = f"Upstream JSON missing '{CONTAINER_FIELD}' object"


@dataclass(frozen=True)
class FetchResult:
    """Outcome of one upstream GET.

    ``current`` holds the nested entries mapping on success. ``debug_keys``
    lists the top-level keys received when the container was missing.
    """

    ok: bool
    http_code: int | None
    current: Mapping[str, Any] = field(default_factory=dict)
    error: str | None = None
    debug_keys: tuple[str, ...] = ()


def build_headers(settings: Settings) -> dict[str, str]:
    return {
        "User-Agent": settings.user_agent,
        "Accept": "application/json,text/plain,*/*",
        "Accept-Language": "fa,en;q=0.8",
    }


def _parse_json(response: httpx.Response) -> Any | None:
    try:
        return response.json()
    except ValueError:
        return None


def fetch_feed(settings: Settings, client: httpx.Client | None = None) -> FetchResult:
    """GET the upstream feed once and validate its envelope. Never raises."""
    url = settings.upstream_url
    try:
        if client is None:
            with httpx.Client(timeout=settings.request_timeout_seconds) as owned:
                response = owned.get(url, headers=build_headers(settings))
        else:
            response = client.get(
                url,
                headers=build_headers(settings),
                timeout=settings.request_timeout_seconds,
            )
    except httpx.HTTPError as exc:
        LOGGER.warning("Upstream request to %s failed: %s", url, exc)
        return FetchResult(ok=False, http_code=None, error=f"{FETCH_FAILED}: {exc}")

    http_code = response.status_code
    body = _parse_json(response)
    if not response.is_success or not isinstance(body, Mapping):
        LOGGER.warning("Upstream returned HTTP %s (json=%s)", http_code, body is not None)
        return FetchResult(ok=False, http_code=http_code, error=FETCH_FAILED)

    current = body.get(CONTAINER_FIELD)
    if not isinstance(current, Mapping):
        keys = tuple(str(key) for key in body)
        LOGGER.warning("Upstream JSON has no '%s' object; keys=%s", CONTAINER_FIELD, keys)
        return FetchResult(
            ok=False,
            http_code=http_code,
            error=CONTAINER_MISSING,
            debug_keys=keys,
        )

    return FetchResult(ok=True, http_code=http_code, current=current)
