from __future__ import annotations

from typing import Any, Callable

import httpx

from ratefeed.config import Settings
from ratefeed.fetcher import CONTAINER_MISSING, FETCH_FAILED, fetch_feed

SETTINGS = Settings(upstream_url="https://example.test/feed.json", user_agent="ratefeed-test/1.0")


def _client(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


def test_fetch_feed_returns_nested_container() -> None:
    seen: dict[str, Any] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["user_agent"] = request.headers.get("user-agent")
        seen["accept"] = request.headers.get("accept")
        return httpx.Response(200, json={"current": {"price_usd": "58,000"}, "last": {}})

    result = fetch_feed(SETTINGS, client=_client(handler))

    assert result.ok is True
    assert result.http_code == 200
    assert result.current == {"price_usd": "58,000"}
    assert result.error is None
    assert seen["url"] == "https://example.test/feed.json"
    assert seen["user_agent"] == "ratefeed-test/1.0"
    assert "application/json" in seen["accept"]


def test_fetch_feed_reports_http_errors() -> None:
    result = fetch_feed(SETTINGS, client=_client(lambda _: httpx.Response(500, text="oops")))

    assert result.ok is False
    assert result.http_code == 500
    assert result.error == FETCH_FAILED
    assert result.current == {}


def test_fetch_feed_tolerates_invalid_json() -> None:
    result = fetch_feed(
        SETTINGS, client=_client(lambda _: httpx.Response(200, text="<html>busy</html>"))
    )

    assert result.ok is False
    assert result.http_code == 200
    assert result.error == FETCH_FAILED


def test_fetch_feed_rejects_non_object_body() -> None:
    result = fetch_feed(SETTINGS, client=_client(lambda _: httpx.Response(200, json=[1, 2])))

    assert result.ok is False
    assert result.error == FETCH_FAILED


def test_fetch_feed_captures_keys_when_container_missing() -> None:
    result = fetch_feed(
        SETTINGS, client=_client(lambda _: httpx.Response(200, json={"last": {}, "meta": 1}))
    )

    assert result.ok is False
    assert result.http_code == 200
    assert result.error == CONTAINER_MISSING
    assert result.debug_keys == ("last", "meta")


def test_fetch_feed_converts_transport_errors() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    result = fetch_feed(SETTINGS, client=_client(handler))

    assert result.ok is False
    assert result.http_code is None
    assert result.error is not None
    assert result.error.startswith(FETCH_FAILED)
