"""FastAPI service exposing the classified rate snapshot."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import PlainTextResponse

from .cache import RefreshCache
from .classify import Group
from .config import Settings, load_settings
from .snapshot import all_groups_view, codes_view, group_view, parse_symbols, symbols_view

VERSION = "2026-02-08-1"

_FORCE_VALUES = {"1", "true"}


def _is_forced(value: str | None) -> bool:
    return value is not None and value.strip().lower() in _FORCE_VALUES


def _parse_group(value: str | None) -> Group | None:
    """Map a case-insensitive group name to Group; blank means all groups."""
    if value is None or not value.strip():
        return None
    try:
        return Group(value.strip().lower())
    except ValueError:
        choices = ", ".join(group.value for group in Group)
        raise HTTPException(
            status_code=422,
            detail=f"Unknown group '{value}'. Expected one of: {choices}",
        ) from None


def create_app(
    settings: Settings | None = None,
    cache: RefreshCache | None = None,
) -> FastAPI:
    """Create API app with injected dependencies."""
    app_settings = settings or load_settings()
    app_cache = cache or RefreshCache(settings=app_settings)

    app = FastAPI(title="ratefeed", version=VERSION)
    app.state.settings = app_settings
    app.state.cache = app_cache

    @app.get("/", response_class=PlainTextResponse)
    def root() -> str:
        return "Rate feed is running"

    @app.get("/health")
    def health() -> dict[str, Any]:
        age = app.state.cache.age_seconds()
        return {
            "ok": True,
            "version": VERSION,
            "time": datetime.now(timezone.utc).isoformat(),
            "cache_age_seconds": int(age) if age is not None else None,
        }

    @app.get("/rates")
    def rates(
        group: str | None = Query(default=None),
        symbols: str | None = Query(default=None),
        force: str | None = Query(default=None),
    ) -> dict[str, Any]:
        selected = _parse_group(group)
        requested = parse_symbols(symbols)
        if selected is not None and requested is not None:
            raise HTTPException(
                status_code=400,
                detail="Use either 'group' or 'symbols', not both.",
            )

        snapshot = app.state.cache.get_or_refresh(force=_is_forced(force))
        if selected is not None:
            return group_view(snapshot, selected)
        if requested is not None:
            return symbols_view(snapshot, requested)
        return all_groups_view(snapshot)

    @app.get("/debug/codes")
    def debug_codes(force: str | None = Query(default=None)) -> dict[str, Any]:
        snapshot = app.state.cache.get_or_refresh(force=_is_forced(force))
        return codes_view(snapshot, app.state.settings.debug_sample_size)

    return app


app = create_app()
