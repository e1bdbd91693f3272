"""Refresh snapshots and the response views built from them."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import asdict, dataclass, field
from typing import Any

from .classify import Group
from .entries import NormalizedEntry
from .grouping import Groups

SNAPSHOT_KEYS = (
    "ok",
    "fetched_at",
    "source",
    "http_code",
    "error",
    "group",
    "count",
    "rates",
    "debug_keys",
)

# Cross-group collisions in the unified code set resolve in this order.
UNIFIED_ORDER = (Group.FIAT, Group.CRYPTO, Group.GOLD)


@dataclass(frozen=True)
class Snapshot:
    """Result of one refresh attempt; replaced wholesale, never mutated."""

    ok: bool
    fetched_at: int
    source: str
    http_code: int | None
    error: str | None = None
    groups: Groups = field(default_factory=Groups)
    debug_keys: tuple[str, ...] = ()

    def counts(self) -> dict[str, int]:
        return self.groups.counts()

    def unified(self) -> dict[str, NormalizedEntry]:
        merged: dict[str, NormalizedEntry] = {}
        for group in UNIFIED_ORDER:
            for code, entry in self.groups.get(group).items():
                merged.setdefault(code, entry)
        return merged


def parse_symbols(value: str | None) -> list[str] | None:
    """Parse ``usd, EUR,,aed`` into ``["usd", "eur", "aed"]``; None if empty."""
    if not value:
        return None
    seen: list[str] = []
    for raw in value.split(","):
        symbol = raw.strip().lower()
        if symbol and symbol not in seen:
            seen.append(symbol)
    return seen or None


def _entries_payload(entries: dict[str, NormalizedEntry]) -> dict[str, dict[str, Any]]:
    return {code: asdict(entry) for code, entry in entries.items()}


def _ordered(payload: dict[str, Any]) -> dict[str, Any]:
    return {key: payload[key] for key in SNAPSHOT_KEYS if key in payload}


def _base(snapshot: Snapshot) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "ok": snapshot.ok,
        "fetched_at": snapshot.fetched_at,
        "source": snapshot.source,
        "http_code": snapshot.http_code,
        "error": snapshot.error,
    }
    if snapshot.debug_keys:
        payload["debug_keys"] = list(snapshot.debug_keys)
    return payload


def all_groups_view(snapshot: Snapshot) -> dict[str, Any]:
    payload = _base(snapshot)
    payload["count"] = snapshot.counts()
    payload["rates"] = {
        group.value: _entries_payload(snapshot.groups.get(group)) for group in Group
    }
    return _ordered(payload)


def group_view(snapshot: Snapshot, group: Group) -> dict[str, Any]:
    entries = snapshot.groups.get(group)
    payload = _base(snapshot)
    payload["group"] = group.value
    payload["count"] = len(entries)
    payload["rates"] = _entries_payload(entries)
    return _ordered(payload)


def symbols_view(snapshot: Snapshot, symbols: Iterable[str]) -> dict[str, Any]:
    """Entries for the requested codes across all groups; unknown codes are skipped."""
    unified = snapshot.unified()
    selected = {code: unified[code] for code in symbols if code in unified}
    payload = _base(snapshot)
    payload["count"] = len(selected)
    payload["rates"] = _entries_payload(selected)
    return _ordered(payload)


def codes_view(snapshot: Snapshot, sample_size: int) -> dict[str, Any]:
    """Sorted code samples per group, without entry bodies."""
    groups: dict[str, Any] = {}
    for group in Group:
        codes = sorted(snapshot.groups.get(group))
        groups[group.value] = {"total": len(codes), "sample": codes[:sample_size]}
    return {
        "ok": snapshot.ok,
        "total": snapshot.groups.total(),
        "groups": groups,
    }
