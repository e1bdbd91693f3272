"""Partition an upstream payload into fiat, crypto and gold collections."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable

from .classify import Group, classify_key
from .entries import NormalizedEntry, is_aliased_key, normalize_entry

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Groups:
    fiat: dict[str, NormalizedEntry] = field(default_factory=dict)
    crypto: dict[str, NormalizedEntry] = field(default_factory=dict)
    gold: dict[str, NormalizedEntry] = field(default_factory=dict)

    def get(self, group: Group) -> dict[str, NormalizedEntry]:
        return getattr(self, group.value)

    def counts(self) -> dict[str, int]:
        return {group.value: len(self.get(group)) for group in Group}

    def total(self) -> int:
        return sum(self.counts().values())


def build_groups(
    current: Mapping[str, Any],
    *,
    source: str,
    now_fn: Callable[[], str] | None = None,
) -> Groups:
    """Classify and normalize every key of ``current``; ignored keys are dropped.

    Codes are unique per group. When two keys map to the same code, an
    aliased key replaces a plain one; otherwise the first key is kept.
    """
    groups = Groups()
    extra = {"now_fn": now_fn} if now_fn is not None else {}
    ignored = 0

    for key, raw in current.items():
        group = classify_key(str(key).lower())
        if group is None:
            ignored += 1
            continue

        entry = normalize_entry(str(key), raw, source=source, **extra)
        bucket = groups.get(group)
        existing = bucket.get(entry.code)
        if existing is not None and (
            is_aliased_key(existing.raw_key) or not is_aliased_key(entry.raw_key)
        ):
            LOGGER.debug(
                "Skipping duplicate code %s from key %s (kept %s)",
                entry.code,
                key,
                existing.raw_key,
            )
            continue
        bucket[entry.code] = entry

    LOGGER.debug("Grouped entries %s, ignored=%d", groups.counts(), ignored)
    return groups
