"""TTL-gated snapshot cache in front of the upstream fetch."""

from __future__ import annotations

import logging
import threading
import time
from datetime import datetime, timezone
from typing import Callable

from .config import Settings, load_settings
from .fetcher import FetchResult, fetch_feed
from .grouping import build_groups
from .snapshot import Snapshot

LOGGER = logging.getLogger(__name__)

NO_ENTRIES = "Upstream JSON contained no recognised entries"


def _utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class RefreshCache:
    """Holds the one live Snapshot and refreshes it on demand.

    Refresh is lazy: a request refreshes when the snapshot is missing, older
    than the TTL, or the caller forces it. Failed refreshes are cached too.
    The decide-fetch-swap sequence runs under a lock so concurrent request
    threads never fetch twice for the same expiry.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        fetch_fn: Callable[[Settings], FetchResult] = fetch_feed,
        clock: Callable[[], float] = time.monotonic,
        wall_clock: Callable[[], float] = time.time,
        now_fn: Callable[[], str] = _utcnow_iso,
    ) -> None:
        self.settings = settings or load_settings()
        self.fetch_fn = fetch_fn
        self.clock = clock
        self.wall_clock = wall_clock
        self.now_fn = now_fn
        self._lock = threading.Lock()
        self._snapshot: Snapshot | None = None
        self._refreshed_at: float | None = None

    def age_seconds(self) -> float | None:
        refreshed_at = self._refreshed_at
        if refreshed_at is None:
            return None
        return self.clock() - refreshed_at

    def is_fresh(self) -> bool:
        age = self.age_seconds()
        if self._snapshot is None or age is None:
            return False
        return age < self.settings.cache_ttl_seconds

    def get_or_refresh(self, force: bool = False) -> Snapshot:
        """Return the cached snapshot, refreshing it first when stale or forced."""
        with self._lock:
            if not force and self.is_fresh():
                LOGGER.debug("Serving cached snapshot (age=%.1fs)", self.age_seconds())
                return self._snapshot
            snapshot = self._refresh()
            self._snapshot = snapshot
            self._refreshed_at = self.clock()
            return snapshot

    def _refresh(self) -> Snapshot:
        source = self.settings.upstream_url
        LOGGER.info("Refreshing snapshot from %s", source)
        fetched_at = int(self.wall_clock())

        try:
            result = self.fetch_fn(self.settings)
            if not result.ok:
                return Snapshot(
                    ok=False,
                    fetched_at=fetched_at,
                    source=source,
                    http_code=result.http_code,
                    error=result.error,
                    debug_keys=result.debug_keys,
                )

            groups = build_groups(result.current, source=source, now_fn=self.now_fn)
        except Exception as exc:
            LOGGER.exception("Snapshot refresh failed: %s", exc)
            return Snapshot(
                ok=False,
                fetched_at=fetched_at,
                source=source,
                http_code=None,
                error=str(exc) or exc.__class__.__name__,
            )

        if groups.total() == 0:
            LOGGER.warning("Upstream payload had no classifiable entries")
            return Snapshot(
                ok=False,
                fetched_at=fetched_at,
                source=source,
                http_code=result.http_code,
                error=NO_ENTRIES,
            )

        LOGGER.info("Snapshot refreshed: %s", groups.counts())
        return Snapshot(
            ok=True,
            fetched_at=fetched_at,
            source=source,
            http_code=result.http_code,
            groups=groups,
        )
