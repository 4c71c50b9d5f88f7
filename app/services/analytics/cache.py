"""In-process memo for assembled metrics, keyed by snapshot content."""

import hashlib
import threading
from collections import OrderedDict
from collections.abc import Callable, Hashable
from datetime import datetime

from loguru import logger

from app.models.analytics import DashboardMetrics
from app.models.canvass import CanvassSnapshot
from app.services.analytics.config import AnalyticsConfig
from app.services.analytics.rollup import ordered


def snapshot_fingerprint(snapshot: CanvassSnapshot) -> str:
    """SHA-256 over every record, per collection, in id order."""
    digest = hashlib.sha256()
    for name, records in (
        ("mohallas", snapshot.mohallas),
        ("households", snapshot.households),
        ("voters", snapshot.voters),
        ("influencers", snapshot.influencers),
    ):
        digest.update(name.encode())
        for record in ordered(records):
            digest.update(repr(record).encode())
            digest.update(b"\n")
    return digest.hexdigest()


def cache_key(snapshot: CanvassSnapshot, as_of: datetime, config: AnalyticsConfig) -> tuple:
    return snapshot_fingerprint(snapshot), as_of.isoformat(), config


class MetricsCache:
    """Bounded LRU of computed dashboards, safe to share between threads.

    The lock guards the table only; a miss computes outside it, so two threads
    missing the same key may both compute and the later store wins.
    """

    def __init__(self, max_entries: int = 8):
        if max_entries < 1:
            raise ValueError(f"max_entries must be at least 1, got {max_entries}")
        self._max = max_entries
        self._entries: OrderedDict[Hashable, DashboardMetrics] = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get_or_compute(self, key: Hashable, compute_fn: Callable[[], DashboardMetrics]) -> DashboardMetrics:
        """Return the cached value for key, computing and storing it if missing."""
        with self._lock:
            if key in self._entries:
                self._entries.move_to_end(key)
                self.hits += 1
                logger.debug("Metrics cache hit")
                return self._entries[key]
            self.misses += 1

        result = compute_fn()

        with self._lock:
            self._entries[key] = result
            self._entries.move_to_end(key)
            while len(self._entries) > self._max:
                self._entries.popitem(last=False)
        return result

    def invalidate(self) -> None:
        with self._lock:
            self._entries.clear()
        logger.debug("Metrics cache cleared")
