"""In-memory usage cache with TTL-based freshness."""

import threading
import time
from dataclasses import dataclass
from typing import Callable

from .models import UsageStats


@dataclass(frozen=True)
class CacheEntry:
    stats: UsageStats
    # clock() value at capture time
    timestamp: float


class UsageCache:
    """Holds the last successfully fetched UsageStats.

    Safe to share between threads; every access goes through one lock.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._lock = threading.Lock()
        self._entry: CacheEntry | None = None

    def read_if_fresh(self, ttl: float) -> UsageStats | None:
        """Return cached stats if younger than ttl seconds."""
        with self._lock:
            entry = self._entry
            if entry is None:
                return None
            if self._clock() - entry.timestamp < ttl:
                return entry.stats
            return None

    def write(self, stats: UsageStats) -> None:
        with self._lock:
            self._entry = CacheEntry(stats=stats, timestamp=self._clock())

    def read_stale(self) -> UsageStats | None:
        """Return cached stats regardless of age, for fallback."""
        with self._lock:
            return self._entry.stats if self._entry is not None else None
