"""In-memory response cache for GitHub API calls.

Entries remember when they were stored and the ETag GitHub returned, so the
client can serve fresh entries directly and revalidate stale ones with a
conditional request (a 304 answer does not count against the rate limit).
"""

import threading
import time
from dataclasses import dataclass
from typing import Any, Callable


@dataclass(frozen=True)
class CacheOptions:
    """Per-call cache policy.

    Attributes:
        max_age_seconds: Entries older than this are stale.
        background_refresh: Serve a stale entry immediately and refresh it
            in the background instead of waiting for the API.
    """

    max_age_seconds: int | None = None
    background_refresh: bool | None = None


@dataclass
class CacheEntry:
    """Cached response body with its freshness metadata."""

    value: Any
    stored_at: float
    etag: str | None = None


class ResponseCache:
    """Thread-safe response cache keyed by operation and parameters."""

    def __init__(self, max_entries: int = 10_000, clock: Callable[[], float] = time.time):
        self.max_entries = max_entries
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.RLock()

    def get(self, key: str) -> CacheEntry | None:
        with self._lock:
            return self._entries.get(key)

    def age(self, entry: CacheEntry) -> float:
        """Seconds since the entry was stored or last revalidated."""
        return self._clock() - entry.stored_at

    def set(self, key: str, value: Any, etag: str | None = None) -> CacheEntry:
        entry = CacheEntry(value=value, stored_at=self._clock(), etag=etag)
        with self._lock:
            if key not in self._entries and len(self._entries) >= self.max_entries:
                # Evict the oldest entry
                oldest = min(self._entries, key=lambda k: self._entries[k].stored_at)
                del self._entries[oldest]
            self._entries[key] = entry
        return entry

    def touch(self, key: str) -> None:
        """Mark an entry as revalidated (after a 304 Not Modified)."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None:
                entry.stored_at = self._clock()

    def invalidate(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
