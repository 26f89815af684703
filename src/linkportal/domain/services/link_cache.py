"""Link cache service with TTL support.

Holds a snapshot of every corporate link keyed by GitHub account id. This
backs the "overhead" lookup: one bulk read serves many per-account lookups
until the snapshot expires.
"""

import threading
import time
from typing import Callable, Iterable

from linkportal.domain.entities.corporate_link import CorporateLink


class LinkCache:
    """Thread-safe TTL snapshot of all links."""

    def __init__(self, ttl_seconds: int = 300, clock: Callable[[], float] = time.time):
        """Initialize the cache.

        Args:
            ttl_seconds: Time-to-live for the snapshot in seconds (default: 5 minutes).
            clock: Time source, seconds since the epoch.
        """
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._links: dict[str, CorporateLink] | None = None
        self._loaded_at: float = 0.0
        self._lock = threading.RLock()

    def get_all(self, max_age_seconds: int | None = None) -> dict[str, CorporateLink] | None:
        """Return the snapshot, or None if it is missing or too old.

        Args:
            max_age_seconds: Overrides the TTL for this read.
        """
        max_age = self.ttl_seconds if max_age_seconds is None else max_age_seconds
        with self._lock:
            if self._links is None:
                return None
            if self._clock() - self._loaded_at > max_age:
                return None
            return self._links

    def set_all(self, links: Iterable[CorporateLink]) -> dict[str, CorporateLink]:
        """Replace the snapshot."""
        snapshot = {str(link.third_party_id): link for link in links}
        with self._lock:
            self._links = snapshot
            self._loaded_at = self._clock()
        return snapshot

    def invalidate(self, third_party_id: str) -> None:
        """Drop one account's link from the snapshot."""
        with self._lock:
            if self._links is not None:
                self._links.pop(str(third_party_id), None)

    def clear(self) -> None:
        """Forget the snapshot entirely."""
        with self._lock:
            self._links = None
            self._loaded_at = 0.0
