# src/cache/suggestion_cache.py — v1
"""In-memory suggestion cache keyed by content hash.

Consulted before any provider call so reprocessed documents never hit the
network twice in a session. Entries are first-write-wins: once a document has
a suggestion it keeps it, even if a later run would have asked a different
provider. When full, the oldest entry is evicted (FIFO).
"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict

from filerenamer.cache.fingerprint import compute_content_hash
from filerenamer.cache.models import CacheStats

logger = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 1000


class SuggestionCache:
    """Bounded, lock-protected map from content hash to sanitized filename."""

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be >= 1")
        self._max_entries = max_entries
        self._entries: OrderedDict[str, str] = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    def get(self, content: str | None) -> str | None:
        """Return the cached suggestion for ``content``, or None."""
        if not content:
            return None
        key = compute_content_hash(content)
        with self._lock:
            suggestion = self._entries.get(key)
            if suggestion is None:
                self._misses += 1
            else:
                self._hits += 1
        return suggestion

    def put(self, content: str | None, suggestion: str | None) -> None:
        """Store ``suggestion`` for ``content`` unless one is already stored.

        Empty content or an empty suggestion is ignored.
        """
        if not content or not suggestion:
            return
        key = compute_content_hash(content)
        with self._lock:
            if key in self._entries:
                return
            while len(self._entries) >= self._max_entries:
                evicted, _ = self._entries.popitem(last=False)
                self._evictions += 1
                logger.debug("Evicted suggestion cache entry %s", evicted[:12])
            self._entries[key] = suggestion

    def clear(self) -> None:
        """Drop every entry and reset counters."""
        with self._lock:
            self._entries.clear()
            self._hits = self._misses = self._evictions = 0

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(
                entries=len(self._entries),
                max_entries=self._max_entries,
                hits=self._hits,
                misses=self._misses,
                evictions=self._evictions,
            )

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, content: object) -> bool:
        if not isinstance(content, str) or not content:
            return False
        key = compute_content_hash(content)
        with self._lock:
            return key in self._entries
