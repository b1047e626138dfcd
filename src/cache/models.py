# src/cache/models.py — v2
"""Cache domain models: CacheStats."""

from __future__ import annotations

from pydantic import BaseModel


class CacheStats(BaseModel):
    """Point-in-time counters for a suggestion cache."""

    entries: int
    max_entries: int
    hits: int = 0
    misses: int = 0
    evictions: int = 0

    @property
    def hit_rate(self) -> float:
        """Percentage of lookups served from the cache (0 with no lookups)."""
        lookups = self.hits + self.misses
        return (self.hits / lookups * 100) if lookups else 0.0
