# src/cache/cache_factory.py — v3
"""Factory for the suggestion cache."""

from __future__ import annotations

from filerenamer.cache.suggestion_cache import DEFAULT_MAX_ENTRIES, SuggestionCache
from filerenamer.config.settings import Settings


def create_suggestion_cache(settings: Settings | None = None) -> SuggestionCache:
    """Instantiate the suggestion cache sized from ``settings``.

    Args:
        settings: Application settings. Defaults to 1000 entries.
    """
    max_entries = DEFAULT_MAX_ENTRIES if settings is None else settings.cache_max_entries
    return SuggestionCache(max_entries=max_entries)
