# tests/unit/cache/test_suggestion_cache.py — v1
"""Tests for cache/suggestion_cache.py."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from filerenamer.cache.cache_factory import create_suggestion_cache
from filerenamer.cache.suggestion_cache import DEFAULT_MAX_ENTRIES, SuggestionCache


class TestGetPut:
    def test_miss_returns_none(self, cache):
        assert cache.get("never seen") is None

    def test_put_then_get(self, cache):
        cache.put("invoice text", "invoice.pdf")
        assert cache.get("invoice text") == "invoice.pdf"

    def test_first_write_wins(self, cache):
        cache.put("same text", "first.pdf")
        cache.put("same text", "second.pdf")
        assert cache.get("same text") == "first.pdf"
        assert len(cache) == 1

    @pytest.mark.parametrize("content,suggestion", [("", "a.pdf"), (None, "a.pdf"), ("text", ""), ("text", None)])
    def test_empty_arguments_are_ignored(self, cache, content, suggestion):
        cache.put(content, suggestion)
        assert len(cache) == 0

    def test_empty_content_lookup_is_none(self, cache):
        assert cache.get("") is None
        assert cache.get(None) is None

    def test_contains(self, cache):
        cache.put("text", "a.pdf")
        assert "text" in cache
        assert "other" not in cache
        assert 42 not in cache


class TestEviction:
    def test_oldest_entry_evicted_when_full(self):
        cache = SuggestionCache(max_entries=2)
        cache.put("one", "one.pdf")
        cache.put("two", "two.pdf")
        cache.put("three", "three.pdf")
        assert len(cache) == 2
        assert cache.get("one") is None
        assert cache.get("two") == "two.pdf"
        assert cache.get("three") == "three.pdf"
        assert cache.stats().evictions == 1

    def test_rewrite_of_existing_key_does_not_evict(self):
        cache = SuggestionCache(max_entries=1)
        cache.put("one", "one.pdf")
        cache.put("one", "other.pdf")
        assert cache.stats().evictions == 0

    def test_invalid_bound(self):
        with pytest.raises(ValueError):
            SuggestionCache(max_entries=0)


class TestClearAndStats:
    def test_clear_empties_and_resets(self, cache):
        cache.put("a", "a.pdf")
        cache.get("a")
        cache.get("b")
        cache.clear()
        assert len(cache) == 0
        assert cache.get("a") is None
        stats = cache.stats()
        assert stats.entries == 0
        assert stats.hits == 0
        assert stats.misses == 1

    def test_hit_rate(self, cache):
        cache.put("a", "a.pdf")
        cache.get("a")
        cache.get("a")
        cache.get("b")
        cache.get("c")
        assert cache.stats().hit_rate == pytest.approx(50.0)

    def test_hit_rate_without_lookups(self, cache):
        assert cache.stats().hit_rate == 0.0


class TestConcurrentAccess:
    def test_parallel_puts_keep_bound_and_first_value(self):
        cache = SuggestionCache(max_entries=50)

        def worker(n: int) -> None:
            for i in range(100):
                cache.put(f"doc-{i}", f"writer{n}.pdf")
                cache.get(f"doc-{i}")

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(worker, range(8)))

        assert len(cache) == 50
        present = [s for s in (cache.get(f"doc-{i}") for i in range(100)) if s is not None]
        assert len(present) == 50
        assert all(s.startswith("writer") for s in present)


class TestFactory:
    def test_default_size(self):
        assert create_suggestion_cache().stats().max_entries == DEFAULT_MAX_ENTRIES

    def test_size_from_settings(self, settings):
        settings.cache_max_entries = 5
        assert create_suggestion_cache(settings).stats().max_entries == 5
