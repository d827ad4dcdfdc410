"""Tests for the bounded LRU cache."""

import pytest

from basic_code_intel.search.cache import LRUCache


class TestLRUCache:
    """Eviction and recency behaviour."""

    def test_rejects_zero_capacity(self) -> None:
        with pytest.raises(ValueError, match="capacity"):
            LRUCache(0)

    def test_evicts_least_recently_used(self) -> None:
        cache: LRUCache[str, int] = LRUCache(2)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.set("c", 3)
        assert "a" not in cache
        assert cache.get("b") == 2
        assert cache.get("c") == 3
        assert len(cache) == 2

    def test_get_refreshes_recency(self) -> None:
        cache: LRUCache[str, int] = LRUCache(2)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.get("a")
        cache.set("c", 3)
        assert "a" in cache
        assert "b" not in cache

    def test_overwrite_refreshes_recency(self) -> None:
        cache: LRUCache[str, int] = LRUCache(2)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.set("a", 10)
        cache.set("c", 3)
        assert cache.get("a") == 10
        assert "b" not in cache

    def test_missing_key_returns_default(self) -> None:
        cache: LRUCache[str, int] = LRUCache(1)
        assert cache.get("missing") is None
        assert cache.get("missing", 7) == 7

    def test_pop_and_clear(self) -> None:
        cache: LRUCache[str, int] = LRUCache(3)
        cache.set("a", 1)
        cache.set("b", 2)
        assert cache.pop("a") == 1
        assert cache.pop("a") is None
        cache.clear()
        assert len(cache) == 0
