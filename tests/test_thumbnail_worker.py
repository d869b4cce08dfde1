"""Tests for the thumbnail LRU cache (mock pixmaps, no QApplication)."""

from unittest.mock import MagicMock

from photo_review.viewer.thumbnail_worker import ThumbnailCache


class TestThumbnailCache:
    def test_put_and_get(self):
        cache = ThumbnailCache(max_count=3)
        pm = MagicMock()
        cache.put("/a.jpg", pm)
        assert cache.get("/a.jpg") is pm
        assert cache.get("/missing.jpg") is None

    def test_evicts_least_recently_used(self):
        cache = ThumbnailCache(max_count=2)
        cache.put("/a.jpg", MagicMock())
        cache.put("/b.jpg", MagicMock())
        cache.get("/a.jpg")
        cache.put("/c.jpg", MagicMock())
        assert cache.get("/b.jpg") is None
        assert cache.get("/a.jpg") is not None
        assert len(cache) == 2

    def test_put_replaces_existing(self):
        cache = ThumbnailCache()
        first, second = MagicMock(), MagicMock()
        cache.put("/a.jpg", first)
        cache.put("/a.jpg", second)
        assert cache.get("/a.jpg") is second
        assert len(cache) == 1

    def test_clear(self):
        cache = ThumbnailCache()
        cache.put("/a.jpg", MagicMock())
        cache.clear()
        assert len(cache) == 0

    def test_remembers_failed_sources(self):
        cache = ThumbnailCache()
        cache.mark_failed("/missing.jpg")
        assert cache.has_failed("/missing.jpg")
        assert not cache.has_failed("/a.jpg")
        assert cache.get("/missing.jpg") is None

    def test_put_clears_failure(self):
        cache = ThumbnailCache()
        cache.mark_failed("/a.jpg")
        cache.put("/a.jpg", MagicMock())
        assert not cache.has_failed("/a.jpg")

    def test_clear_forgets_failures(self):
        cache = ThumbnailCache()
        cache.mark_failed("/a.jpg")
        cache.clear()
        assert not cache.has_failed("/a.jpg")
