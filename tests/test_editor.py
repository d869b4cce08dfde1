"""Tests for tag toggling."""

import pytest

from photo_review.gallery.models import SENTINEL_TAG, VOCABULARY_TAGS, Photo, make_photo
from photo_review.review.editor import toggle_tag


class TestToggleTag:
    def test_adds_missing_tag_at_end(self):
        photo = make_photo("p1", "/p1.jpg", tags=["all", "urban"])
        assert toggle_tag(photo, "nature").tags == ("all", "urban", "nature")

    def test_removes_every_occurrence(self):
        photo = make_photo("p1", "/p1.jpg", tags=["all", "urban", "nature", "urban"])
        assert toggle_tag(photo, "urban").tags == ("all", "nature")

    def test_sentinel_is_a_no_op(self):
        photo = make_photo("p1", "/p1.jpg", tags=["all", "urban"])
        assert toggle_tag(photo, SENTINEL_TAG) is photo

    def test_restores_sentinel_at_front(self):
        # Bypass the factory to get a record without the sentinel
        photo = Photo(id="p1", src="/p1.jpg", tags=("urban",))
        assert toggle_tag(photo, "nature").tags == ("all", "urban", "nature")
        assert toggle_tag(photo, "urban").tags == ("all",)

    def test_original_record_untouched(self):
        photo = make_photo("p1", "/p1.jpg")
        toggle_tag(photo, "portrait")
        assert photo.tags == ("all",)

    @pytest.mark.parametrize("tag", VOCABULARY_TAGS)
    def test_toggle_twice_restores_membership(self, tag):
        photo = make_photo("p1", "/p1.jpg", tags=["landscape", "urban"])
        twice = toggle_tag(toggle_tag(photo, tag), tag)
        assert set(twice.tags) == set(photo.tags)
        assert SENTINEL_TAG in twice.tags


class TestTagEditor:
    def test_toggles_current_photo_only(self, make_session, two_photos):
        session = make_session(two_photos)
        session.toggle_tag("portrait")
        assert session.photos[0].tags == ("all", "portrait")
        assert session.photos[1].tags == ("all",)

    def test_does_not_move_or_save(self, make_session, two_photos, storage):
        session = make_session(two_photos)
        session.toggle_tag("portrait")
        session.queue.wait_idle(timeout=5)
        assert session.cursor == 0
        assert storage.bodies == []

    def test_empty_collection_ignored(self, make_session):
        session = make_session([])
        assert session.editor.toggle("portrait") is None
