"""Tag toggling for the current photo."""

from __future__ import annotations

from photo_review.gallery.models import SENTINEL_TAG, VOCABULARY_TAGS, Photo
from photo_review.gallery.store import CollectionStore
from photo_review.review.navigator import Navigator


def toggle_tag(photo: Photo, tag: str) -> Photo:
    """Return a copy of photo with tag added or removed.

    Removing drops every occurrence of the tag. The sentinel tag can't be
    toggled and is always present on the result.
    """
    if tag == SENTINEL_TAG:
        return photo
    if photo.has_tag(tag):
        tags = [t for t in photo.tags if t != tag]
    else:
        tags = list(photo.tags) + [tag]
    return photo.with_tags(tags)


class TagEditor:
    """Applies tag toggles to whichever photo the navigator points at."""

    def __init__(
        self,
        store: CollectionStore,
        navigator: Navigator,
        vocabulary: tuple[str, ...] = VOCABULARY_TAGS,
    ):
        self._store = store
        self._navigator = navigator
        self._vocabulary = vocabulary

    @property
    def vocabulary(self) -> tuple[str, ...]:
        return self._vocabulary

    def toggle(self, tag: str) -> Photo | None:
        """Toggle tag on the current photo; returns the updated record."""
        index = self._navigator.current_index
        if index is None or tag == SENTINEL_TAG:
            return None
        photos = self._store.replace_at(index, lambda p: toggle_tag(p, tag))
        return photos[index]
