"""Filtered thumbnail preview of the collection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from photo_review.gallery.models import (
    SENTINEL_TAG,
    UNTAGGED_FILTER,
    VOCABULARY_TAGS,
    Photo,
)
from photo_review.gallery.store import CollectionStore
from photo_review.review.navigator import Navigator


DEFAULT_THUMB_WIDTH = 400
DEFAULT_THUMB_HEIGHT = 300


@dataclass(frozen=True)
class Thumbnail:
    """What the preview grid draws for one photo.

    ``index`` is the photo's position in the collection, or -1 when the
    thumbnail was built without one.
    """

    photo_id: str
    src: str
    width: int
    height: int
    alt: str
    index: int = -1


def matches_filter(photo: Photo, active: str) -> bool:
    if active == SENTINEL_TAG:
        return True
    if active == UNTAGGED_FILTER:
        return len(photo.tags) == 1
    return photo.has_tag(active)


def filter_photos(photos: Sequence[Photo], active: str) -> list[Photo]:
    return [p for p in photos if matches_filter(p, active)]


def make_thumbnail(
    photo: Photo,
    default_width: int = DEFAULT_THUMB_WIDTH,
    default_height: int = DEFAULT_THUMB_HEIGHT,
    index: int = -1,
) -> Thumbnail:
    """Prefer the first srcSet rendition, else the primary image.

    Missing dimensions fall back to the defaults.
    """
    if photo.src_set:
        variant = photo.src_set[0]
        src, width, height = variant.src, variant.width, variant.height
    else:
        src, width, height = photo.src, photo.width, photo.height
    return Thumbnail(
        photo.id,
        src,
        width or default_width,
        height or default_height,
        photo.alt,
        index,
    )


class PreviewFilter:
    """Holds the active preview filter and maps grid clicks to the cursor."""

    def __init__(
        self,
        store: CollectionStore,
        navigator: Navigator,
        vocabulary: tuple[str, ...] = VOCABULARY_TAGS,
        default_size: tuple[int, int] = (DEFAULT_THUMB_WIDTH, DEFAULT_THUMB_HEIGHT),
    ):
        self._store = store
        self._navigator = navigator
        self._choices = (SENTINEL_TAG,) + tuple(vocabulary) + (UNTAGGED_FILTER,)
        self._default_size = default_size
        self._active = SENTINEL_TAG

    @property
    def choices(self) -> tuple[str, ...]:
        return self._choices

    @property
    def active(self) -> str:
        return self._active

    def set_active(self, name: str) -> None:
        if name not in self._choices:
            raise ValueError(f"Unknown preview filter: {name!r}")
        self._active = name

    def photos(self) -> list[Photo]:
        return filter_photos(self._store.snapshot(), self._active)

    def thumbnails(self) -> list[Thumbnail]:
        width, height = self._default_size
        return [
            make_thumbnail(photo, width, height, index)
            for index, photo in enumerate(self._store.snapshot())
            if matches_filter(photo, self._active)
        ]

    def resolve_click(self, filtered_position: int, thumbnails: Sequence[Thumbnail]) -> int | None:
        """Display position for a click on thumbnails[filtered_position].

        thumbnails is the list the grid is currently showing, which may be
        older than the collection. The clicked record is found by its
        collection index; the id is used only when that index no longer
        points at the same photo. Returns None when it can't be resolved.
        """
        if not 0 <= filtered_position < len(thumbnails):
            return None
        thumb = thumbnails[filtered_position]
        photos = self._store.snapshot()
        if 0 <= thumb.index < len(photos) and photos[thumb.index].id == thumb.photo_id:
            return self._navigator.position_of_index(thumb.index)
        return self._navigator.position_of(thumb.photo_id)

    def click(self, filtered_position: int, thumbnails: Sequence[Thumbnail] | None = None) -> bool:
        """Jump the cursor to the clicked thumbnail. Returns True if it moved."""
        if thumbnails is None:
            thumbnails = self.thumbnails()
        position = self.resolve_click(filtered_position, thumbnails)
        if position is None:
            return False
        return self._navigator.move_to(position)
