"""In-memory collection store with whole-collection persistence."""

from __future__ import annotations

import logging
from typing import Callable, Iterable

import requests

from photo_review.gallery.models import Photo
from photo_review.gallery.storage import GalleryStorage, StorageError, dumps_gallery


logger = logging.getLogger(__name__)

Collection = tuple[Photo, ...]


class CollectionStore:
    """Holds the ordered photo records for a session.

    ``replace`` is the only way to change the collection; listeners are
    called with the new collection after every replace.
    """

    def __init__(self, photos: Iterable[Photo], storage: GalleryStorage):
        self._photos: Collection = tuple(photos)
        self._storage = storage
        self._listeners: list[Callable[[Collection], None]] = []

    @property
    def storage(self) -> GalleryStorage:
        return self._storage

    def snapshot(self) -> Collection:
        return self._photos

    def __len__(self) -> int:
        return len(self._photos)

    def add_listener(self, callback: Callable[[Collection], None]) -> None:
        self._listeners.append(callback)

    def replace(self, producer: Callable[[Collection], Iterable[Photo]]) -> Collection:
        """Swap in the collection returned by producer(current)."""
        self._photos = tuple(producer(self._photos))
        for callback in list(self._listeners):
            callback(self._photos)
        return self._photos

    def replace_at(self, index: int, update: Callable[[Photo], Photo]) -> Collection:
        """Replace the record at index with update(record)."""
        def producer(photos: Collection) -> Collection:
            return photos[:index] + (update(photos[index]),) + photos[index + 1:]
        return self.replace(producer)

    def persist(self, photos: Iterable[Photo]) -> bool:
        """Write the full collection to storage. Failures are logged, not raised."""
        photos = tuple(photos)
        try:
            self._storage.write(dumps_gallery(photos))
        except (StorageError, OSError, requests.RequestException) as e:
            logger.error(f"Save failed ({self._storage!r}): {e}")
            return False
        logger.debug(f"Saved {len(photos)} photos to {self._storage!r}")
        return True
