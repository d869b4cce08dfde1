"""Review session: the single owner of all review state."""

from __future__ import annotations

import logging
from typing import Callable, Iterable

from photo_review.gallery.models import VOCABULARY_TAGS, Photo
from photo_review.gallery.storage import GalleryStorage
from photo_review.gallery.store import Collection, CollectionStore
from photo_review.gallery.writer import PersistQueue
from photo_review.review.editor import TagEditor
from photo_review.review.navigator import Navigator
from photo_review.review.preview import PreviewFilter, Thumbnail


logger = logging.getLogger(__name__)


class ReviewSession:
    """Wires the store, navigator, tag editor and preview filter together.

    The viewer talks only to this object. Listeners are called with no
    arguments after anything visible changes (collection, cursor or filter).
    """

    def __init__(
        self,
        photos: Iterable[Photo],
        storage: GalleryStorage,
        settle_delay: float = 0.05,
        vocabulary: tuple[str, ...] = VOCABULARY_TAGS,
        default_thumb_size: tuple[int, int] = (400, 300),
    ):
        self._listeners: list[Callable[[], None]] = []
        self.store = CollectionStore(photos, storage)
        self.queue = PersistQueue(self.store.persist, settle_delay=settle_delay)
        self.navigator = Navigator(self.store, self.queue)
        self.editor = TagEditor(self.store, self.navigator, vocabulary)
        self.preview = PreviewFilter(
            self.store, self.navigator, vocabulary, default_size=default_thumb_size
        )

    # --- State ---

    @property
    def photos(self) -> Collection:
        return self.store.snapshot()

    @property
    def vocabulary(self) -> tuple[str, ...]:
        return self.editor.vocabulary

    @property
    def is_empty(self) -> bool:
        return len(self.store) == 0

    @property
    def cursor(self) -> int:
        return self.navigator.cursor

    @property
    def display_order(self) -> list[int]:
        return self.navigator.display_order

    @property
    def current_photo(self) -> Photo | None:
        return self.navigator.current_photo

    @property
    def current_index(self) -> int | None:
        return self.navigator.current_index

    @property
    def total(self) -> int:
        return len(self.navigator)

    def add_listener(self, callback: Callable[[], None]) -> None:
        self._listeners.append(callback)

    def _notify(self) -> None:
        for callback in list(self._listeners):
            callback()

    # --- Tagging ---

    def toggle_tag(self, tag: str) -> None:
        if self.editor.toggle(tag) is not None:
            self._notify()

    # --- Navigation ---

    def has_next(self) -> bool:
        return self.navigator.can_advance(1)

    def has_previous(self) -> bool:
        return self.navigator.can_advance(-1)

    def next(self) -> None:
        if self.has_next():
            self.navigator.save_and_move(self.navigator.cursor + 1)
            self._notify()

    def previous(self) -> None:
        if self.has_previous():
            self.navigator.save_and_move(self.navigator.cursor - 1)
            self._notify()

    # --- Preview ---

    @property
    def active_filter(self) -> str:
        return self.preview.active

    def set_filter(self, name: str) -> None:
        self.preview.set_active(name)
        self._notify()

    def thumbnails(self) -> list[Thumbnail]:
        return self.preview.thumbnails()

    def click_thumbnail(
        self, filtered_position: int, thumbnails: list[Thumbnail] | None = None
    ) -> bool:
        moved = self.preview.click(filtered_position, thumbnails)
        if moved:
            self._notify()
        return moved

    # --- Lifecycle ---

    def close(self) -> None:
        """Finish queued saves. Unsaved tag edits on the current photo are not written."""
        logger.info("Closing review session")
        self.queue.shutdown()
