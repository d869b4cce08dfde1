"""Display ordering and cursor movement through the collection."""

from __future__ import annotations

import logging
from typing import Sequence

from photo_review.gallery.models import Photo
from photo_review.gallery.store import CollectionStore
from photo_review.gallery.writer import PersistQueue


logger = logging.getLogger(__name__)


def compute_display_order(photos: Sequence[Photo]) -> list[int]:
    """Collection indices with not-fixed photos first, original order kept
    within each group."""
    unfixed = [i for i, p in enumerate(photos) if not p.fixed]
    fixed = [i for i, p in enumerate(photos) if p.fixed]
    return unfixed + fixed


def clamp_cursor(cursor: int, length: int) -> int:
    if length <= 0:
        return 0
    return max(0, min(cursor, length - 1))


class Navigator:
    """Tracks the current position within the display order.

    The display order and the index-to-position maps are rebuilt whenever
    the store changes. The cursor is re-clamped but otherwise left where it
    was, so the photo under the cursor can change after a reorder.
    """

    def __init__(self, store: CollectionStore, queue: PersistQueue):
        self._store = store
        self._queue = queue
        self._cursor = 0
        self._order: list[int] = []
        self._position_by_index: list[int] = []
        self._position_by_id: dict[str, int] = {}
        self._rebuild(store.snapshot())
        store.add_listener(self._rebuild)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def display_order(self) -> list[int]:
        return list(self._order)

    def __len__(self) -> int:
        return len(self._order)

    @property
    def current_index(self) -> int | None:
        """Collection index of the current photo, None if empty."""
        if not self._order:
            return None
        return self._order[self._cursor]

    @property
    def current_photo(self) -> Photo | None:
        index = self.current_index
        if index is None:
            return None
        return self._store.snapshot()[index]

    def position_of_index(self, index: int) -> int | None:
        """Display position of the record at a collection index."""
        if not 0 <= index < len(self._position_by_index):
            return None
        return self._position_by_index[index]

    def position_of(self, photo_id: str) -> int | None:
        return self._position_by_id.get(photo_id)

    def can_advance(self, direction: int) -> bool:
        target = self._cursor + direction
        return 0 <= target < len(self._order)

    def move_to(self, position: int) -> bool:
        """Set the cursor. Out-of-range positions are ignored."""
        if not 0 <= position < len(self._order):
            return False
        self._cursor = position
        return True

    def advance(self, direction: int) -> bool:
        """Move the cursor by direction (-1 or +1) without saving."""
        if not self.can_advance(direction):
            return False
        return self.move_to(self._cursor + direction)

    def save_and_move(self, target: int) -> None:
        """Mark the current photo reviewed, queue a save, then move to target.

        The cursor moves whether or not the save later succeeds.
        """
        index = self.current_index
        if index is None:
            return
        self._store.replace_at(index, Photo.as_fixed)
        self._queue.submit(self._store.snapshot())
        if not self.move_to(target):
            logger.debug(f"Ignoring move to out-of-range position {target}")

    def _rebuild(self, photos: Sequence[Photo]) -> None:
        self._order = compute_display_order(photos)
        self._position_by_index = [0] * len(self._order)
        for pos, index in enumerate(self._order):
            self._position_by_index[index] = pos
        # Duplicate ids resolve to the first record in collection order.
        self._position_by_id = {}
        for index, photo in enumerate(photos):
            self._position_by_id.setdefault(photo.id, self._position_by_index[index])
        self._cursor = clamp_cursor(self._cursor, len(self._order))
