"""Background thumbnail generation for the preview grid."""

from __future__ import annotations

import logging
from collections import OrderedDict
from pathlib import Path

from PyQt6.QtCore import QObject, QThread, pyqtSignal, QMutex, QWaitCondition
from PyQt6.QtGui import QImage, QPixmap

from photo_review.viewer.image_loader import open_oriented, resolve_source


logger = logging.getLogger(__name__)


class ThumbnailCache:
    """LRU cache for thumbnail pixmaps, keyed by image source.

    Sources that failed to decode are remembered so they are not queued
    again on every refresh.
    """

    def __init__(self, max_count: int = 500):
        self._max_count = max_count
        self._cache: OrderedDict[str, QPixmap] = OrderedDict()
        self._failed: set[str] = set()

    def get(self, src: str) -> QPixmap | None:
        if src in self._cache:
            self._cache.move_to_end(src)
            return self._cache[src]
        return None

    def put(self, src: str, pixmap: QPixmap) -> None:
        self._failed.discard(src)
        if src in self._cache:
            self._cache.move_to_end(src)
        self._cache[src] = pixmap
        while len(self._cache) > self._max_count:
            self._cache.popitem(last=False)

    def mark_failed(self, src: str) -> None:
        self._failed.add(src)

    def has_failed(self, src: str) -> bool:
        return src in self._failed

    def clear(self) -> None:
        self._cache.clear()
        self._failed.clear()

    def __len__(self) -> int:
        return len(self._cache)


class _ThumbnailThread(QThread):
    """Worker thread that decodes thumbnails from a queue.

    Emits QImage; QPixmap must only be created on the GUI thread.
    """

    thumbnail_ready = pyqtSignal(str, QImage)
    thumbnail_failed = pyqtSignal(str)

    def __init__(self, media_root: Path, thumb_size: tuple[int, int], parent=None):
        super().__init__(parent)
        self._media_root = media_root
        self._thumb_size = thumb_size
        self._queue: list[str] = []
        self._mutex = QMutex()
        self._condition = QWaitCondition()
        self._running = True

    def enqueue(self, src: str) -> None:
        self._mutex.lock()
        if src not in self._queue:
            self._queue.append(src)
        self._mutex.unlock()
        self._condition.wakeOne()

    def stop(self) -> None:
        self._mutex.lock()
        self._running = False
        self._mutex.unlock()
        self._condition.wakeOne()
        self.wait()

    def run(self) -> None:
        while True:
            self._mutex.lock()
            while self._running and not self._queue:
                self._condition.wait(self._mutex)
            if not self._running:
                self._mutex.unlock()
                break
            src = self._queue.pop(0)
            self._mutex.unlock()

            image = self._generate_thumbnail(src)
            if image is None:
                self.thumbnail_failed.emit(src)
            else:
                self.thumbnail_ready.emit(src, image)

    def _generate_thumbnail(self, src: str) -> QImage | None:
        path = resolve_source(src, self._media_root)
        if path is None:
            return None
        try:
            img = open_oriented(path, self._thumb_size).convert("RGB")
        except (OSError, ValueError) as e:
            logger.warning(f"Thumbnail failed for {path}: {e}")
            return None
        qimage = QImage(
            img.tobytes("raw", "RGB"),
            img.width, img.height,
            3 * img.width,
            QImage.Format.Format_RGB888,
        )
        return qimage.copy()


class ThumbnailWorker(QObject):
    """Manages thumbnail generation with caching."""

    thumbnail_ready = pyqtSignal(str, QPixmap)

    def __init__(
        self,
        media_root: str | Path,
        thumb_size: tuple[int, int] = (256, 256),
        cache_count: int = 500,
        parent: QObject | None = None,
    ):
        super().__init__(parent)
        self._cache = ThumbnailCache(cache_count)
        self._thread = _ThumbnailThread(Path(media_root), thumb_size)
        self._thread.thumbnail_ready.connect(self._on_thumbnail_ready)
        self._thread.thumbnail_failed.connect(self._on_thumbnail_failed)
        self._thread.start()

    def request(self, src: str) -> QPixmap | None:
        """Request a thumbnail. Returns cached pixmap, or None if pending or failed."""
        cached = self._cache.get(src)
        if cached is not None:
            return cached
        if self._cache.has_failed(src):
            return None
        self._thread.enqueue(src)
        return None

    def shutdown(self) -> None:
        self._thread.stop()

    def _on_thumbnail_ready(self, src: str, image: QImage) -> None:
        pixmap = QPixmap.fromImage(image)
        self._cache.put(src, pixmap)
        self.thumbnail_ready.emit(src, pixmap)

    def _on_thumbnail_failed(self, src: str) -> None:
        self._cache.mark_failed(src)
