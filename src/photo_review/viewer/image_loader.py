"""Resolving gallery image references and loading them as pixmaps."""

from __future__ import annotations

import logging
from collections import OrderedDict
from pathlib import Path

from PIL import Image, ImageOps
from PyQt6.QtGui import QImage, QPixmap


logger = logging.getLogger(__name__)


def resolve_source(src: str, media_root: str | Path) -> Path | None:
    """Map a gallery ``src`` to a local file.

    Root-relative references ("/photos/a.jpg") are taken relative to the
    media root, the way a web server serves its public directory. Remote
    URLs are not loaded.
    """
    if not src or "://" in src:
        return None
    return Path(media_root) / src.lstrip("/")


def open_oriented(path: str | Path, max_size: tuple[int, int] | None = None) -> Image.Image:
    """Open an image with its EXIF orientation applied, optionally shrunk."""
    with Image.open(path) as img:
        img = ImageOps.exif_transpose(img)
        img.load()
    if max_size is not None:
        img.thumbnail(max_size, Image.Resampling.LANCZOS)
    return img


def pil_to_qpixmap(pil_image: Image.Image) -> QPixmap:
    """Convert a PIL Image to a QPixmap."""
    if pil_image.mode == "RGBA":
        qimage = QImage(
            pil_image.tobytes("raw", "RGBA"),
            pil_image.width, pil_image.height,
            4 * pil_image.width,
            QImage.Format.Format_RGBA8888,
        )
    else:
        rgb = pil_image.convert("RGB")
        qimage = QImage(
            rgb.tobytes("raw", "RGB"),
            rgb.width, rgb.height,
            3 * rgb.width,
            QImage.Format.Format_RGB888,
        )
    # QImage borrows the buffer; copy so the pixmap owns its pixels
    return QPixmap.fromImage(qimage.copy())


def load_pixmap(
    src: str,
    media_root: str | Path,
    max_size: tuple[int, int] | None = None,
) -> QPixmap | None:
    """Load a gallery image, or None (logged) if it can't be read."""
    path = resolve_source(src, media_root)
    if path is None:
        logger.warning(f"Cannot load non-local image source: {src}")
        return None
    try:
        img = open_oriented(path, max_size)
    except (OSError, ValueError) as e:
        logger.warning(f"Failed to load image {path}: {e}")
        return None
    return pil_to_qpixmap(img)


class ImageCache:
    """LRU cache for full-size pixmaps, keyed by image source."""

    def __init__(self, max_size_mb: int = 256):
        self._cache: OrderedDict[str, QPixmap] = OrderedDict()
        self._max_size_bytes = max_size_mb * 1024 * 1024
        self._current_size = 0

    def get(self, src: str) -> QPixmap | None:
        if src in self._cache:
            self._cache.move_to_end(src)
            return self._cache[src]
        return None

    def put(self, src: str, pixmap: QPixmap) -> None:
        if src in self._cache:
            self._current_size -= self._estimate_size(self._cache[src])
            del self._cache[src]

        size = self._estimate_size(pixmap)
        while self._current_size + size > self._max_size_bytes and self._cache:
            _, evicted = self._cache.popitem(last=False)
            self._current_size -= self._estimate_size(evicted)

        self._cache[src] = pixmap
        self._current_size += size

    def clear(self) -> None:
        self._cache.clear()
        self._current_size = 0

    def __contains__(self, src: str) -> bool:
        return src in self._cache

    def __len__(self) -> int:
        return len(self._cache)

    def _estimate_size(self, pixmap: QPixmap) -> int:
        img = pixmap.toImage()
        return img.sizeInBytes() if not img.isNull() else 0
