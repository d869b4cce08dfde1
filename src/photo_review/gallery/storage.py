"""Reading and writing the gallery JSON, locally or through the save endpoint."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Iterable, Protocol

import requests

from photo_review.gallery.models import (
    GalleryFormatError,
    Photo,
    photo_from_dict,
    photo_to_dict,
)


logger = logging.getLogger(__name__)

SAVE_PATH = "/save-gallery"


class StorageError(Exception):
    """A gallery write was rejected or could not be delivered."""


def dumps_gallery(photos: Iterable[Photo]) -> str:
    """Serialize the whole collection as pretty-printed JSON."""
    return json.dumps(
        [photo_to_dict(p) for p in photos], indent=2, ensure_ascii=False
    )


def parse_gallery(data: Any) -> list[Photo]:
    """Turn decoded gallery JSON into Photo records."""
    if not isinstance(data, list):
        raise GalleryFormatError(
            f"Gallery must be a JSON list, got {type(data).__name__}"
        )
    return [photo_from_dict(entry) for entry in data]


def load_gallery(path: str | Path) -> list[Photo]:
    """Load the collection from a gallery JSON file."""
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise GalleryFormatError(f"{path}: {e}") from e
    photos = parse_gallery(data)
    logger.info(f"Loaded {len(photos)} photos from {path}")
    return photos


def write_text_replacing(path: Path, text: str) -> None:
    """Overwrite path with text via a temp file in the same directory."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


class GalleryStorage(Protocol):
    """Destination for full-collection writes."""

    def write(self, body: str) -> None:
        ...


class JsonFileStorage:
    """Writes the serialized collection straight to the gallery file."""

    def __init__(self, path: str | Path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def write(self, body: str) -> None:
        write_text_replacing(self._path, body)

    def __repr__(self) -> str:
        return f"JsonFileStorage({str(self._path)!r})"


class HttpStorage:
    """POSTs the serialized collection to a save endpoint."""

    def __init__(
        self,
        url: str,
        timeout: float | None = 10.0,
        session: requests.Session | None = None,
    ):
        self._url = url
        self._timeout = timeout
        self._session = session or requests.Session()

    @property
    def url(self) -> str:
        return self._url

    def write(self, body: str) -> None:
        response = self._session.post(
            self._url,
            data=body.encode("utf-8"),
            headers={"Content-Type": "application/json; charset=utf-8"},
            timeout=self._timeout,
        )
        if not response.ok:
            raise StorageError(
                f"Save endpoint returned {response.status_code}: {response.text}"
            )

    def __repr__(self) -> str:
        return f"HttpStorage({self._url!r})"


def create_storage(
    backend: str,
    gallery_path: str | Path | None = None,
    url: str | None = None,
    timeout: float | None = 10.0,
) -> GalleryStorage:
    """Build the storage backend named in config ('file' or 'http')."""
    if backend == "file":
        if gallery_path is None:
            raise ValueError("File storage needs a gallery path")
        return JsonFileStorage(gallery_path)
    if backend == "http":
        if not url:
            raise ValueError("HTTP storage needs a save URL")
        return HttpStorage(url, timeout=timeout)
    raise ValueError(f"Unknown storage backend: {backend!r}")
