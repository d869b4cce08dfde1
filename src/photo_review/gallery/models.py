"""Data models for the photo review gallery."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Iterable


SENTINEL_TAG = "all"
UNTAGGED_FILTER = "untagged"

# Order matters: it is the default 1-5 key binding order.
VOCABULARY_TAGS: tuple[str, ...] = (
    "portrait",
    "nature",
    "landscape",
    "urban",
    "documentary",
)


class GalleryFormatError(ValueError):
    """Raised when gallery JSON does not describe a list of photo records."""


@dataclass(frozen=True)
class ImageVariant:
    """An alternate-resolution rendition of a photo."""

    src: str
    width: int | None = None
    height: int | None = None


@dataclass(frozen=True)
class Photo:
    """A single photo record.

    Records are never modified in place: use ``with_tags`` / ``as_fixed``
    (or ``dataclasses.replace``) to derive a new record. Build records with
    ``make_photo`` so the sentinel tag is always present.
    """

    id: str
    src: str
    alt: str = ""
    group: str | None = None
    tags: tuple[str, ...] = (SENTINEL_TAG,)
    width: int | None = None
    height: int | None = None
    src_set: tuple[ImageVariant, ...] = field(default_factory=tuple)
    fixed: bool = False

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags

    def with_tags(self, tags: Iterable[str]) -> Photo:
        return replace(self, tags=ensure_sentinel(tags))

    def as_fixed(self) -> Photo:
        return replace(self, fixed=True)


def ensure_sentinel(tags: Iterable[str]) -> tuple[str, ...]:
    """Return tags as a tuple with the sentinel tag guaranteed at the front
    when it was missing. Existing order is kept otherwise."""
    tags = tuple(tags)
    if SENTINEL_TAG not in tags:
        tags = (SENTINEL_TAG,) + tags
    return tags


def make_photo(
    id: str,
    src: str,
    alt: str = "",
    group: str | None = None,
    tags: Iterable[str] = (),
    width: int | None = None,
    height: int | None = None,
    src_set: Iterable[ImageVariant] = (),
    fixed: bool = False,
) -> Photo:
    """Factory for Photo records that always carries the sentinel tag."""
    return Photo(
        id=id,
        src=src,
        alt=alt,
        group=group,
        tags=ensure_sentinel(tags),
        width=width,
        height=height,
        src_set=tuple(src_set),
        fixed=bool(fixed),
    )


def _optional_int(value: Any, key: str) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise GalleryFormatError(f"'{key}' must be a number, got {value!r}")
    return int(value)


def photo_from_dict(data: dict[str, Any]) -> Photo:
    """Build a Photo from one entry of the gallery JSON list."""
    if not isinstance(data, dict):
        raise GalleryFormatError(f"Photo entry must be an object, got {type(data).__name__}")
    for key in ("id", "src"):
        if not isinstance(data.get(key), str):
            raise GalleryFormatError(f"Photo entry is missing string field '{key}'")

    tags = data.get("tags") or []
    if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
        raise GalleryFormatError(f"Photo '{data['id']}': 'tags' must be a list of strings")

    variants = []
    for entry in data.get("srcSet") or []:
        if not isinstance(entry, dict) or not isinstance(entry.get("src"), str):
            raise GalleryFormatError(f"Photo '{data['id']}': invalid srcSet entry {entry!r}")
        variants.append(ImageVariant(
            src=entry["src"],
            width=_optional_int(entry.get("width"), "srcSet.width"),
            height=_optional_int(entry.get("height"), "srcSet.height"),
        ))

    return make_photo(
        id=data["id"],
        src=data["src"],
        alt=data.get("alt") or "",
        group=data.get("group"),
        tags=tags,
        width=_optional_int(data.get("width"), "width"),
        height=_optional_int(data.get("height"), "height"),
        src_set=variants,
        fixed=bool(data.get("fixed", False)),
    )


def _variant_to_dict(variant: ImageVariant) -> dict[str, Any]:
    result: dict[str, Any] = {"src": variant.src}
    if variant.width is not None:
        result["width"] = variant.width
    if variant.height is not None:
        result["height"] = variant.height
    return result


def photo_to_dict(photo: Photo) -> dict[str, Any]:
    """Serialize a Photo into the gallery JSON shape (camelCase keys)."""
    result: dict[str, Any] = {"id": photo.id, "alt": photo.alt}
    if photo.group is not None:
        result["group"] = photo.group
    result["tags"] = list(photo.tags)
    if photo.width is not None:
        result["width"] = photo.width
    if photo.height is not None:
        result["height"] = photo.height
    result["src"] = photo.src
    if photo.src_set:
        result["srcSet"] = [_variant_to_dict(v) for v in photo.src_set]
    result["fixed"] = photo.fixed
    return result
