"""
Image and video URL extraction across vendor-specific item shapes.

Feeds carry media in many places: a plain ``image`` field, Media RSS
``media:thumbnail`` / ``media:content`` elements, RSS enclosures, iTunes
podcast images. After XML conversion the same logical field may appear with a
colon (``media:thumbnail``) or, from converters that rewrite namespaces, with
an underscore (``media_thumbnail``); both spellings are checked.

Resolution is driven by ordered rule tables. The first rule producing a
non-empty string wins. A missing or oddly typed value anywhere along a rule's
path simply means the rule does not match.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping

from .treesearch import find_first


Predicate = Callable[[Any], bool]
Extractor = Callable[[Any], Any]


@dataclass(frozen=True)
class MediaRule:
    """One step of a media lookup.

    Attributes:
        name: Short label used in logs and tests
        paths: Field name variants tried in order (colon, then underscore dialect)
        predicate: Accepts the value found at a path
        extractor: Pulls the URL out of an accepted value
    """

    name: str
    paths: tuple[str, ...]
    predicate: Predicate
    extractor: Extractor

    def apply(self, item: Mapping[str, Any]) -> str:
        for path in self.paths:
            value = _first(item.get(path))
            if value is None:
                continue
            if not self.predicate(value):
                continue
            url = self.extractor(value)
            if isinstance(url, str) and url:
                return url
        return ""


def _first(value: Any) -> Any:
    """Repeated elements convert to lists; rules look at the first entry."""
    if isinstance(value, list):
        return value[0] if value else None
    return value


def _attrs(value: Any) -> Mapping[str, Any]:
    if isinstance(value, Mapping):
        attributes = value.get("_attributes")
        if isinstance(attributes, Mapping):
            return attributes
    return {}


def _attr(name: str) -> Extractor:
    return lambda value: _attrs(value).get(name)


def _type_contains(kind: str) -> Predicate:
    def check(value: Any) -> bool:
        media_type = _attrs(value).get("type")
        return isinstance(media_type, str) and kind in media_type

    return check


def _has_url(value: Any) -> bool:
    return isinstance(_attrs(value).get("url"), str) and bool(_attrs(value).get("url"))


def _image_content(value: Any) -> bool:
    if not _has_url(value):
        return False
    return _type_contains("image")(value) or ".jp" in _attrs(value)["url"]


def _is_text(value: Any) -> bool:
    return isinstance(value, str)


def _href(value: Any) -> Any:
    if not isinstance(value, Mapping):
        return None
    return value.get("href") or _attrs(value).get("href")


def _identity(value: Any) -> Any:
    return value


def _always(value: Any) -> bool:
    return True


THUMBNAIL_KEYS = ("media:thumbnail", "media_thumbnail")
CONTENT_KEYS = ("media:content", "media_content")

IMAGE_RULES: tuple[MediaRule, ...] = (
    MediaRule("image", ("image",), _is_text, _identity),
    MediaRule("thumbnail", THUMBNAIL_KEYS, _has_url, _attr("url")),
    MediaRule("content-image", CONTENT_KEYS, _image_content, _attr("url")),
    MediaRule("enclosure-image", ("enclosure",), _type_contains("image"), _attr("url")),
    MediaRule("thumbnail-text", THUMBNAIL_KEYS, _is_text, _identity),
    MediaRule("itunes-image", ("itunes:image", "itunes_image"), _always, _href),
)

VIDEO_RULES: tuple[MediaRule, ...] = (
    MediaRule("video", ("video",), _is_text, _identity),
    MediaRule("enclosure-video", ("enclosure",), _type_contains("video"), _attr("url")),
    MediaRule(
        "content-video",
        CONTENT_KEYS,
        lambda value: _has_url(value) and _type_contains("video")(value),
        _attr("url"),
    ),
)


def resolve(item: Any, rules: tuple[MediaRule, ...]) -> tuple[str, str]:
    """Return ``(url, rule name)`` for the first matching rule, or ``("", "")``."""
    if not isinstance(item, Mapping):
        return "", ""
    for rule in rules:
        url = rule.apply(item)
        if url:
            return url, rule.name
    return "", ""


def extract_image(item: Any) -> str:
    """Find an image URL for a feed item, or return an empty string.

    Falls back to a deep search of the whole item for a thumbnail element
    when none of the direct rules match.
    """
    url, _ = resolve(item, IMAGE_RULES)
    if url or not isinstance(item, Mapping):
        return url
    for key in THUMBNAIL_KEYS:
        found = find_first(item, key)
        if found is None:
            continue
        candidate = _attrs(_first(found)).get("url")
        if isinstance(candidate, str) and candidate:
            return candidate
    return ""


def extract_video(item: Any) -> str:
    """Find a video URL for a feed item, or return an empty string."""
    url, _ = resolve(item, VIDEO_RULES)
    return url
