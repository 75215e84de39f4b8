"""
Item normalization: raw feed nodes to CanonicalItem.

Every raw property is copied, media URLs are resolved, the description is
decoded and stripped, and, once the whole sequence exists, navigation links
are assigned by :func:`link_items`. Problems in one item only cost that item
the affected field.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from .config import StripPolicy
from .media import extract_image, extract_video
from .text import sanitize_description
from .types import CanonicalItem


logger = logging.getLogger(__name__)


def image_html(url: str) -> str:
    return f'<img src="{url}" />' if url else ""


def video_html(url: str) -> str:
    return f'<video src="{url}"></video>' if url else ""


def normalize(raw: Any, *, source: str = "json", strip_policy: StripPolicy = None) -> CanonicalItem:
    """Build a CanonicalItem from a decoded JSON object or converted XML element.

    Args:
        raw: The raw node; non-mapping values are kept under ``_text``
        source: "json" or "xml"; video is only resolved for XML items
        strip_policy: Tag list or callable applied to the description

    Returns:
        The normalized item, without navigation links
    """
    fields = dict(raw) if isinstance(raw, Mapping) else {"_text": raw}
    item = CanonicalItem(fields=fields, source=source)

    try:
        item.image = extract_image(fields)
    except Exception:  # noqa: BLE001
        logger.debug("Image extraction failed", exc_info=True)
    item.image_html = image_html(item.image)

    if source == "xml":
        try:
            item.video = extract_video(fields)
        except Exception:  # noqa: BLE001
            logger.debug("Video extraction failed", exc_info=True)
        item.video_html = video_html(item.video)

    if "description" in fields and fields["description"]:
        try:
            fields["description"] = sanitize_description(fields["description"], strip_policy)
        except Exception:  # noqa: BLE001
            logger.debug("Description sanitizing failed, dropping field", exc_info=True)
            del fields["description"]

    return item


def normalize_all(
    raws: Iterable[Any], *, source: str = "json", strip_policy: StripPolicy = None
) -> list[CanonicalItem]:
    """Normalize a sequence of raw nodes and link the result."""
    items = [normalize(raw, source=source, strip_policy=strip_policy) for raw in raws]
    return link_items(items)


def link_items(items: list[CanonicalItem]) -> list[CanonicalItem]:
    """Assign index, previous and next over the complete sequence.

    Links clamp at the boundaries: the first item's ``previous`` is 0 and
    the last item's ``next`` is its own index.
    """
    last = len(items) - 1
    for i, item in enumerate(items):
        item.index = i
        item.previous = i - 1 if i else 0
        item.next = i if i == last else i + 1
    return items
