"""
Core data types for feedlist.

This module defines the data structures passed through the pipeline:
- CanonicalItem: One normalized feed item with media and navigation links
- FeedResponse: Envelope returned for every feed load
- RenderedList: Markup produced by a list render pass
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class CanonicalItem:
    """A feed item normalized from a JSON object or an XML element.

    Attributes:
        fields: Every property copied from the raw node; ``description`` holds
            the sanitized text when the node had one
        source: "json" or "xml"
        image: Image URL, or "" when none was found
        image_html: ``<img>`` tag for the image, or ""
        video: Video URL (XML items only), or ""
        video_html: ``<video>`` tag for the video, or ""
        index: Zero-based position in the loaded sequence
        previous: Index of the previous item; the first item points at 0
        next: Index of the next item; the last item points at itself
    """

    fields: dict[str, Any] = field(default_factory=dict)
    source: str = "json"
    image: str = ""
    image_html: str = ""
    video: str = ""
    video_html: str = ""
    index: int = 0
    previous: int = 0
    next: int = 0

    @property
    def description(self) -> Any:
        return self.fields.get("description")

    def get(self, name: str, default: Any = None) -> Any:
        return self.fields.get(name, default)

    def as_mapping(self) -> dict[str, Any]:
        """Flat mapping of raw fields plus derived ones, used for templating."""
        mapping = dict(self.fields)
        mapping.update(
            image=self.image,
            image_html=self.image_html,
            video=self.video,
            video_html=self.video_html,
            index=self.index,
            previous=self.previous,
            next=self.next,
        )
        return mapping


@dataclass
class FeedResponse:
    """Result of a feed load.

    Exactly one of ``error`` or ``items`` / ``items_raw`` is set.

    Attributes:
        url: The resolved URL that was requested
        data: Decoded payload (JSON value or lxml root element)
        items: Normalized items, None on error or on the raw XML path
        items_raw: Matched XML elements when conversion was skipped
        html: Rendered list markup, "" when rendering was not requested
        error: Message when the transport returned neither JSON nor XML
        start: Parse start, epoch milliseconds (XML only)
        end: Parse end, epoch milliseconds (XML only)
        elapsed: Parse duration in milliseconds (XML only)
    """

    url: str = ""
    data: Any = None
    items: list[CanonicalItem] | None = None
    items_raw: list[Any] | None = None
    html: str = ""
    error: str | None = None
    start: float | None = None
    end: float | None = None
    elapsed: float | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class RenderedList:
    """Markup from one ListView render pass."""

    html: str = ""
    prefix: str = ""
    count: int = 0
