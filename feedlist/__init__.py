"""
feedlist - feed ingestion, normalization and list rendering.

This package fetches RSS, Atom and JSON feeds, normalizes their items
(media extraction, entity decoding, tag stripping, navigation links) and
renders them into focusable, remote-navigable list markup via ``[[name]]``
templates.

Example:
    reader = FeedReader()
    response = reader.load_sync("https://example.com/[[section]].rss", params={"section": "news"})
    print(response.items[0].image)
"""

__all__ = [
    "__version__",
    "CanonicalItem",
    "FeedReader",
    "FeedResponse",
    "ListView",
    "RenderCounter",
    "populate_template",
]
__version__ = "0.1.0"

from .listview import ListView, RenderCounter
from .reader import FeedReader
from .template import populate_template
from .types import CanonicalItem, FeedResponse
