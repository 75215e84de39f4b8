"""
Paginated list rendering with spatial-navigation wiring.

A ListView turns a sequence of items into markup by populating an item
template once per item. The template's top-level tag is augmented so every
rendered element is focusable (``tabindex``), addressable (``id``) and, when
chasing is enabled, points at its neighbours through ``nav-up``/``nav-down``
(or ``nav-left``/``nav-right``) CSS properties for TV-remote style focus
movement.
"""

from __future__ import annotations

import logging
from pathlib import Path
import re
from typing import Any, Mapping, Protocol, Sequence

from .config import ListConfig
from .template import populate_template
from .types import CanonicalItem, RenderedList


logger = logging.getLogger(__name__)

_TOP_TAG_RE = re.compile(r"<([\w:-]+)([^>]*?)(\s*/?)>")
_TABINDEX_RE = re.compile(r"(?<![\w-])tabindex\s*=", re.IGNORECASE)
_ID_RE = re.compile(r"(?<![\w-])id\s*=", re.IGNORECASE)
_STYLE_RE = re.compile(r"(?<![\w-])style\s*=\s*([\"'])", re.IGNORECASE)

NAV_DIRECTIONS = {
    "vertical": ("nav-up", "nav-down"),
    "horizontal": ("nav-left", "nav-right"),
}


class MountPoint(Protocol):
    """Anything accepting rendered markup through an ``inner_html`` assignment."""

    inner_html: str


class FileMount:
    """Mount point that writes assigned markup to a file."""

    def __init__(self, path: Path):
        self.path = Path(path)

    @property
    def inner_html(self) -> str:
        if not self.path.exists():
            return ""
        return self.path.read_text(encoding="utf-8")

    @inner_html.setter
    def inner_html(self, html: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(html, encoding="utf-8")


class RenderCounter:
    """Monotonic render-pass counter.

    Each ListView owns one by default. Share an instance between views when
    element ids must stay unique across all of them.
    """

    def __init__(self, start: int = 0):
        self.value = start

    def take(self) -> int:
        current = self.value
        self.value += 1
        return current


class ListView:
    """Render items into focusable, navigable markup.

    Attributes:
        items: The items to render (CanonicalItem or plain mappings)
        config: Template and navigation settings
        mount: Optional mount point used by draw()
        counter: Render-pass counter used for element id prefixes
    """

    def __init__(
        self,
        items: Sequence[Any] | None = None,
        config: ListConfig | None = None,
        mount: MountPoint | None = None,
        counter: RenderCounter | None = None,
    ):
        self.items: list[Any] = list(items or [])
        self.config = config or ListConfig()
        self.mount = mount
        self.counter = counter or RenderCounter()
        self._template: str | None = None

    @property
    def index(self) -> int:
        """Number of the next render pass."""
        return self.counter.value

    def set_items(self, items: Sequence[Any]) -> None:
        self.items = list(items)

    def get_item(self, index: int) -> Any | None:
        if 0 <= index < len(self.items):
            return self.items[index]
        return None

    def draw(self, start: Any = None, count: Any = None) -> bool:
        """Render and assign the markup to the configured mount point.

        Raises:
            TypeError: If no usable mount point is configured
        """
        if self.mount is None or not hasattr(self.mount, "inner_html"):
            raise TypeError(
                "ListView.draw() expected a mount point with an inner_html attribute, "
                f"but received: {type(self.mount).__name__}"
            )
        rendered = self.get_list(start, count)
        self.mount.inner_html = rendered.html
        return True

    def get_list(self, start: Any = None, count: Any = None) -> RenderedList:
        """Render items ``[start, start + count)``, clamped to the sequence.

        A non-integer ``start`` means 0 and a non-integer ``count`` means
        "to the end". The ``previous``/``next`` values given to the template
        are element ids of the neighbouring rendered items, "" at the edges.
        """
        start = max(start, 0) if _is_int(start) else 0
        end = len(self.items) if not _is_int(count) else min(start + max(count, 0), len(self.items))
        template = self.item_template()
        prefix = f"feedlist{self.counter.take()}item"

        parts = []
        for i in range(start, end):
            values = _template_values(self.items[i])
            values.update(
                prefix=prefix,
                index=i,
                count=i + 1,
                id=f"{prefix}{i}",
                tabindex=i,
                previous=f"{prefix}{i - 1}" if i > start else "",
                next=f"{prefix}{i + 1}" if i < end - 1 else "",
            )
            parts.append("\n\t" + populate_template(template, values))

        html = "".join(parts)
        logger.debug("Rendered %d items with prefix %s", len(parts), prefix)
        return RenderedList(html=html, prefix=prefix, count=len(parts))

    def item_template(self) -> str:
        """The configured item template with focus attributes injected (memoized)."""
        if self._template is None:
            self._template = augment_template(
                self.config.item_html, self.config.direction, self.config.chasing
            )
        return self._template


def augment_template(template: str, direction: str = "vertical", chasing: bool = True) -> str:
    """Inject tabindex, id, index and nav-* properties into the top-level tag.

    Existing ``tabindex`` and ``id`` attributes are kept, ``index`` is always
    added, and nav-* properties already present in the tag are not repeated.
    A missing ``style`` attribute is created; an existing one is extended.
    """
    if not template:
        return ""
    match = _TOP_TAG_RE.search(template)
    if match is None:
        return template

    tag_name, attrs, closing = match.group(1), match.group(2), match.group(3)
    top = match.group(0)

    injected = []
    if not _TABINDEX_RE.search(attrs):
        injected.append('tabindex="[[tabindex]]"')
    if not _ID_RE.search(attrs):
        injected.append('id="[[prefix]][[index]]"')
    injected.append('index="[[index]]"')

    if chasing:
        previous_prop, next_prop = NAV_DIRECTIONS.get(direction, NAV_DIRECTIONS["vertical"])
        style_to_add = ""
        if previous_prop not in top:
            style_to_add += f"{previous_prop}:[[previous]];"
        if next_prop not in top:
            style_to_add += f"{next_prop}:[[next]];"
        style = _STYLE_RE.search(attrs)
        if style_to_add and style is None:
            injected.append(f'style="{style_to_add}"')
        elif style_to_add:
            attrs = attrs[: style.end()] + style_to_add + attrs[style.end():]

    new_top = f"<{tag_name} {' '.join(injected)}{attrs}{closing}>"
    return template[: match.start()] + new_top + template[match.end():]


def _template_values(item: Any) -> dict[str, Any]:
    if isinstance(item, CanonicalItem):
        return item.as_mapping()
    if isinstance(item, Mapping):
        return dict(item)
    return {"_text": item}


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
