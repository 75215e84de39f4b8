"""
Text sanitizing for free-text feed fields.
"""

from __future__ import annotations

import html
import re
from functools import lru_cache
from typing import Any, Iterable

from .config import StripPolicy


def decode_entities(value: Any) -> Any:
    """Reverse HTML entity encoding.

    Strings are unescaped (named, decimal and hex references). Numbers and
    booleans carry no entities and come back unchanged, as does any other
    type; this is never an error.

    Examples:
        >>> decode_entities("Tom &amp; Jerry &lt;3")
        'Tom & Jerry <3'
        >>> decode_entities(None) is None
        True
    """
    if isinstance(value, str):
        return html.unescape(value)
    return value


def strip_tags(text: str, tags: str | Iterable[str] | None) -> str:
    """Remove the named tags and everything between their open/close pair.

    Matching is case-insensitive and non-greedy, so ``<script>a</script>b<script>c</script>``
    keeps ``b``. Unpaired or self-closing occurrences of the named tags are
    removed on their own. Other tags and the text around them are untouched.
    A falsy ``tags`` leaves the text as it is.
    """
    names = _tag_names(tags)
    if not names or not text:
        return text
    block_re, single_re = _strip_patterns(names)
    text = block_re.sub("", text)
    return single_re.sub("", text)


def sanitize_description(text: Any, policy: StripPolicy) -> Any:
    """Decode entities, then strip with the configured policy.

    ``policy`` may be a callable taking and returning the text, a tag list
    for :func:`strip_tags`, or a falsy value to skip stripping.
    """
    text = decode_entities(text)
    if not policy or not isinstance(text, str) or not text:
        return text
    if callable(policy):
        return policy(text)
    return strip_tags(text, policy)


def _tag_names(tags: str | Iterable[str] | None) -> tuple[str, ...]:
    if not tags:
        return ()
    if isinstance(tags, str):
        tags = tags.split(",")
    return tuple(sorted({name.strip().lower() for name in tags if name and name.strip()}))


@lru_cache(maxsize=32)
def _strip_patterns(names: tuple[str, ...]) -> tuple[re.Pattern[str], re.Pattern[str]]:
    alternation = "|".join(re.escape(name) for name in names)
    block_re = re.compile(
        rf"<({alternation})\b[^>]*(?<!/)>.*?</\1\s*>",
        re.IGNORECASE | re.DOTALL,
    )
    single_re = re.compile(rf"</?(?:{alternation})\b[^>]*>", re.IGNORECASE)
    return block_re, single_re
