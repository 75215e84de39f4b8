"""
`[[name]]` placeholder substitution.

Used for feed URL templates (``https://example.com/[[section]].rss``) and for
list item markup. Placeholder names may contain word characters, ``-`` and
``:`` so that namespaced feed fields such as ``[[media:title]]`` can be used.
"""

from __future__ import annotations

import re
from typing import Any, Mapping


PLACEHOLDER_RE = re.compile(r"\[\[([\w:-]*)\]\]")


def populate_template(template: str, mapping: Mapping[str, Any] | None = None) -> str:
    """Replace every ``[[name]]`` in ``template`` with ``mapping[name]``.

    Unknown names and ``None`` values resolve to an empty string.

    Examples:
        >>> populate_template("Hello [[name]]!", {"name": "Chad"})
        'Hello Chad!'
        >>> populate_template("[[missing]]x", {})
        'x'
    """
    values = mapping or {}

    def _replace(match: re.Match[str]) -> str:
        value = values.get(match.group(1))
        return "" if value is None else str(value)

    return PLACEHOLDER_RE.sub(_replace, template)
