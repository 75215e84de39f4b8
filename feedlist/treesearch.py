"""
Deep key search over decoded feed trees.

A small stand-in for the ``$..name`` recursive-descent JSONPath query: walk a
tree of dicts and lists and return the first value stored under the given
name, at any depth, in document order. A mapping's own match comes before
matches inside its values. The walk is bounded so that pathological
payloads cannot recurse without limit; matches below ``max_depth`` are not
reported. With repeated or deeply nested key names the first match is only a
best guess at the intended node.
"""

from __future__ import annotations

from typing import Any, Iterator


DEFAULT_MAX_DEPTH = 32


def find_first(tree: Any, key: str, max_depth: int = DEFAULT_MAX_DEPTH) -> Any | None:
    """Return the first value stored under ``key``, or None."""
    return next(_walk(tree, key, max_depth), None)


def _walk(node: Any, key: str, depth: int) -> Iterator[Any]:
    if depth < 0:
        return
    if isinstance(node, dict):
        if key in node:
            yield node[key]
        for value in node.values():
            yield from _walk(value, key, depth - 1)
    elif isinstance(node, list):
        for value in node:
            yield from _walk(value, key, depth - 1)
