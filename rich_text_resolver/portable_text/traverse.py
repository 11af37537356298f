from __future__ import annotations

from typing import Any, Callable, Optional, Sequence


def traverse_portable_text(
    nodes: Sequence[dict[str, Any]],
    callback: Callable[[dict[str, Any]], Optional[dict[str, Any]]],
) -> list[dict[str, Any]]:
    """A copy of `nodes` with `callback` applied to every Portable Text object in the tree.

    `callback` receives each object and returns its replacement, or None to keep an unmodified
    copy. Objects nested in list-valued fields (block children, markDefs, table rows and cells,
    cell content) are visited too; `marks`, being a list of strings, is left alone. The input is
    never mutated.
    """
    return [_traverse_node(node, callback) for node in nodes]


def _traverse_node(
    node: dict[str, Any], callback: Callable[[dict[str, Any]], Optional[dict[str, Any]]]
) -> dict[str, Any]:
    replacement = callback(node)
    traversed = dict(node) if replacement is None else dict(replacement)

    for field, value in traversed.items():
        if field == "marks" or not isinstance(value, list):
            continue
        traversed[field] = [
            _traverse_node(item, callback) if isinstance(item, dict) else item for item in value
        ]

    return traversed
