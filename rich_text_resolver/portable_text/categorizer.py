"""Partition a sequence of Portable Text objects by `_type`."""

from __future__ import annotations

from typing import Any, Iterable, NamedTuple

from rich_text_resolver.documents.portable_text import PortableTextObject
from rich_text_resolver.errors import UnknownPortableTextTypeError


class CategorizedItems(NamedTuple):
    """Portable Text objects sorted into one list per kind, each in its original order."""

    spans: list[Any]
    links: list[Any]
    content_item_links: list[Any]
    list_blocks: list[Any]
    blocks: list[Any]
    cells: list[Any]
    rows: list[Any]
    images: list[Any]
    components_or_items: list[Any]
    tables: list[Any]
    references: list[Any]


_FIELD_BY_TYPE = {
    "span": "spans",
    "link": "links",
    "contentItemLink": "content_item_links",
    "block": "blocks",
    "cell": "cells",
    "row": "rows",
    "image": "images",
    "componentOrItem": "components_or_items",
    "table": "tables",
    "reference": "references",
}


def categorize_items(items: Iterable[PortableTextObject]) -> CategorizedItems:
    """Sort `items` into a `CategorizedItems` record in a single pass.

    A `block` carrying a `listItem` goes to `list_blocks` rather than `blocks`. Raises
    `UnknownPortableTextTypeError` for any other `_type`.
    """
    buckets: dict[str, list[Any]] = {field: [] for field in CategorizedItems._fields}

    for item in items:
        type_name = item.get("_type")
        if type_name == "block" and item.get("listItem"):
            buckets["list_blocks"].append(item)
            continue
        field = _FIELD_BY_TYPE.get(type_name)  # type: ignore[arg-type]
        if field is None:
            raise UnknownPortableTextTypeError(type_name)
        buckets[field].append(item)

    return CategorizedItems(**buckets)
