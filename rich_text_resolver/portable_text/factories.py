"""Constructors for each Portable Text object shape.

Every constructor takes its `_key` as an argument; the transformer injects the key generator so
tests can make keys deterministic.
"""

from __future__ import annotations

import uuid
from typing import Any, Mapping, Optional, Sequence, Union

from rich_text_resolver.config import env_config
from rich_text_resolver.constants import ReferenceType
from rich_text_resolver.documents.portable_text import (
    Block,
    ComponentOrItem,
    ContentItemLink,
    ExternalLink,
    Image,
    MarkDef,
    Reference,
    Span,
    Table,
    TableCell,
    TableRow,
)


def random_key() -> str:
    """A fresh random hex key `RICH_TEXT_KEY_LENGTH` characters long."""
    length = env_config.RICH_TEXT_KEY_LENGTH
    key = ""
    while len(key) < length:
        key += uuid.uuid4().hex
    return key[:length]


def create_reference(reference: str, ref_type: Union[ReferenceType, str]) -> Reference:
    return {
        "_type": "reference",
        "_ref": reference,
        "referenceType": ReferenceType(ref_type).value,
    }


def create_span(key: str, marks: Sequence[str], text: str) -> Span:
    return {"_type": "span", "_key": key, "marks": list(marks), "text": text}


def create_block(
    key: str,
    mark_defs: Optional[Sequence[MarkDef]],
    style: Optional[str],
    children: Sequence[Span],
) -> Block:
    return {
        "_type": "block",
        "_key": key,
        "markDefs": list(mark_defs or []),
        "style": style or "normal",
        "children": list(children),
    }


def create_list_block(
    key: str,
    level: int,
    list_item: str,
    mark_defs: Optional[Sequence[MarkDef]],
    style: Optional[str],
    children: Sequence[Span],
) -> Block:
    block = create_block(key, mark_defs, style, children)
    block["listItem"] = list_item
    block["level"] = level
    return block


def create_external_link(key: str, attributes: Mapping[str, str]) -> ExternalLink:
    """A `link` mark definition carrying every attribute of its anchor."""
    link: dict[str, Any] = {"_type": "link", "_key": key}
    link.update((name, value) for name, value in attributes.items() if name not in link)
    return link


def create_item_link(
    key: str, reference: str, ref_type: Union[ReferenceType, str]
) -> ContentItemLink:
    return {
        "_type": "contentItemLink",
        "_key": key,
        "reference": create_reference(reference, ref_type),
    }


def create_image_block(
    key: str,
    reference: str,
    url: Optional[str],
    ref_type: Union[ReferenceType, str],
    alt: Optional[str] = None,
) -> Image:
    return {
        "_type": "image",
        "_key": key,
        "asset": {
            "_type": "reference",
            "_ref": reference,
            "referenceType": ReferenceType(ref_type).value,
            "url": url or "",
            "alt": alt or "",
        },
    }


def create_component_or_item_block(
    key: str, reference: Reference, data_type: Optional[str]
) -> ComponentOrItem:
    return {
        "_type": "componentOrItem",
        "_key": key,
        "dataType": data_type or "",
        "component": dict(reference),  # type: ignore[typeddict-item]
    }


def create_table(key: str, rows: Sequence[TableRow]) -> Table:
    return {"_type": "table", "_key": key, "rows": list(rows)}


def create_table_row(key: str, cells: Sequence[TableCell]) -> TableRow:
    return {"_type": "row", "_key": key, "cells": list(cells)}


def create_table_cell(key: str, content: Sequence[Any]) -> TableCell:
    return {"_type": "cell", "_key": key, "content": list(content)}
