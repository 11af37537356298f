"""Portable Text object shapes emitted by the transformer.

Portable Text objects are plain JSON-compatible dicts. These `TypedDict` classes document the
fields each `_type` carries; they are never instantiated as anything other than a `dict`.
"""

from __future__ import annotations

from typing import Any, Union

from typing_extensions import NotRequired, TypeAlias, TypedDict


class Reference(TypedDict):
    _type: str
    _ref: str
    referenceType: str


class AssetReference(Reference):
    url: str
    alt: str


class Span(TypedDict):
    _type: str
    _key: str
    marks: list[str]
    text: str


class ContentItemLink(TypedDict):
    _type: str
    _key: str
    reference: Reference


# -- an external link carries whatever attributes its anchor had, so it is left open --
ExternalLink: TypeAlias = dict[str, Any]

MarkDef: TypeAlias = Union[ExternalLink, ContentItemLink]


class Block(TypedDict):
    _type: str
    _key: str
    markDefs: list[MarkDef]
    style: str
    children: list[Span]
    listItem: NotRequired[str]
    level: NotRequired[int]


class Image(TypedDict):
    _type: str
    _key: str
    asset: AssetReference


class ComponentOrItem(TypedDict):
    _type: str
    _key: str
    dataType: str
    component: Reference


class TableCell(TypedDict):
    _type: str
    _key: str
    content: list[Any]


class TableRow(TypedDict):
    _type: str
    _key: str
    cells: list[TableCell]


class Table(TypedDict):
    _type: str
    _key: str
    rows: list[TableRow]


PortableTextObject: TypeAlias = Union[
    Block, Span, ContentItemLink, ExternalLink, Image, ComponentOrItem, Table, TableRow, TableCell
]
"""Any object the transformer emits, discriminated by its `_type` field."""
