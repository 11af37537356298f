"""Predicates over generic DOM nodes and the `ElementKind` each rich text element maps to.

All functions here are pure functions of a node's tag name and attributes.
"""

from __future__ import annotations

import enum
from typing import Mapping, NamedTuple, Optional, Sequence

from rich_text_resolver.constants import (
    ANCHOR_ELEMENT,
    ASSET_ELEMENT,
    ASSET_REFERENCE_ATTRIBUTES,
    BLOCK_ELEMENTS,
    IGNORED_ELEMENTS,
    ITEM_LINK_REFERENCE_ATTRIBUTES,
    ITEM_OR_COMPONENT_REFERENCE_ATTRIBUTES,
    LINE_BREAK_ELEMENT,
    LINKED_ITEM_OBJECT_TYPE,
    LIST_ITEM_ELEMENT,
    LIST_TYPE_ELEMENTS,
    OBJECT_ELEMENT,
    TABLE_CELL_ELEMENT,
    TABLE_ELEMENT,
    TABLE_ROW_ELEMENT,
    TEXT_STYLE_ELEMENTS,
    ReferenceType,
)
from rich_text_resolver.documents.dom import ElementNode, Node, TextNode
from rich_text_resolver.errors import UnsupportedTagError
from rich_text_resolver.logger import trace_logger


class ElementKind(enum.Enum):
    """The role a rich text element plays in Portable Text."""

    BLOCK = "block"
    STYLE_MARK = "style_mark"
    EXTERNAL_LINK = "external_link"
    ITEM_LINK = "item_link"
    LIST = "list"
    LIST_ITEM = "list_item"
    LINE_BREAK = "line_break"
    IMAGE = "image"
    LINKED_ITEM = "linked_item"
    TABLE = "table"
    TABLE_ROW = "table_row"
    TABLE_CELL = "table_cell"
    PASS_THROUGH = "pass_through"


class ReferenceData(NamedTuple):
    """The content reference an element carries and which attribute variant supplied it."""

    reference: str
    ref_type: ReferenceType


# ------------------------------------------------------------------------------------------------
# NODE PREDICATES
# ------------------------------------------------------------------------------------------------


def is_element(node: Node) -> bool:
    return isinstance(node, ElementNode)


def is_text(node: Node) -> bool:
    return isinstance(node, TextNode)


def _has_tag(node: Node, *tag_names: str) -> bool:
    return isinstance(node, ElementNode) and node.tag_name in tag_names


def is_block_element(node: Node) -> bool:
    """True for paragraphs and headings."""
    return _has_tag(node, *BLOCK_ELEMENTS)


def is_mark_element(node: Node) -> bool:
    """True for the inline text-style elements (strong, em, sub, sup, code)."""
    return _has_tag(node, *TEXT_STYLE_ELEMENTS)


def is_list_block(node: Node) -> bool:
    return _has_tag(node, *LIST_TYPE_ELEMENTS)


def is_list_item(node: Node) -> bool:
    return _has_tag(node, LIST_ITEM_ELEMENT)


def is_line_break(node: Node) -> bool:
    return _has_tag(node, LINE_BREAK_ELEMENT)


def is_table(node: Node) -> bool:
    return _has_tag(node, TABLE_ELEMENT)


def is_table_row(node: Node) -> bool:
    return _has_tag(node, TABLE_ROW_ELEMENT)


def is_table_cell(node: Node) -> bool:
    return _has_tag(node, TABLE_CELL_ELEMENT)


def is_anchor(node: Node) -> bool:
    return _has_tag(node, ANCHOR_ELEMENT)


def is_item_link(node: Node) -> bool:
    """True for an anchor pointing to a content item by id, external id or codename."""
    return is_anchor(node) and _has_any_attribute(node, ITEM_LINK_REFERENCE_ATTRIBUTES)


def is_external_link(node: Node) -> bool:
    """True for any anchor that is not an item link.

    Asset, email and phone links are external links as far as Portable Text is concerned.
    """
    return is_anchor(node) and not is_item_link(node)


def is_image(node: Node) -> bool:
    """True for a `<figure>` carrying an asset reference."""
    return _has_tag(node, ASSET_ELEMENT) and _has_any_attribute(node, ASSET_REFERENCE_ATTRIBUTES)


def is_linked_item_or_component(node: Node) -> bool:
    return (
        _has_tag(node, OBJECT_ELEMENT)
        and isinstance(node, ElementNode)
        and node.attributes.get("type") == LINKED_ITEM_OBJECT_TYPE
    )


def is_ignored_element(node: Node) -> bool:
    """True for wrapper elements that contribute only their children."""
    return _has_tag(node, *IGNORED_ELEMENTS)


def _has_any_attribute(node: Node, candidates: Sequence[tuple[str, ReferenceType]]) -> bool:
    return isinstance(node, ElementNode) and any(
        attribute in node.attributes for attribute, _ in candidates
    )


# ------------------------------------------------------------------------------------------------
# CLASSIFICATION
# ------------------------------------------------------------------------------------------------


def classify(node: ElementNode) -> ElementKind:
    """The `ElementKind` of `node`.

    Raises `UnsupportedTagError` for any element outside the rich text vocabulary, including an
    `<object>` that is not a linked-item placeholder. A `<figure>` is always an image; a missing
    asset reference is reported when the image is transformed.
    """
    tag_name = node.tag_name

    if tag_name in BLOCK_ELEMENTS:
        return ElementKind.BLOCK
    if tag_name in TEXT_STYLE_ELEMENTS:
        return ElementKind.STYLE_MARK
    if tag_name == ANCHOR_ELEMENT:
        return ElementKind.ITEM_LINK if is_item_link(node) else ElementKind.EXTERNAL_LINK
    if tag_name in LIST_TYPE_ELEMENTS:
        return ElementKind.LIST
    if tag_name == LIST_ITEM_ELEMENT:
        return ElementKind.LIST_ITEM
    if tag_name == LINE_BREAK_ELEMENT:
        return ElementKind.LINE_BREAK
    if tag_name == ASSET_ELEMENT:
        return ElementKind.IMAGE
    if is_linked_item_or_component(node):
        return ElementKind.LINKED_ITEM
    if tag_name == TABLE_ELEMENT:
        return ElementKind.TABLE
    if tag_name == TABLE_ROW_ELEMENT:
        return ElementKind.TABLE_ROW
    if tag_name == TABLE_CELL_ELEMENT:
        return ElementKind.TABLE_CELL
    if tag_name in IGNORED_ELEMENTS:
        return ElementKind.PASS_THROUGH

    trace_logger.debug("unsupported <%s> element with attributes %r", tag_name, node.attributes)
    raise UnsupportedTagError(tag_name)


# ------------------------------------------------------------------------------------------------
# REFERENCE RESOLUTION
# ------------------------------------------------------------------------------------------------


def get_reference_data(
    attributes: Mapping[str, str], candidates: Sequence[tuple[str, ReferenceType]]
) -> Optional[ReferenceData]:
    """The first `candidates` attribute present in `attributes`, or None when none is."""
    for attribute, ref_type in candidates:
        reference = attributes.get(attribute)
        if reference is not None:
            return ReferenceData(reference, ref_type)
    return None


def get_asset_reference_data(attributes: Mapping[str, str]) -> Optional[ReferenceData]:
    return get_reference_data(attributes, ASSET_REFERENCE_ATTRIBUTES)


def get_item_or_component_reference_data(
    attributes: Mapping[str, str],
) -> Optional[ReferenceData]:
    return get_reference_data(attributes, ITEM_OR_COMPONENT_REFERENCE_ATTRIBUTES)


def get_item_link_reference_data(attributes: Mapping[str, str]) -> Optional[ReferenceData]:
    return get_reference_data(attributes, ITEM_LINK_REFERENCE_ATTRIBUTES)
