"""Parsing engine backed by BeautifulSoup and the standard library `html.parser` tree builder.

This engine plays the role of a browser DOM: it keeps every text node exactly as written and
never restructures the fragment, which makes it the reference the `lxml` engine is checked
against.
"""

from __future__ import annotations

from typing import Iterable

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PageElement, PreformattedString, Tag

from rich_text_resolver.documents.dom import ElementNode, Node, TextNode


def parse(html: str) -> list[Node]:
    """Parse `html` into its top-level nodes."""
    # -- attribute values such as `class` stay plain strings rather than token lists --
    soup = BeautifulSoup(html, "html.parser", multi_valued_attributes=None)
    return _convert_contents(soup.contents)


def _convert_contents(contents: Iterable[PageElement]) -> list[Node]:
    nodes: list[Node] = []
    for item in contents:
        # -- comments, doctypes, CDATA and declarations --
        if isinstance(item, PreformattedString):
            continue
        if isinstance(item, Tag):
            nodes.append(_element_node(item))
        elif isinstance(item, NavigableString) and str(item):
            _append_text(nodes, str(item))
    return nodes


def _append_text(nodes: list[Node], text: str) -> None:
    """Add `text` to `nodes`, merging it with a text node left adjacent by a dropped comment."""
    if nodes and isinstance(nodes[-1], TextNode):
        nodes[-1] = TextNode(nodes[-1].content + text)
    else:
        nodes.append(TextNode(text))


def _element_node(tag: Tag) -> ElementNode:
    attributes = {name: _attribute_value(value) for name, value in tag.attrs.items()}
    return ElementNode(
        tag_name=tag.name,
        attributes=attributes,
        children=tuple(_convert_contents(tag.contents)),
    )


def _attribute_value(value: object) -> str:
    if isinstance(value, (list, tuple)):
        return " ".join(str(v) for v in value)
    return "" if value is None else str(value)
