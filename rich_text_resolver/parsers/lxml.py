"""Headless parsing engine backed by `lxml` (libxml2).

The rich text fragment is wrapped in a `<body>` element so libxml2 never has to guess where the
document body starts; the top-level nodes are then the body's text and child elements.
"""

from __future__ import annotations

from lxml import etree

from rich_text_resolver.documents.dom import ElementNode, Node, TextNode
from rich_text_resolver.errors import ParserStructureError

html_parser = etree.HTMLParser(remove_comments=True, remove_pis=True)


def parse(html: str) -> list[Node]:
    """Parse `html` into the top-level nodes of its body."""
    root = etree.fromstring(f"<html><body>{html}</body></html>", html_parser)
    body = root.find("body") if root is not None else None
    if body is None:
        raise ParserStructureError("lxml did not produce a <body> element for the rich text.")
    return _child_nodes(body)


def _child_nodes(element: etree._Element) -> list[Node]:
    """Text, child elements and tails below `element`, in document order.

    lxml stores character data on the element it follows (`.text` for the first run, `.tail` of
    the preceding child for the rest), so the runs are interleaved back into node order here.
    """
    nodes: list[Node] = []
    if element.text:
        nodes.append(TextNode(element.text))
    for child in element:
        # -- comments and processing-instructions have a non-str tag; only their tail matters --
        if isinstance(child.tag, str):
            nodes.append(_element_node(child))
        if child.tail:
            if nodes and isinstance(nodes[-1], TextNode):
                nodes[-1] = TextNode(nodes[-1].content + child.tail)
            else:
                nodes.append(TextNode(child.tail))
    return nodes


def _element_node(element: etree._Element) -> ElementNode:
    return ElementNode(
        tag_name=str(element.tag),
        attributes={str(name): str(value) for name, value in element.attrib.items()},
        children=tuple(_child_nodes(element)),
    )
