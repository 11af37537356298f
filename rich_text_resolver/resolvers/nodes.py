"""Render parsed rich text nodes back to HTML, or to any other string, tag by tag.

`nodes_to_html()` walks `TextNode` / `ElementNode` trees depth-first. Each element is rendered
with the transformer registered for its tag name, else with the `"*"` wildcard transformer, else
as itself with all of its attributes. A transformer receives the element, its already rendered
children and the current context, and may return `None` to fall back to the default rendering.

An optional `context_handler` derives the context for an element (and everything below it) from
the element and the context of its parent.
"""

from __future__ import annotations

import asyncio
import html
from typing import Any, Awaitable, Callable, Mapping, Optional, Sequence

from typing_extensions import TypeAlias

from rich_text_resolver.constants import VOID_ELEMENTS
from rich_text_resolver.documents.dom import ElementNode, Node, TextNode
from rich_text_resolver.resolvers.serializer import escape_html

WILDCARD = "*"

NodeToHtml: TypeAlias = Callable[[ElementNode, str, Any], Optional[str]]
AsyncNodeToHtml: TypeAlias = Callable[[ElementNode, str, Any], Awaitable[Optional[str]]]
ContextHandler: TypeAlias = Callable[[ElementNode, Any], Any]


def format_attributes(attributes: Mapping[str, Optional[str]]) -> str:
    """`attributes` as a string of ` name="value"` pairs; attributes without a value are skipped."""
    return "".join(
        f' {name}="{escape_html(value)}"' for name, value in attributes.items() if value is not None
    )


def element_to_html(node: ElementNode, children: str) -> str:
    """The default rendering of an element: its tag with all attributes around `children`."""
    start_tag = f"<{node.tag_name}{format_attributes(node.attributes)}>"
    if node.tag_name in VOID_ELEMENTS and not children:
        return start_tag
    return f"{start_tag}{children}</{node.tag_name}>"


def _text_to_html(node: TextNode) -> str:
    return html.escape(node.content, quote=False)


def _transformer_for(transformers: Mapping[str, Any], node: ElementNode) -> Optional[Any]:
    return transformers.get(node.tag_name) or transformers.get(WILDCARD)


def nodes_to_html(
    nodes: Sequence[Node],
    transformers: Optional[Mapping[str, NodeToHtml]] = None,
    context: Any = None,
    context_handler: Optional[ContextHandler] = None,
) -> str:
    """Render `nodes` as HTML, using `transformers` for the tags they name.

    `transformers` maps a tag name, or `"*"` for every tag without its own entry, to a function
    `(node, children, context) -> str`. `context` defaults to an empty dict.
    """
    transformers = transformers or {}
    context = {} if context is None else context

    def render(node: Node, context: Any) -> str:
        if isinstance(node, TextNode):
            return _text_to_html(node)

        if context_handler is not None:
            context = context_handler(node, context)
        children = "".join(render(child, context) for child in node.children)

        transformer = _transformer_for(transformers, node)
        rendered = transformer(node, children, context) if transformer else None
        return element_to_html(node, children) if rendered is None else rendered

    return "".join(render(node, context) for node in nodes)


async def nodes_to_html_async(
    nodes: Sequence[Node],
    transformers: Optional[Mapping[str, AsyncNodeToHtml]] = None,
    context: Any = None,
    context_handler: Optional[ContextHandler] = None,
) -> str:
    """Like `nodes_to_html()` for coroutine transformers.

    Sibling nodes are rendered concurrently; their output keeps document order.
    """
    transformers = transformers or {}
    context = {} if context is None else context

    async def render(node: Node, context: Any) -> str:
        if isinstance(node, TextNode):
            return _text_to_html(node)

        if context_handler is not None:
            context = context_handler(node, context)
        children = "".join(
            await asyncio.gather(*[render(child, context) for child in node.children])
        )

        transformer = _transformer_for(transformers, node)
        rendered = await transformer(node, children, context) if transformer else None
        return element_to_html(node, children) if rendered is None else rendered

    return "".join(await asyncio.gather(*[render(node, context) for node in nodes]))
