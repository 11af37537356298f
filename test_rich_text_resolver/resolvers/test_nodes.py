"""Unit-test suite for the `rich_text_resolver.resolvers.nodes` module."""

from __future__ import annotations

import asyncio

import pytest

from rich_text_resolver.documents.dom import ElementNode, TextNode
from rich_text_resolver.parsers import parse_html
from rich_text_resolver.resolvers.nodes import (
    element_to_html,
    format_attributes,
    nodes_to_html,
    nodes_to_html_async,
)

RICH_TEXT = (
    "<p>Hello <b>World</b>!</p><p>Another <i>paragraph</i> with a nested <span>span</span></p>"
)


@pytest.fixture
def nodes():
    return parse_html(RICH_TEXT)


def _with_attributes(node: ElementNode, children: str, context) -> str:
    attributes = "".join(f' {name}="{value}"' for name, value in node.attributes.items())
    return f"<{node.tag_name}{attributes}>{children}</{node.tag_name}>"


class DescribeNodesToHtml:
    """Unit-test suite for `rich_text_resolver.resolvers.nodes.nodes_to_html()`."""

    def it_renders_nodes_back_to_the_html_they_were_parsed_from(self, nodes):
        assert nodes_to_html(nodes, {}) == RICH_TEXT

    @pytest.mark.parametrize("engine", ["lxml", "bs4"])
    def and_it_keeps_attributes_and_void_elements(self, engine: str):
        rich_text = (
            '<p>a<br>b <a href="https://kontent.ai/?a=1&amp;b=2" data-new-window="true">'
            "link</a></p>"
            '<figure data-asset-id="x"><img src="#" alt=""></figure>'
        )

        assert nodes_to_html(parse_html(rich_text, engine)) == rich_text

    def it_uses_the_transformer_registered_for_a_tag_and_the_wildcard_for_the_rest(self, nodes):
        transformers = {
            "i": lambda node, children, context: f'<em data-custom="yes">{children}</em>',
            "*": _with_attributes,
        }

        assert nodes_to_html(nodes, transformers) == (
            '<p>Hello <b>World</b>!</p><p>Another <em data-custom="yes">paragraph</em> with a'
            " nested <span>span</span></p>"
        )

    def it_can_unwrap_an_element_keeping_only_its_content(self, nodes):
        transformers = {"span": lambda node, children, context: children}

        assert nodes_to_html(nodes, transformers) == (
            "<p>Hello <b>World</b>!</p><p>Another <i>paragraph</i> with a nested span</p>"
        )

    def but_it_falls_back_to_the_default_rendering_when_a_transformer_returns_none(self, nodes):
        transformers = {"*": lambda node, children, context: None}
        assert nodes_to_html(nodes, transformers) == RICH_TEXT

    def it_hands_each_transformer_the_context_derived_for_its_element(self, nodes):
        transformers = {
            "p": lambda node, children, context: (
                f'<p style="color:{context["color"]}">{children}</p>'
            ),
            "span": lambda node, children, context: (
                f'<span style="color:{context["color"]}">{children}</span>'
            ),
            "*": lambda node, children, context: f"<{node.tag_name}>{children}</{node.tag_name}>",
        }

        def context_handler(node: ElementNode, context: dict) -> dict:
            return {"color": "blue" if node.tag_name == "span" else context["color"]}

        html = nodes_to_html(nodes, transformers, {"color": "red"}, context_handler)

        assert html == (
            '<p style="color:red">Hello <b>World</b>!</p><p style="color:red">Another'
            ' <i>paragraph</i> with a nested <span style="color:blue">span</span></p>'
        )

    def it_starts_from_an_empty_context_by_default(self):
        seen = []

        def record_context(node: ElementNode, children: str, context) -> str:
            seen.append(context)
            return children

        nodes_to_html([ElementNode("p", {}, [TextNode("x")])], {"p": record_context})

        assert seen == [{}]

    def it_escapes_text_content(self):
        node = ElementNode("p", {}, [TextNode("Tom & Jerry <3")])
        assert nodes_to_html([node]) == "<p>Tom &amp; Jerry &lt;3</p>"


class DescribeNodesToHtmlAsync:
    """Unit-test suite for `rich_text_resolver.resolvers.nodes.nodes_to_html_async()`."""

    def it_renders_nodes_back_to_the_html_they_were_parsed_from(self, nodes):
        assert asyncio.run(nodes_to_html_async(nodes, {})) == RICH_TEXT

    def it_awaits_the_transformers_and_keeps_document_order(self, nodes):
        async def strong(node: ElementNode, children: str, context) -> str:
            await asyncio.sleep(0.01)
            return f'<strong data-async="1">{children}</strong>'

        async def bare(node: ElementNode, children: str, context) -> str:
            await asyncio.sleep(0)
            return f"<{node.tag_name}>{children}</{node.tag_name}>"

        html = asyncio.run(nodes_to_html_async(nodes, {"b": strong, "*": bare}))

        assert html == (
            '<p>Hello <strong data-async="1">World</strong>!</p><p>Another <i>paragraph</i>'
            " with a nested <span>span</span></p>"
        )

    def it_applies_the_context_handler_too(self, nodes):
        async def color(node: ElementNode, children: str, context) -> str:
            return f'<{node.tag_name} data-color="{context["color"]}">{children}</{node.tag_name}>'

        def context_handler(node: ElementNode, context: dict) -> dict:
            return {"color": "blue"} if node.tag_name == "i" else context

        transformers = {"i": color, "span": color}

        html = asyncio.run(
            nodes_to_html_async(nodes, transformers, {"color": "red"}, context_handler)
        )

        assert html == (
            '<p>Hello <b>World</b>!</p><p>Another <i data-color="blue">paragraph</i> with a nested'
            ' <span data-color="red">span</span></p>'
        )


def test_format_attributes_escapes_values_and_skips_missing_ones():
    assert format_attributes({"title": 'a "b"', "hidden": None, "id": "x"}) == (
        ' title="a &quot;b&quot;" id="x"'
    )


@pytest.mark.parametrize(
    ("node", "children", "expected_value"),
    [
        (ElementNode("br"), "", "<br>"),
        (ElementNode("img", {"src": "#"}), "", '<img src="#">'),
        (ElementNode("p", {"class": "x"}), "text", '<p class="x">text</p>'),
        (ElementNode("td"), "", "<td></td>"),
    ],
)
def test_element_to_html(node: ElementNode, children: str, expected_value: str):
    assert element_to_html(node, children) == expected_value
