"""Unit-test suite for the `rich_text_resolver.resolvers.html` module."""

from __future__ import annotations

import pytest

from rich_text_resolver.portable_text.transformer import transform_to_portable_text
from rich_text_resolver.resolvers.html import (
    link_attributes,
    resolve_image,
    resolve_table,
    to_html,
    to_html_image_default,
)
from rich_text_resolver.resolvers.serializer import unknown_type_warning
from test_rich_text_resolver.unit_utils import assert_text_equal

ASSET_ID = "62ba1f17-13e9-43c0-9530-6b44e38097fc"
ASSET_URL = (
    "https://assets-us-01.kc-usercontent.com:443/cec32064-07dd-00ff-2101-5bde13c9e30c"
    "/3594632c-d9bb-4197-b7da-2698b0dab409/Riesachsee_Dia_1_1963_%C3%96sterreich_16k_3063.jpg"
)
FIGURE = (
    f'<figure data-asset-id="{ASSET_ID}" data-image-id="{ASSET_ID}">'
    f'<img src="{ASSET_URL}" data-asset-id="{ASSET_ID}" data-image-id="{ASSET_ID}" alt="">'
    "</figure>"
)

LINKED_ITEMS = {"test_item": {"type": "test", "text_element": "random text value"}}


def _render_component_or_item(props) -> str:
    linked_item = LINKED_ITEMS.get(props.value["component"]["_ref"])
    if linked_item is None:
        return "Resolver for unknown type not implemented."
    return (
        f"<p>resolved value of text_element: <strong>{linked_item['text_element']}</strong></p>"
    )


CUSTOM_COMPONENTS = {
    "block": {"h1": lambda props: f'<h1 custom-attribute="value">{props.children}</h1>'},
    "types": {
        "image": lambda props: f'<img src="{props.value["asset"]["url"]}" height="800">',
        "componentOrItem": _render_component_or_item,
    },
    "marks": {
        "contentItemLink": lambda props: (
            f'<a href="https://website.com/{props.value["reference"]["_ref"]}">{props.children}</a>'
        ),
        "sup": lambda props: f'<sup custom-attribute="value">{props.children}</sup>',
    },
}


def resolve(rich_text: str, components=None) -> str:
    return to_html(transform_to_portable_text(rich_text), components)


class DescribeToHtml:
    """Unit-test suite for `rich_text_resolver.resolvers.html.to_html()`."""

    def it_renders_basic_portable_text(self):
        rich_text = (
            '<p><br></p><p>text<a href="http://google.com" data-new-window="true"'
            ' title="linktitle" target="_blank" rel="noopener noreferrer"><strong>link</strong>'
            "</a></p><h1>heading</h1><p><br></p>"
        )

        assert_text_equal(
            resolve(rich_text),
            '<p><br/></p><p>text<a href="http://google.com" data-new-window="true"'
            ' title="linktitle" target="_blank" rel="noopener noreferrer"><strong>link</strong>'
            "</a></p><h1>heading</h1><p><br/></p>",
        )

    def it_resolves_an_item_link_with_a_custom_component(self):
        rich_text = (
            '<p><a data-item-id="23f71096-fa89-4f59-a3f9-970e970944ec" href="">'
            "<em>item</em></a></p>"
        )

        assert resolve(rich_text, CUSTOM_COMPONENTS) == (
            '<p><a href="https://website.com/23f71096-fa89-4f59-a3f9-970e970944ec"><em>item</em>'
            "</a></p>"
        )

    def it_resolves_a_linked_item_with_a_custom_component(self):
        rich_text = (
            '<object type="application/kenticocloud" data-type="item" data-rel="link"'
            ' data-codename="test_item"></object><p>text after component</p>'
        )

        assert resolve(rich_text, CUSTOM_COMPONENTS) == (
            "<p>resolved value of text_element: <strong>random text value</strong></p>"
            "<p>text after component</p>"
        )

    def but_it_renders_a_hidden_placeholder_for_a_linked_item_by_default(self):
        rich_text = (
            '<object type="application/kenticocloud" data-type="item" data-codename="test_item">'
            "</object>"
        )

        assert resolve(rich_text) == (
            f'<div style="display:none">{unknown_type_warning("componentOrItem")}</div>'
        )

    def and_it_keeps_the_text_of_an_item_link_without_a_custom_component(self):
        assert resolve('<p><a data-item-codename="article">item</a></p>') == (
            '<p><span class="unknown__pt__mark__contentItemLink">item</span></p>'
        )

    def it_resolves_a_table(self):
        rich_text = (
            "<table><tbody>\n  <tr><td>Ivan</td><td>Jiri</td></tr>\n"
            "  <tr><td>Ondra</td><td>Dan</td></tr>\n</tbody></table>"
        )

        assert resolve(rich_text) == (
            "<table><tbody><tr><td><p>Ivan</p></td><td><p>Jiri</p></td></tr>"
            "<tr><td><p>Ondra</p></td><td><p>Dan</p></td></tr></tbody></table>"
        )

    def it_renders_table_cells_with_the_custom_components_too(self):
        rich_text = "<table><tr><td><h1>Head</h1></td></tr></table>"

        assert resolve(rich_text, CUSTOM_COMPONENTS) == (
            '<table><tbody><tr><td><h1 custom-attribute="value">Head</h1></td></tr></tbody></table>'
        )

    def it_resolves_an_image(self):
        assert resolve(FIGURE) == f'<img src="{ASSET_URL}" alt="">'

    def it_resolves_an_image_with_a_custom_component(self):
        assert resolve(FIGURE, CUSTOM_COMPONENTS) == f'<img src="{ASSET_URL}" height="800">'

    def it_resolves_styled_text_with_line_breaks(self):
        rich_text = (
            "<p><strong>Strong text with line break<br>\nStrong text with line break</strong></p>"
        )

        assert resolve(rich_text) == (
            "<p><strong>Strong text with line break<br/>Strong text with line break</strong></p>"
        )

    def it_resolves_sub_and_sup_by_default(self):
        assert resolve("<p><sub>Subscript text</sub><sup>Superscript text</sup></p>") == (
            "<p><sub>Subscript text</sub><sup>Superscript text</sup></p>"
        )

    def it_resolves_sup_with_a_custom_component(self):
        assert resolve("<p><sup>Superscript text</sup></p>", CUSTOM_COMPONENTS) == (
            '<p><sup custom-attribute="value">Superscript text</sup></p>'
        )

    def it_resolves_a_link_with_all_of_its_attributes(self):
        rich_text = (
            '<p><a href="https://website.com/12345" target="_blank" rel="noopener noreferrer">'
            "link</a></p>"
        )
        assert resolve(rich_text) == rich_text

    @pytest.mark.parametrize(
        ("rich_text", "expected_value"),
        [
            ("<h1>heading</h1>", '<h1 custom-attribute="value">heading</h1>'),
            (
                "<h1>modified heading</h1><h2>heading</h2>",
                '<h1 custom-attribute="value">modified heading</h1><h2>heading</h2>',
            ),
        ],
    )
    def it_resolves_headings_with_custom_components(self, rich_text: str, expected_value: str):
        assert resolve(rich_text, CUSTOM_COMPONENTS) == expected_value

    def it_escapes_text_and_attribute_values(self):
        rich_text = (
            '<p><a href="https://kontent.ai/?a=1&amp;b=&quot;2&quot;">'
            "Tom &amp; Jerry's</a></p>"
        )

        assert resolve(rich_text) == (
            '<p><a href="https://kontent.ai/?a=1&amp;b=&quot;2&quot;">Tom &amp; Jerry&#39;s</a></p>'
        )

    def it_nests_marks_that_overlap_between_spans(self):
        rich_text = (
            "<p><strong>Bold text.</strong><em><strong>Bold italic text. </strong></em>"
            '<a href="https://kontent.ai"><strong>bold link</strong> plain link</a></p>'
        )

        assert resolve(rich_text) == (
            "<p><strong>Bold text.<em>Bold italic text. </em>"
            '<a href="https://kontent.ai">bold link</a></strong>'
            '<a href="https://kontent.ai"> plain link</a></p>'
        )

    def it_renders_lists(self):
        assert resolve("<ul><li>one<ol><li>two</li></ol></li></ul>") == (
            "<ul><li>one<ol><li>two</li></ol></li></ul>"
        )


def test_to_html_image_default_escapes_url_and_alt():
    image = {"_type": "image", "asset": {"url": "https://a.io/x.png?a=1&b=2", "alt": '"Logo"'}}
    assert to_html_image_default(image) == (
        '<img src="https://a.io/x.png?a=1&amp;b=2" alt="&quot;Logo&quot;">'
    )


def test_resolve_image_uses_the_resolver_it_is_given():
    image = {"_type": "image", "asset": {"url": "u"}}
    assert resolve_image(image, lambda value: value["asset"]["url"].upper()) == "U"


def test_resolve_table_renders_each_cell_with_the_blocks_resolver():
    table = {
        "_type": "table",
        "rows": [
            {"_type": "row", "cells": [{"content": ["a"]}, {"content": ["b"]}]},
            {"_type": "row", "cells": [{"content": []}, {"content": ["c", "d"]}]},
        ],
    }

    assert resolve_table(table, lambda blocks: "+".join(blocks)) == (
        "<table><tbody><tr><td>a</td><td>b</td></tr><tr><td></td><td>c+d</td></tr></tbody></table>"
    )


def test_link_attributes_skips_type_and_key():
    link = {"_type": "link", "_key": "k", "href": "https://kontent.ai", "title": "a < b"}
    assert link_attributes(link) == 'href="https://kontent.ai" title="a &lt; b"'
