"""Unit-test suite for the `rich_text_resolver.portable_text.traverse` module."""

from __future__ import annotations

import copy

from rich_text_resolver.portable_text.traverse import traverse_portable_text
from rich_text_resolver.portable_text.transformer import transform_to_portable_text
from test_rich_text_resolver.unit_utils import counting_keys


def portable_text():
    return transform_to_portable_text(
        '<p>Some <a href="https://kontent.ai">link</a></p>'
        "<table><tr><td><strong>cell</strong></td></tr></table>",
        generate_key=counting_keys(),
    )


class DescribeTraversePortableText:
    """Unit-test suite for `traverse_portable_text()`."""

    def it_returns_an_equal_copy_when_the_callback_changes_nothing(self):
        nodes = portable_text()

        result = traverse_portable_text(nodes, lambda node: None)

        assert result == nodes
        assert result[0] is not nodes[0]
        assert result[0]["children"] is not nodes[0]["children"]

    def it_visits_every_object_in_the_tree_parents_first(self):
        visited: list[str] = []

        def record(node):
            visited.append(f"{node['_type']}:{node.get('_key', '')}")

        traverse_portable_text(portable_text(), record)

        assert visited == [
            "block:key-4",
            "link:key-3",
            "span:key-1",
            "span:key-2",
            "table:key-9",
            "row:key-8",
            "cell:key-7",
            "block:key-6",
            "span:key-5",
        ]

    def it_replaces_objects_with_what_the_callback_returns(self):
        def upper_case_text(node):
            if node["_type"] == "span":
                return {**node, "text": node["text"].upper()}
            return None

        result = traverse_portable_text(portable_text(), upper_case_text)

        assert [s["text"] for s in result[0]["children"]] == ["SOME ", "LINK"]
        cell_block = result[1]["rows"][0]["cells"][0]["content"][0]
        assert cell_block["children"][0]["text"] == "CELL"

    def it_traverses_the_children_of_a_replacement(self):
        def replace_children(node):
            if node["_type"] == "block":
                return {**node, "children": [{"_type": "span", "marks": [], "text": "new"}]}
            if node["_type"] == "span":
                return {**node, "text": node["text"].upper()}
            return None

        (paragraph,) = traverse_portable_text(
            [{"_type": "block", "children": [], "markDefs": []}], replace_children
        )

        assert paragraph["children"] == [{"_type": "span", "marks": [], "text": "NEW"}]

    def it_leaves_mark_lists_alone(self):
        visited_types: list[str] = []

        traverse_portable_text(
            [{"_type": "span", "marks": ["strong", "em"], "text": "x"}],
            lambda node: visited_types.append(node["_type"]),
        )

        assert visited_types == ["span"]

    def it_never_mutates_its_input(self):
        nodes = portable_text()
        original = copy.deepcopy(nodes)

        traverse_portable_text(nodes, lambda node: {**node, "_key": "changed"})

        assert nodes == original
