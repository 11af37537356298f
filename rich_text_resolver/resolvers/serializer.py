"""Generic Portable Text to string serializer.

Rendering follows the Portable Text HTML toolkit:

- Consecutive list-item blocks are grouped into list nodes by `level` and `listItem`. A deeper
  list is nested inside the last item of the list above it, which is how HTML nests lists.
- The spans of a block are arranged into a tree of mark nodes. Marks shared by the longest run of
  following spans open first so adjacent spans with the same mark share one wrapper.
- Every node is rendered by a component looked up in `PortableTextComponents`. The HTML, Markdown
  and management-API renderers in this package differ only in the components they provide.
"""

from __future__ import annotations

import dataclasses as dc
import html
from typing import Any, Callable, Mapping, NamedTuple, Optional, Sequence

from rich_text_resolver.constants import KNOWN_DECORATORS
from rich_text_resolver.logger import logger

LIST_NODE_TYPE = "@list"
SPAN_NODE_TYPE = "@span"
TEXT_NODE_TYPE = "@text"


class TypeProps(NamedTuple):
    """Arguments of a component rendering a custom object such as an image or table."""

    value: dict[str, Any]
    index: int
    is_inline: bool
    render: Callable[[Sequence[dict[str, Any]]], str]


class BlockProps(NamedTuple):
    value: dict[str, Any]
    children: str
    index: int


class MarkProps(NamedTuple):
    """Arguments of a mark component.

    `value` is the block's mark definition for the mark, None for a decorator like `strong`.
    """

    children: str
    text: str
    value: Optional[dict[str, Any]]
    mark_type: str
    mark_key: str


class ListProps(NamedTuple):
    value: dict[str, Any]
    children: str
    index: int


class ListItemProps(NamedTuple):
    value: dict[str, Any]
    children: str
    index: int


def unknown_type_warning(type_name: str) -> str:
    return (
        f'Unknown block type "{type_name}", specify a component for it in the `components.types`'
        " option"
    )


def _default_unknown_type(props: TypeProps) -> str:
    warning = unknown_type_warning(props.value.get("_type", ""))
    if props.is_inline:
        return f'<span style="display:none">{warning}</span>'
    return f'<div style="display:none">{warning}</div>'


def _default_unknown_mark(props: MarkProps) -> str:
    return f'<span class="unknown__pt__mark__{props.mark_type}">{props.children}</span>'


def _default_link(props: MarkProps) -> str:
    href = (props.value or {}).get("href", "")
    return f'<a href="{html.escape(href)}">{props.children}</a>' if href else props.children


def _wrap(tag_name: str, attributes: str = "") -> Callable[[Any], str]:
    def render(props: Any) -> str:
        return f"<{tag_name}{attributes}>{props.children}</{tag_name}>"

    return render


@dc.dataclass
class PortableTextComponents:
    """Components used to render each kind of Portable Text node.

    `types` is keyed by the `_type` of custom objects, `marks` by mark type (decorator name or mark
    definition `_type`), `block` by block style and `list`/`list_item` by `listItem`.
    """

    types: dict[str, Callable[[TypeProps], str]] = dc.field(default_factory=dict)
    marks: dict[str, Callable[[MarkProps], str]] = dc.field(default_factory=dict)
    block: dict[str, Callable[[BlockProps], str]] = dc.field(default_factory=dict)
    list: dict[str, Callable[[ListProps], str]] = dc.field(default_factory=dict)
    list_item: dict[str, Callable[[ListItemProps], str]] = dc.field(default_factory=dict)
    hard_break: Optional[Callable[[], str]] = None
    unknown_type: Callable[[TypeProps], str] = _default_unknown_type
    unknown_mark: Callable[[MarkProps], str] = _default_unknown_mark
    unknown_block_style: Callable[[BlockProps], str] = _wrap("p")
    unknown_list: Callable[[ListProps], str] = _wrap("ul")
    unknown_list_item: Callable[[ListItemProps], str] = _wrap("li")

    def merge(self, overrides: Optional[Mapping[str, Any]]) -> PortableTextComponents:
        """A copy of these components with `overrides` applied.

        Mapping-valued groups (`types`, `marks`, `block`, `list`, `list_item`) merge key by key;
        the fallback components are replaced outright.
        """
        if not overrides:
            return dc.replace(self)

        field_names = {f.name for f in dc.fields(self)}
        changes: dict[str, Any] = {}
        for name, value in overrides.items():
            if name not in field_names:
                raise ValueError(f"Unknown Portable Text component group: {name!r}")
            current = getattr(self, name)
            changes[name] = {**current, **value} if isinstance(current, dict) else value
        return dc.replace(self, **changes)


default_components = PortableTextComponents(
    marks={
        "em": _wrap("em"),
        "strong": _wrap("strong"),
        "code": _wrap("code"),
        "underline": _wrap("span", ' style="text-decoration:underline"'),
        "strike-through": _wrap("del"),
        "link": _default_link,
    },
    block={
        "normal": _wrap("p"),
        "blockquote": _wrap("blockquote"),
        "h1": _wrap("h1"),
        "h2": _wrap("h2"),
        "h3": _wrap("h3"),
        "h4": _wrap("h4"),
        "h5": _wrap("h5"),
        "h6": _wrap("h6"),
    },
    list={"number": _wrap("ol"), "bullet": _wrap("ul")},
    list_item={"number": _wrap("li"), "bullet": _wrap("li")},
    hard_break=lambda: "<br/>",
)
"""Components rendering plain HTML, used for every node a renderer does not override."""


def escape_html(text: str) -> str:
    return html.escape(text, quote=True).replace("&#x27;", "&#39;")


# ------------------------------------------------------------------------------------------------
# NODE PREDICATES
# ------------------------------------------------------------------------------------------------


def is_span(node: Mapping[str, Any]) -> bool:
    return (
        node.get("_type") == "span"
        and isinstance(node.get("text"), str)
        and isinstance(node.get("marks", []), list)
    )


def is_block(node: Mapping[str, Any]) -> bool:
    """True for an object with typed `children`, which is what makes it renderable as a block."""
    type_name = node.get("_type")
    children = node.get("children")
    return (
        isinstance(type_name, str)
        and not type_name.startswith("@")
        and isinstance(children, list)
        and all(isinstance(child, Mapping) and "_type" in child for child in children)
    )


def is_list_item_block(node: Mapping[str, Any]) -> bool:
    return (
        is_block(node)
        and isinstance(node.get("listItem"), str)
        and isinstance(node.get("level", 1), int)
    )


def is_list_node(node: Mapping[str, Any]) -> bool:
    return node.get("_type") == LIST_NODE_TYPE


# ------------------------------------------------------------------------------------------------
# LIST NESTING
# ------------------------------------------------------------------------------------------------


def _list_from_block(block: dict[str, Any], index: int) -> dict[str, Any]:
    return {
        "_type": LIST_NODE_TYPE,
        "_key": f"{block.get('_key') or index}-parent",
        "level": block.get("level") or 1,
        "listItem": block["listItem"],
        "children": [block],
    }


def _find_list_matching(
    root: Mapping[str, Any], level: int, list_item: Optional[str] = None
) -> Optional[dict[str, Any]]:
    """Deepest open list along the last-child path of `root` with `level` and `list_item`.

    A list only matches when `list_item` is given.
    """
    if (
        is_list_node(root)
        and root.get("level", 1) == level
        and list_item is not None
        and root.get("listItem") == list_item
    ):
        return root  # type: ignore[return-value]
    children = root.get("children")
    if not children:
        return None
    node = children[-1]
    return None if is_span(node) else _find_list_matching(node, level, list_item)


def nest_lists(blocks: Sequence[dict[str, Any]]) -> list[dict[str, Any]]:
    """Group consecutive list-item blocks of `blocks` into (possibly nested) list nodes.

    Input blocks are not modified; a list item that receives a nested list is replaced by a copy.
    """
    tree: list[dict[str, Any]] = []
    current_list: Optional[dict[str, Any]] = None

    for index, block in enumerate(blocks):
        if not is_list_item_block(block):
            tree.append(block)
            current_list = None
            continue

        level = block.get("level") or 1

        if current_list is None:
            current_list = _list_from_block(block, index)
            tree.append(current_list)
            continue

        # -- another item of the current list --
        if level == current_list["level"] and block["listItem"] == current_list["listItem"]:
            current_list["children"].append(block)
            continue

        # -- deeper: the new list lives inside the last item of the current one --
        if level > current_list["level"]:
            new_list = _list_from_block(block, index)
            last_item = current_list["children"][-1]
            current_list["children"][-1] = {
                **last_item,
                "children": [*last_item["children"], new_list],
            }
            current_list = new_list
            continue

        # -- shallower: rejoin an open ancestor list of the same level and kind --
        if level < current_list["level"]:
            match = _find_list_matching(tree[-1], level, block["listItem"])
            if match is not None:
                current_list = match
                current_list["children"].append(block)
                continue
            current_list = _list_from_block(block, index)
            tree.append(current_list)
            continue

        # -- same level, other kind of list; only a kind-filtered search can match --
        match = _find_list_matching(tree[-1], level)
        if match is not None and match.get("listItem") == block["listItem"]:
            current_list = match
            current_list["children"].append(block)
            continue
        current_list = _list_from_block(block, index)
        tree.append(current_list)

    return tree


# ------------------------------------------------------------------------------------------------
# MARK TREE
# ------------------------------------------------------------------------------------------------


def _sort_marks_by_occurrences(
    span: Mapping[str, Any], index: int, siblings: Sequence[Mapping[str, Any]]
) -> list[str]:
    """Marks of `span`, those shared by the longest run of following spans first."""
    if not is_span(span) or not span.get("marks"):
        return []

    marks: list[str] = list(span["marks"])
    occurrences: dict[str, int] = {}
    for mark in marks:
        occurrences[mark] = 1
        for sibling in siblings[index + 1 :]:
            if is_span(sibling) and mark in sibling.get("marks", []):
                occurrences[mark] += 1
            else:
                break

    def decorator_position(mark: str) -> int:
        return KNOWN_DECORATORS.index(mark) if mark in KNOWN_DECORATORS else -1

    return sorted(marks, key=lambda mark: (-occurrences[mark], decorator_position(mark), mark))


def build_marks_tree(block: Mapping[str, Any]) -> list[dict[str, Any]]:
    """The children of `block` arranged as a tree of mark nodes over text nodes.

    Text is split at each newline; the newline itself becomes a separate text node rendered as a
    hard break.
    """
    children = block.get("children") or []
    if not children:
        return []

    mark_defs = block.get("markDefs") or []
    sorted_marks = [
        _sort_marks_by_occurrences(child, index, children) for index, child in enumerate(children)
    ]
    root: dict[str, Any] = {"_type": SPAN_NODE_TYPE, "children": [], "markType": "<unknown>"}
    node_stack = [root]

    for span, marks_needed in zip(children, sorted_marks):
        # -- keep open mark nodes this span still needs, from the root down to the first miss --
        position = 1
        while position < len(node_stack):
            mark = node_stack[position].get("markKey", "")
            if mark not in marks_needed:
                break
            marks_needed.remove(mark)
            position += 1
        node_stack = node_stack[:position]

        current = node_stack[-1]
        for mark_key in marks_needed:
            mark_def = next((d for d in mark_defs if d.get("_key") == mark_key), None)
            node = {
                "_type": SPAN_NODE_TYPE,
                "_key": span.get("_key"),
                "children": [],
                "markDef": mark_def,
                "markType": mark_def["_type"] if mark_def else mark_key,
                "markKey": mark_key,
            }
            current["children"].append(node)
            node_stack.append(node)
            current = node

        if is_span(span):
            lines = span["text"].split("\n")
            text_nodes: list[str] = []
            for line_index, line in enumerate(lines):
                if line_index:
                    text_nodes.append("\n")
                text_nodes.append(line)
            current["children"].extend({"_type": TEXT_NODE_TYPE, "text": t} for t in text_nodes)
        else:
            current["children"].append(span)

    return root["children"]


def span_to_plain_text(node: Mapping[str, Any]) -> str:
    if node.get("_type") == TEXT_NODE_TYPE:
        return node["text"]
    return "".join(span_to_plain_text(child) for child in node.get("children", []))


# ------------------------------------------------------------------------------------------------
# SERIALIZER
# ------------------------------------------------------------------------------------------------


class PortableTextSerializer:
    """Renders Portable Text with a set of components.

    `escape_text` is applied to plain text before it is handed to any component.
    """

    def __init__(
        self,
        components: PortableTextComponents = default_components,
        escape_text: Callable[[str], str] = escape_html,
    ):
        self._components = components
        self._escape_text = escape_text

    def serialize(self, blocks: Sequence[dict[str, Any]]) -> str:
        """Render `blocks` to a single string."""
        nested = nest_lists(list(blocks))
        return "".join(self._render_node(node, index, False) for index, node in enumerate(nested))

    def _render_node(self, node: dict[str, Any], index: int, is_inline: bool) -> str:
        if is_list_node(node):
            return self._render_list(node, index)
        if is_list_item_block(node):
            return self._render_list_item(node, index)
        if node.get("_type") == SPAN_NODE_TYPE:
            return self._render_span(node)
        if is_block(node):
            return self._render_block(node, index)
        if node.get("_type") == TEXT_NODE_TYPE:
            return self._render_text(node)
        return self._render_custom_type(node, index, is_inline)

    def _render_block_children(self, block: dict[str, Any]) -> str:
        return "".join(
            self._render_node(child, index, True)
            for index, child in enumerate(build_marks_tree(block))
        )

    def _render_list(self, node: dict[str, Any], index: int) -> str:
        children = "".join(
            self._render_node(child, child_index, False)
            for child_index, child in enumerate(node["children"])
        )
        component = self._components.list.get(node["listItem"])
        if component is None:
            logger.debug("no list component for list style %r", node["listItem"])
            component = self._components.unknown_list
        return component(ListProps(node, children, index))

    def _render_list_item(self, node: dict[str, Any], index: int) -> str:
        list_item = node["listItem"]
        component = self._components.list_item.get(list_item)
        if component is None:
            logger.debug("no list item component for list style %r", list_item)
            component = self._components.unknown_list_item

        style = node.get("style")
        if style and style != "normal":
            # -- a styled item renders its block style inside the item --
            block = {k: v for k, v in node.items() if k != "listItem"}
            children = self._render_node(block, index, False)
        else:
            children = self._render_block_children(node)
        return component(ListItemProps(node, children, index))

    def _render_span(self, node: dict[str, Any]) -> str:
        mark_type = node["markType"]
        component = self._components.marks.get(mark_type)
        if component is None:
            logger.debug("no mark component for mark type %r", mark_type)
            component = self._components.unknown_mark
        children = "".join(
            self._render_node(child, index, True) for index, child in enumerate(node["children"])
        )
        return component(
            MarkProps(
                children=children,
                text=span_to_plain_text(node),
                value=node.get("markDef"),
                mark_type=mark_type,
                mark_key=node["markKey"],
            )
        )

    def _render_block(self, node: dict[str, Any], index: int) -> str:
        style = node.get("style") or "normal"
        component = self._components.block.get(style)
        if component is None:
            logger.debug("no block component for block style %r", style)
            component = self._components.unknown_block_style
        return component(BlockProps(node, self._render_block_children(node), index))

    def _render_text(self, node: dict[str, Any]) -> str:
        text = node["text"]
        if text == "\n":
            hard_break = self._components.hard_break
            return hard_break() if hard_break else "\n"
        return self._escape_text(text)

    def _render_custom_type(self, node: dict[str, Any], index: int, is_inline: bool) -> str:
        component = self._components.types.get(node.get("_type", ""))
        if component is None:
            logger.debug("no type component for Portable Text type %r", node.get("_type"))
            component = self._components.unknown_type
        return component(TypeProps(node, index, is_inline, self.serialize))
