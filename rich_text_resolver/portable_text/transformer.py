"""Transform generic DOM nodes into Portable Text.

The transform is a depth-first recursive descent. Each element's children are transformed first
and the element's handler then assembles its own Portable Text objects from those results:

- Text becomes a span with no marks.
- A paragraph or heading gathers the spans below it into a block. Link objects produced below it
  become the block's `markDefs`, external links first.
- A style element or anchor adds one mark to every span below it: the tag name for a style, or
  the key of a freshly created link object for an anchor. The link object travels upward with
  the spans until a block absorbs it.
- A list element only updates the list context (depth and numbering) its items are transformed
  under. Each list item becomes a block with `listItem` and `level`, followed by the list-item
  blocks of any list nested inside it, so nesting is expressed by `level` rather than by
  containment.
- Tables become `table` -> `row` -> `cell` objects.
"""

from __future__ import annotations

from typing import Any, Callable, NamedTuple, Optional, Sequence

from rich_text_resolver.constants import IMG_ELEMENT, ListType
from rich_text_resolver.documents.dom import ElementNode, Node, TextNode
from rich_text_resolver.documents.portable_text import PortableTextObject
from rich_text_resolver.errors import MissingReferenceError
from rich_text_resolver.logger import logger
from rich_text_resolver.parsers import parse_html
from rich_text_resolver.portable_text.categorizer import categorize_items
from rich_text_resolver.portable_text.classifier import (
    ElementKind,
    classify,
    get_asset_reference_data,
    get_item_link_reference_data,
    get_item_or_component_reference_data,
)
from rich_text_resolver.portable_text.factories import (
    create_block,
    create_component_or_item_block,
    create_external_link,
    create_image_block,
    create_item_link,
    create_list_block,
    create_reference,
    create_span,
    create_table,
    create_table_cell,
    create_table_row,
    random_key,
)

KeyGenerator = Callable[[], str]
_Handler = Callable[[ElementNode, "list[Any]", "ListContext"], "list[Any]"]


class ListContext(NamedTuple):
    """Nesting depth and numbering of the list currently being transformed."""

    depth: int = 0
    list_type: str = ListType.UNKNOWN

    def enter_list(self, tag_name: str) -> ListContext:
        """Context for the items of an `<ol>` or `<ul>` element nested in this one."""
        return ListContext(
            self.depth + 1, ListType.NUMBER if tag_name == "ol" else ListType.BULLET
        )


class PortableTextTransformer:
    """Transforms generic DOM nodes into a list of Portable Text objects.

    `generate_key` is called once for each object created and supplies its `_key`.
    """

    def __init__(self, generate_key: KeyGenerator = random_key):
        self._generate_key = generate_key
        self._handlers: dict[ElementKind, _Handler] = {
            ElementKind.BLOCK: self._transform_block,
            ElementKind.STYLE_MARK: self._transform_mark,
            ElementKind.EXTERNAL_LINK: self._transform_mark,
            ElementKind.ITEM_LINK: self._transform_mark,
            ElementKind.LIST: self._pass_through,
            ElementKind.LIST_ITEM: self._transform_list_item,
            ElementKind.LINE_BREAK: self._transform_line_break,
            ElementKind.IMAGE: self._transform_image,
            ElementKind.LINKED_ITEM: self._transform_linked_item,
            ElementKind.TABLE: self._transform_table,
            ElementKind.TABLE_ROW: self._transform_table_row,
            ElementKind.TABLE_CELL: self._transform_table_cell,
            ElementKind.PASS_THROUGH: self._pass_through,
        }

    def transform(self, nodes: Sequence[Node]) -> list[PortableTextObject]:
        """Portable Text objects for `nodes`, in document order."""
        return self._transform_nodes(nodes, ListContext())

    def _transform_nodes(self, nodes: Sequence[Node], context: ListContext) -> list[Any]:
        return [item for node in nodes for item in self._transform_node(node, context)]

    def _transform_node(self, node: Node, context: ListContext) -> list[Any]:
        if isinstance(node, TextNode):
            return [create_span(self._generate_key(), [], node.content)]

        kind = classify(node)
        if kind is ElementKind.LIST:
            context = context.enter_list(node.tag_name)
        children = self._transform_nodes(node.children, context)
        return self._handlers[kind](node, children, context)

    # -- handlers ---------------------------------------------------------------------------------

    def _transform_block(
        self, node: ElementNode, children: list[Any], context: ListContext
    ) -> list[Any]:
        items = categorize_items(children)
        style = "normal" if node.tag_name == "p" else node.tag_name
        return [
            create_block(
                self._generate_key(),
                [*items.links, *items.content_item_links],
                style,
                items.spans,
            )
        ]

    def _transform_mark(
        self, node: ElementNode, children: list[Any], context: ListContext
    ) -> list[Any]:
        items = categorize_items(children)
        links = list(items.links)
        content_item_links = list(items.content_item_links)

        kind = classify(node)
        if kind is ElementKind.EXTERNAL_LINK:
            mark = self._generate_key()
            links.append(create_external_link(mark, node.attributes))
        elif kind is ElementKind.ITEM_LINK:
            reference_data = get_item_link_reference_data(node.attributes)
            if reference_data is None:
                raise MissingReferenceError(node.tag_name, "item")
            mark = self._generate_key()
            content_item_links.append(
                create_item_link(mark, reference_data.reference, reference_data.ref_type)
            )
        else:
            mark = node.tag_name

        spans = [{**span, "marks": [*span["marks"], mark]} for span in items.spans]
        # -- link objects travel upward to become markDefs of the nearest enclosing block --
        return [*spans, *links, *content_item_links]

    def _transform_list_item(
        self, node: ElementNode, children: list[Any], context: ListContext
    ) -> list[Any]:
        items = categorize_items(children)
        list_block = create_list_block(
            self._generate_key(),
            context.depth,
            context.list_type,
            [*items.links, *items.content_item_links],
            "normal",
            items.spans,
        )
        return [list_block, *items.list_blocks]

    def _transform_line_break(
        self, node: ElementNode, children: list[Any], context: ListContext
    ) -> list[Any]:
        return [create_span(self._generate_key(), [], "\n")]

    def _transform_image(
        self, node: ElementNode, children: list[Any], context: ListContext
    ) -> list[Any]:
        reference_data = get_asset_reference_data(node.attributes)
        if reference_data is None:
            raise MissingReferenceError(node.tag_name, "asset")

        img = _first_child_element(node, IMG_ELEMENT)
        img_attributes = img.attributes if img is not None else {}
        return [
            create_image_block(
                self._generate_key(),
                reference_data.reference,
                img_attributes.get("src", ""),
                reference_data.ref_type,
                img_attributes.get("alt", ""),
            )
        ]

    def _transform_linked_item(
        self, node: ElementNode, children: list[Any], context: ListContext
    ) -> list[Any]:
        reference_data = get_item_or_component_reference_data(node.attributes)
        if reference_data is None:
            raise MissingReferenceError(node.tag_name, "item or component")

        # -- delivery content names the object kind in `data-rel`, management content in `data-type`
        data_type = node.attributes.get("data-rel") or node.attributes.get("data-type")
        reference = create_reference(reference_data.reference, reference_data.ref_type)
        return [create_component_or_item_block(self._generate_key(), reference, data_type)]

    def _transform_table(
        self, node: ElementNode, children: list[Any], context: ListContext
    ) -> list[Any]:
        return [create_table(self._generate_key(), categorize_items(children).rows)]

    def _transform_table_row(
        self, node: ElementNode, children: list[Any], context: ListContext
    ) -> list[Any]:
        return [create_table_row(self._generate_key(), categorize_items(children).cells)]

    def _transform_table_cell(
        self, node: ElementNode, children: list[Any], context: ListContext
    ) -> list[Any]:
        items = categorize_items(children)
        if items.spans:
            content = [
                create_block(
                    self._generate_key(),
                    [*items.links, *items.content_item_links],
                    "normal",
                    items.spans,
                )
            ]
        else:
            content = children
        return [create_table_cell(self._generate_key(), content)]

    def _pass_through(
        self, node: ElementNode, children: list[Any], context: ListContext
    ) -> list[Any]:
        return children


def _first_child_element(node: ElementNode, tag_name: str) -> Optional[ElementNode]:
    return next(
        (
            child
            for child in node.children
            if isinstance(child, ElementNode) and child.tag_name == tag_name
        ),
        None,
    )


def transform_nodes(
    nodes: Sequence[Node], generate_key: KeyGenerator = random_key
) -> list[PortableTextObject]:
    """Transform already parsed `nodes` into Portable Text."""
    return PortableTextTransformer(generate_key).transform(nodes)


def transform_to_portable_text(
    rich_text: str,
    *,
    engine: Optional[str] = None,
    generate_key: Optional[KeyGenerator] = None,
) -> list[PortableTextObject]:
    """Transform Kontent.ai rich text HTML into a list of Portable Text objects.

    `engine` selects the HTML parsing engine ("lxml" or "bs4", default from the
    `RICH_TEXT_HTML_ENGINE` environment variable). `generate_key` supplies the `_key` of each
    object created and defaults to random keys.

    Raises `UnsupportedTagError` when the rich text contains an element outside the rich text
    vocabulary and `MissingReferenceError` when an image, linked item or item link carries no
    reference. Nothing is returned in either case.
    """
    nodes = parse_html(rich_text, engine)
    portable_text = transform_nodes(nodes, generate_key or random_key)
    logger.debug(
        "transformed %d top-level rich text nodes into %d Portable Text objects",
        len(nodes),
        len(portable_text),
    )
    return portable_text
