"""Render Portable Text transformed from Kontent.ai rich text as Markdown.

Markdown has no syntax for superscript, subscript or line breaks inside a paragraph, so those are
rendered as inline HTML. Tables become pipe tables; a cell holding more than one block cannot be
expressed in a pipe table and is rendered as HTML instead.
"""

from __future__ import annotations

import re
from typing import Any, Callable, Mapping, Optional, Sequence

from rich_text_resolver.config import env_config
from rich_text_resolver.errors import MissingMarkDefinitionError
from rich_text_resolver.resolvers.serializer import (
    BlockProps,
    ListItemProps,
    ListProps,
    MarkProps,
    PortableTextComponents,
    PortableTextSerializer,
    TypeProps,
    default_components,
)

LIST_INDENT = "   "

_NON_BREAKING_SPACE_RE = re.compile(r"&nbsp;|\xa0")


def sanitize_white_spaces(text: str, marker: str) -> str:
    """Wrap `text` in `marker` keeping its leading and trailing whitespace outside the markers.

    `**bold **` is not bold in Markdown, so `"bold "` renders as `**bold** `. Non-breaking spaces
    are normalized to plain spaces first. Whitespace-only text is returned unwrapped.
    """
    normalized = _NON_BREAKING_SPACE_RE.sub(" ", text)
    stripped = normalized.strip()
    if not stripped:
        return normalized

    start = len(normalized) - len(normalized.lstrip())
    end = len(normalized.rstrip())
    return f"{' ' * start}{marker}{stripped}{marker}{' ' * (len(normalized) - end)}"


def _heading(level: int, suffix: str) -> Callable[[BlockProps], str]:
    prefix = "#" * level

    def render(props: BlockProps) -> str:
        return f"{prefix} {props.children}{suffix}"

    return render


def _render_list(props: ListProps) -> str:
    """Top-level lists end with a blank line and lose their leading newline when they come first."""
    level = props.value.get("level") or 1
    children = props.children
    if level == 1 and props.index == 0:
        children = children.lstrip()
    if level == 1:
        children = f"{children}\n\n"
    return children


def _list_item(bullet: str) -> Callable[[ListItemProps], str]:
    def render(props: ListItemProps) -> str:
        indent = LIST_INDENT * ((props.value.get("level") or 1) - 1)
        return f"\n{indent}{bullet} {props.children}"

    return render


def _render_image(props: TypeProps) -> str:
    asset = props.value["asset"]
    return f"![{asset.get('alt') or ''}]({asset.get('url', '')})\n\n"


def _render_link(props: MarkProps) -> str:
    if not props.value:
        raise MissingMarkDefinitionError(props.mark_type)
    return f"[{props.children}]({props.value.get('href', '')})"


def resolve_table_to_markdown(table: Mapping[str, Any]) -> str:
    """A Markdown pipe table, the first row serving as the header row."""

    def render_cell(cell: Mapping[str, Any]) -> str:
        content = cell["content"]
        if len(content) > 1:
            rendered = PortableTextSerializer(default_components).serialize(content)
        else:
            rendered = _serializer(markdown_table_components).serialize(content)
        return f"| {rendered} "

    def render_row(row: Mapping[str, Any]) -> str:
        return "".join(render_cell(cell) for cell in row["cells"]) + "|\n"

    markdown = ""
    for index, row in enumerate(table["rows"]):
        markdown += render_row(row)
        if index == 0:
            markdown += "".join("| --- " for _ in row["cells"]) + "|\n"
    return f"{markdown}\n"


markdown_components = default_components.merge(
    {
        "block": {
            **{f"h{level}": _heading(level, "\n\n") for level in range(1, 7)},
            "normal": lambda props: f"{props.children}\n\n",
        },
        "list": {"bullet": _render_list, "number": _render_list},
        "list_item": {"bullet": _list_item("-"), "number": _list_item("1.")},
        "types": {
            "image": _render_image,
            "table": lambda props: resolve_table_to_markdown(props.value),
        },
        "marks": {
            "strong": lambda props: sanitize_white_spaces(props.children, "**"),
            "em": lambda props: sanitize_white_spaces(props.children, "_"),
            "code": lambda props: f"`{props.children}`",
            "link": _render_link,
            "sup": lambda props: f"<sup>{props.children}</sup>",
            "sub": lambda props: f"<sub>{props.children}</sub>",
        },
    }
)

# -- inside a table cell blocks carry no trailing blank line --
markdown_table_components = markdown_components.merge(
    {
        "block": {
            **{f"h{level}": _heading(level, "") for level in range(1, 7)},
            "normal": lambda props: props.children,
        },
    }
)


def _serializer(components: PortableTextComponents) -> PortableTextSerializer:
    if env_config.RICH_TEXT_ESCAPE_MARKDOWN_HTML:
        return PortableTextSerializer(components)
    return PortableTextSerializer(components, escape_text=str)


def to_markdown(
    blocks: Sequence[dict[str, Any]],
    components: Optional[Mapping[str, Any]] = None,
) -> str:
    """Render Portable Text `blocks` as Markdown.

    `components` overrides individual renderers the same way as for `to_html()`, e.g. to render
    linked items with `{"types": {"componentOrItem": fn}}`.

    Text is emitted as-is unless `RICH_TEXT_ESCAPE_MARKDOWN_HTML` is set, in which case it is
    HTML-escaped like the HTML renderer does.
    """
    return _serializer(markdown_components.merge(components)).serialize(blocks)

