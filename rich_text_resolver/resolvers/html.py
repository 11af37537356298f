"""Render Portable Text transformed from Kontent.ai rich text as HTML."""

from __future__ import annotations

from typing import Any, Callable, Mapping, Optional, Sequence

from rich_text_resolver.resolvers.serializer import (
    MarkProps,
    PortableTextSerializer,
    default_components,
    escape_html,
)

BlocksResolver = Callable[[Sequence[dict[str, Any]]], str]


def to_html_image_default(image: Mapping[str, Any]) -> str:
    asset = image["asset"]
    src, alt = escape_html(asset.get("url", "")), escape_html(asset.get("alt", ""))
    return f'<img src="{src}" alt="{alt}">'


def resolve_image(
    image: Mapping[str, Any],
    resolver: Callable[[Mapping[str, Any]], str] = to_html_image_default,
) -> str:
    return resolver(image)


def resolve_table(table: Mapping[str, Any], resolve_blocks: BlocksResolver) -> str:
    """HTML table for a Portable Text `table`, each cell rendered with `resolve_blocks`."""
    rows = "".join(
        "<tr>"
        + "".join(f"<td>{resolve_blocks(cell['content'])}</td>" for cell in row["cells"])
        + "</tr>"
        for row in table["rows"]
    )
    return f"<table><tbody>{rows}</tbody></table>"


def link_attributes(link: Mapping[str, Any]) -> str:
    """The attributes of a `link` mark definition rendered as `name="value"` pairs."""
    return " ".join(
        f'{name}="{escape_html(str(value))}"'
        for name, value in link.items()
        if name not in ("_type", "_key")
    )


def _render_link(props: MarkProps) -> str:
    attributes = link_attributes(props.value or {})
    return f"<a {attributes}>{props.children}</a>" if attributes else f"<a>{props.children}</a>"


kontent_html_components = default_components.merge(
    {
        "types": {
            "image": lambda props: resolve_image(props.value),
            "table": lambda props: resolve_table(props.value, props.render),
        },
        "marks": {
            "link": _render_link,
            "sup": lambda props: f"<sup>{props.children}</sup>",
            "sub": lambda props: f"<sub>{props.children}</sub>",
        },
    }
)


def to_html(
    blocks: Sequence[dict[str, Any]],
    components: Optional[Mapping[str, Any]] = None,
) -> str:
    """Render Portable Text `blocks` as HTML.

    `components` overrides individual renderers, e.g. `{"types": {"componentOrItem": fn}}` or
    `{"marks": {"contentItemLink": fn}}`; see `PortableTextComponents` for the groups. Each
    component receives a props tuple and returns an HTML string. Objects without a component,
    such as linked items, render as a hidden placeholder.
    """
    return PortableTextSerializer(kontent_html_components.merge(components)).serialize(blocks)
