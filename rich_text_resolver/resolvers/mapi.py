"""Render Portable Text back into the rich text dialect accepted by the Kontent.ai Management API.

Only Portable Text that was itself transformed from Management API rich text is supported. The
output is not checked against the API's rich text rules.

Adjacent spans sharing a style are merged under a single style element. When a link spans a style
boundary, the link is therefore closed and reopened around it, so transforming the output again
yields two identical link mark definitions where the original had one. Both renderings display the
same way.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from rich_text_resolver.constants import LINKED_ITEM_OBJECT_TYPE
from rich_text_resolver.errors import MissingMarkDefinitionError
from rich_text_resolver.resolvers.html import link_attributes, resolve_table
from rich_text_resolver.resolvers.serializer import (
    MarkProps,
    PortableTextComponents,
    PortableTextSerializer,
    TypeProps,
    default_components,
    escape_html,
)


def _image_tag(asset_id: str) -> str:
    return f'<img src="#" data-asset-id="{asset_id}">'


def _figure_tag(asset_id: str) -> str:
    return f'<figure data-asset-id="{asset_id}">{_image_tag(asset_id)}</figure>'


def to_management_api_image(image: Mapping[str, Any]) -> str:
    return _figure_tag(escape_html(image["asset"]["_ref"]))


def to_management_api_component_or_item(component_or_item: Mapping[str, Any]) -> str:
    data_type = escape_html(component_or_item.get("dataType") or "")
    reference = escape_html(component_or_item["component"]["_ref"])
    return (
        f'<object type="{LINKED_ITEM_OBJECT_TYPE}" data-type="{data_type}"'
        f' data-id="{reference}"></object>'
    )


def _render_external_link(props: MarkProps) -> str:
    if props.value is None:
        raise MissingMarkDefinitionError("external link")
    return f"<a {link_attributes(props.value)}>{props.children}</a>"


def _render_item_link(props: MarkProps) -> str:
    if props.value is None:
        raise MissingMarkDefinitionError("item link")
    reference = escape_html(props.value["reference"]["_ref"])
    return f'<a data-item-id="{reference}">{props.children}</a>'


def _unknown_mark(props: MarkProps) -> str:
    raise MissingMarkDefinitionError(props.mark_key)


def _render_table(props: TypeProps) -> str:
    return resolve_table(props.value, props.render)


management_api_components: PortableTextComponents = default_components.merge(
    {
        "types": {
            "image": lambda props: to_management_api_image(props.value),
            "componentOrItem": lambda props: to_management_api_component_or_item(props.value),
            "table": _render_table,
        },
        "marks": {
            "contentItemLink": _render_item_link,
            "link": _render_external_link,
            "sub": lambda props: f"<sub>{props.children}</sub>",
            "strong": lambda props: f"<strong>{props.children}</strong>",
            "sup": lambda props: f"<sup>{props.children}</sup>",
            "em": lambda props: f"<em>{props.children}</em>",
        },
        "unknown_mark": _unknown_mark,
    }
)


def to_management_api_format(blocks: Sequence[dict[str, Any]]) -> str:
    """Management-API compatible rich text HTML for Portable Text `blocks`."""
    return PortableTextSerializer(management_api_components).serialize(blocks)
