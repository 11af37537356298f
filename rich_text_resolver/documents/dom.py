"""Engine-neutral DOM model produced by the parsers in `rich_text_resolver.parsers`.

Both parsing engines reduce their native trees to these two node shapes so everything downstream
of parsing is independent of the engine that produced the tree.
"""

from __future__ import annotations

import dataclasses as dc
from types import MappingProxyType
from typing import Mapping, Union

from typing_extensions import TypeAlias


@dc.dataclass(frozen=True)
class TextNode:
    """A run of character data."""

    content: str

    @property
    def type(self) -> str:
        return "text"


@dc.dataclass(frozen=True)
class ElementNode:
    """An element with a lower-case tag name, its attributes and its children in document order."""

    tag_name: str
    attributes: Mapping[str, str] = dc.field(default_factory=dict)
    children: tuple[Node, ...] = ()

    def __post_init__(self):
        # -- read-only copies; tag names are always lower-case --
        object.__setattr__(self, "tag_name", self.tag_name.lower())
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))
        object.__setattr__(self, "children", tuple(self.children))

    def __hash__(self) -> int:
        # -- attribute order does not affect equality so it must not affect the hash either --
        return hash((self.tag_name, frozenset(self.attributes.items()), self.children))

    @property
    def type(self) -> str:
        return "tag"


Node: TypeAlias = Union[TextNode, ElementNode]
