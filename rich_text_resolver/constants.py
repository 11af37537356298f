from enum import Enum


class ReferenceType(str, Enum):
    """The three mutually exclusive ways a rich text element can address content."""

    ID = "id"
    EXTERNAL_ID = "external-id"
    CODENAME = "codename"


class ListType:
    NUMBER = "number"
    BULLET = "bullet"
    UNKNOWN = "unknown"


ENGINE_LXML = "lxml"
ENGINE_BS4 = "bs4"
ENGINES = (ENGINE_LXML, ENGINE_BS4)

# -- editor formatting artifact: a newline and the indentation that follows it --
NEWLINE_AND_WHITESPACE_PATTERN = r"\n\s*"

# -- rich text vocabulary --
BLOCK_ELEMENTS = ("p", "h1", "h2", "h3", "h4", "h5", "h6")
TEXT_STYLE_ELEMENTS = ("strong", "em", "sub", "sup", "code")
LIST_TYPE_ELEMENTS = ("ul", "ol")
LIST_ITEM_ELEMENT = "li"
LINE_BREAK_ELEMENT = "br"
ANCHOR_ELEMENT = "a"
ASSET_ELEMENT = "figure"
IMG_ELEMENT = "img"
OBJECT_ELEMENT = "object"
TABLE_ELEMENT = "table"
TABLE_ROW_ELEMENT = "tr"
TABLE_CELL_ELEMENT = "td"
TABLE_BODY_ELEMENT = "tbody"
IGNORED_ELEMENTS = (IMG_ELEMENT, TABLE_BODY_ELEMENT)

# -- elements written without an end tag --
VOID_ELEMENTS = (
    "area",
    "br",
    "col",
    "embed",
    "hr",
    "img",
    "input",
    "link",
    "meta",
    "source",
    "wbr",
)

# -- `type` attribute value identifying a linked item or component placeholder --
LINKED_ITEM_OBJECT_TYPE = "application/kenticocloud"

# -- reference attributes, in priority order --
ASSET_REFERENCE_ATTRIBUTES = (
    ("data-asset-id", ReferenceType.ID),
    ("data-asset-external-id", ReferenceType.EXTERNAL_ID),
    ("data-asset-codename", ReferenceType.CODENAME),
)
ITEM_OR_COMPONENT_REFERENCE_ATTRIBUTES = (
    ("data-id", ReferenceType.ID),
    ("data-external-id", ReferenceType.EXTERNAL_ID),
    ("data-codename", ReferenceType.CODENAME),
)
ITEM_LINK_REFERENCE_ATTRIBUTES = (
    ("data-item-id", ReferenceType.ID),
    ("data-item-external-id", ReferenceType.EXTERNAL_ID),
    ("data-item-codename", ReferenceType.CODENAME),
)

# -- decorators the Portable Text mark-tree sorts after unknown marks, in this order --
KNOWN_DECORATORS = ("strong", "em", "code", "underline", "strike-through")
