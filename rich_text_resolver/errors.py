class RichTextResolverError(Exception):
    """Base class for errors raised while resolving Kontent.ai rich text."""


class UnsupportedTagError(RichTextResolverError, ValueError):
    """Error raised when rich text contains an element outside the supported vocabulary."""

    def __init__(self, tag_name: str):
        self.tag_name = tag_name
        self.message = f"No transformer specified for tag: {tag_name}"
        super().__init__(self.message)


class MissingReferenceError(RichTextResolverError, ValueError):
    """Error raised when an asset, item or component element carries no usable reference."""

    def __init__(self, element: str, expected: str):
        self.element = element
        self.message = f"Error transforming <{element}> tag: Missing a valid {expected} reference."
        super().__init__(self.message)


class ParserStructureError(RichTextResolverError):
    """Error raised when a parsing engine does not produce a rooted document."""


class UnknownPortableTextTypeError(RichTextResolverError, TypeError):
    """Error raised when a Portable Text object of an unexpected `_type` is encountered."""

    def __init__(self, type_name: object):
        self.type_name = type_name
        self.message = f"Unknown type encountered: {type_name!r}"
        super().__init__(self.message)


class MissingMarkDefinitionError(RichTextResolverError, ValueError):
    """Error raised when a span mark points to a mark definition its block does not have."""

    def __init__(self, mark_type: str):
        self.mark_type = mark_type
        self.message = f"Mark definition for {mark_type} not found."
        super().__init__(self.message)
