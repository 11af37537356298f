"""Generic DOM adapter.

`parse_html()` turns a rich text HTML string into engine-neutral `TextNode` / `ElementNode` trees.
Two engines are available, `"lxml"` and `"bs4"`; for rich text produced by the editor both yield
identical trees.
"""

from __future__ import annotations

import re
from typing import Callable, Optional

from rich_text_resolver.config import env_config
from rich_text_resolver.constants import ENGINE_BS4, ENGINE_LXML, NEWLINE_AND_WHITESPACE_PATTERN
from rich_text_resolver.documents.dom import Node
from rich_text_resolver.logger import logger
from rich_text_resolver.parsers import bs4, lxml

NEWLINE_AND_WHITESPACE_RE = re.compile(NEWLINE_AND_WHITESPACE_PATTERN)

_ENGINES: dict[str, Callable[[str], list[Node]]] = {
    ENGINE_LXML: lxml.parse,
    ENGINE_BS4: bs4.parse,
}


def normalize_rich_text(html: str) -> str:
    """Remove each newline together with the whitespace run that follows it."""
    return NEWLINE_AND_WHITESPACE_RE.sub("", html)


def parse_html(html: str, engine: Optional[str] = None) -> list[Node]:
    """Parse rich text `html` into the list of its top-level nodes.

    `engine` is "lxml" or "bs4"; when omitted the `RICH_TEXT_HTML_ENGINE` environment setting is
    used. Comments are discarded by both engines.
    """
    engine = engine or env_config.RICH_TEXT_HTML_ENGINE
    parse = _ENGINES.get(engine)
    if parse is None:
        raise ValueError(
            f"Unknown HTML engine {engine!r}, expected one of: {', '.join(sorted(_ENGINES))}"
        )

    logger.detail(f"parsing rich text with the {engine} engine")  # type: ignore
    return parse(normalize_rich_text(html))
