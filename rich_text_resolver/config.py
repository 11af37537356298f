"""
This module contains variables that can permitted to be tweaked by the system environment. For
example, the parsing engine used when none is requested explicitly. Constants do NOT belong in
this module. Constants are values that are part of the rich text vocabulary (e.g., tag names or
reference attribute names) and should not be altered without making a code change. Constants
should go into `./constants.py`
"""

import os
from dataclasses import dataclass

from rich_text_resolver.constants import ENGINE_LXML


@dataclass
class ENVConfig:
    """class for configuring enviorment parameters"""

    def _get_string(self, var: str, default_value: str = "") -> str:
        """attempt to get the value of var from the os environment; if not present return the
        default_value"""
        return os.environ.get(var, default_value)

    def _get_int(self, var: str, default_value: int) -> int:
        if value := self._get_string(var):
            return int(value)
        return default_value

    def _get_bool(self, var: str, default_value: bool) -> bool:
        if value := self._get_string(var):
            return value.lower() in ("true", "1", "t")
        return default_value

    @property
    def RICH_TEXT_HTML_ENGINE(self) -> str:
        """HTML parsing engine used when a caller does not name one, either "lxml" or "bs4" """
        return self._get_string("RICH_TEXT_HTML_ENGINE", ENGINE_LXML)

    @property
    def RICH_TEXT_KEY_LENGTH(self) -> int:
        """number of characters in a generated Portable Text `_key`"""
        return self._get_int("RICH_TEXT_KEY_LENGTH", 10)

    @property
    def RICH_TEXT_ESCAPE_MARKDOWN_HTML(self) -> bool:
        """when true, the markdown renderer HTML-escapes text the same way the HTML renderer does"""
        return self._get_bool("RICH_TEXT_ESCAPE_MARKDOWN_HTML", False)


env_config = ENVConfig()
