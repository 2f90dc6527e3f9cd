"""Public parsing API.

Level 1: module functions (``parse``, ``parse_string``, ``parse_file``,
``serialize``); level 2: the configured ``SDFParser`` class.
"""

from sdfmaze.source import open_source
from sdfmaze.tree import to_string

from .parser import SDFParser, parse, parse_file, parse_string, serialize

__all__ = [
    "SDFParser",
    "open_source",
    "parse",
    "parse_file",
    "parse_string",
    "serialize",
    "to_string",
]
