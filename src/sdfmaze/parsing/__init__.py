"""Parsing engine for SDF markup.

Key Components:
    SDFDocumentParser: State machine building a Document from a SourceBuffer
    ParserState: States of the machine
    Scanner: Explicit scan cursor with the feature-extraction primitive
    TagStack: LIFO validating open/close tag pairing
    check_syntax: Bracket-alternation pre-check
"""

from .parser import ParserState, SDFDocumentParser, parse_source
from .precheck import BracketState, check_syntax, is_balanced
from .scanner import Scanner
from .tagstack import TagStack

__all__ = [
    "BracketState",
    "ParserState",
    "SDFDocumentParser",
    "Scanner",
    "TagStack",
    "check_syntax",
    "is_balanced",
    "parse_source",
]
