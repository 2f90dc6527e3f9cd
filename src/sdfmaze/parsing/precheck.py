"""Bracket alternation guard run once before the full parse."""

from enum import Enum, auto

from sdfmaze.shared import SyntaxImbalanceError
from sdfmaze.source import SourceBuffer


class BracketState(Enum):
    """Last angle bracket seen by the pre-checker."""

    BEGIN = auto()
    ANGLE_OPEN = auto()
    ANGLE_CLOSE = auto()


def check_syntax(source: SourceBuffer) -> None:
    """Verify that ``<`` and ``>`` alternate across the whole source.

    Tag names are not examined here; pairing is validated by the parser.

    Raises:
        SyntaxImbalanceError: On two ``<`` without a ``>`` in between, or two
            ``>`` without a ``<`` in between
    """
    state = BracketState.BEGIN

    for offset, char in enumerate(source.content):
        if char == "<":
            if state is BracketState.ANGLE_OPEN:
                _fail(source, offset, char, "'<' found before the previous tag was closed")
            state = BracketState.ANGLE_OPEN
        elif char == ">":
            if state is BracketState.ANGLE_CLOSE:
                _fail(source, offset, char, "'>' found without a matching '<'")
            state = BracketState.ANGLE_CLOSE


def is_balanced(source: SourceBuffer) -> bool:
    """Boolean form of ``check_syntax``."""
    try:
        check_syntax(source)
    except SyntaxImbalanceError:
        return False
    return True


def _fail(source: SourceBuffer, offset: int, token: str, message: str) -> None:
    line, column = source.locate(offset)
    raise SyntaxImbalanceError(message, token=token, offset=offset,
                               line=line, column=column)
