"""Positional scanner shared by the parser's transitions.

The scanner owns the scan cursor explicitly: ``{source, position}``. Every
search is bounded by the buffer length, so a truncated document makes the
scanner raise instead of running past the end of the text.
"""

from typing import NoReturn, Optional, Type

from sdfmaze.shared import SDFSyntaxError, UnexpectedTokenError
from sdfmaze.source import Label, SourceBuffer

# Characters separating a tag name or attribute from what follows
WHITESPACE = " \t\r\n"
TAG_NAME_STOPS = WHITESPACE + ">/"
ATTRIBUTE_NAME_STOPS = WHITESPACE + "=<>/"
ATTRIBUTE_VALUE_STOPS = WHITESPACE + ">/"
CONTENT_STOPS = "<"
CLOSE_NAME_STOPS = ">"


class Scanner:
    """Cursor over a ``SourceBuffer``."""

    def __init__(self, source: SourceBuffer, position: int = 0) -> None:
        self.source = source
        self.text = source.content
        self.length = len(source.content)
        self.position = position

    @property
    def at_end(self) -> bool:
        return self.position >= self.length

    def peek(self, size: int = 1) -> str:
        """Return up to ``size`` characters at the cursor without consuming them."""
        return self.text[self.position:self.position + size]

    def startswith(self, token: str) -> bool:
        return self.text.startswith(token, self.position)

    def advance(self, count: int = 1) -> None:
        self.position = min(self.position + count, self.length)

    def skip_whitespace(self) -> None:
        while self.position < self.length and self.text[self.position] in WHITESPACE:
            self.position += 1

    def find_any(self, stops: str, start: Optional[int] = None) -> int:
        """Index of the first character in ``stops`` at or after ``start``, or -1."""
        index = self.position if start is None else start
        while index < self.length:
            if self.text[index] in stops:
                return index
            index += 1
        return -1

    def next_tag_position(self) -> int:
        """Offset of the next ``<`` without moving the cursor, or -1."""
        return self.text.find("<", self.position)

    def go_next_tag(self) -> None:
        """Move the cursor to the next ``<``, or to the end of the buffer."""
        index = self.next_tag_position()
        self.position = self.length if index == -1 else index

    def skip_past(self, char: str) -> None:
        """Move the cursor just past the next ``char``."""
        index = self.text.find(char, self.position)
        if index == -1:
            self.fail(UnexpectedTokenError, f"expected '{char}' before end of input",
                      self.peek(2) or "<EOF>")
        self.position = index + 1

    def read_until(self, stops: str) -> Label:
        """Read from the cursor up to (not including) the first stop character.

        The cursor is left on the stop character.
        """
        end = self.find_any(stops)
        if end == -1:
            self.fail(UnexpectedTokenError,
                      f"unterminated token, expected one of {stops.strip()!r}",
                      self.text[self.position:self.position + 20] or "<EOF>")
        label = self.text[self.position:end]
        self.position = end
        return label

    def extract(self, stops: str) -> Label:
        """Extract the feature following the delimiter under the cursor.

        The text strictly between the delimiter and the first stop character
        becomes the returned label; the cursor is left on the stop character.
        """
        self.advance(1)
        return self.read_until(stops)

    def fail(
        self,
        error_type: Type[SDFSyntaxError],
        message: str,
        token: Optional[str] = None,
        offset: Optional[int] = None,
    ) -> NoReturn:
        """Raise ``error_type`` located at ``offset`` (defaults to the cursor)."""
        where = self.position if offset is None else offset
        line, column = self.source.locate(where)
        raise error_type(message, token=token, offset=where, line=line, column=column)
