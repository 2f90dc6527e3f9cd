"""State-machine parser turning SDF markup into an element tree.

The parser scans the source left to right. At each position it classifies the
next lexeme by lookahead and dispatches to a transition handler:

    ``<!``  comment             ``</``  closing tag
    ``/>``  self-closing end    ``>``   end of an opening tag
    ``<``   new opening tag

Handlers build the tree through a cursor element: a new tag becomes a child of
the cursor right after an opening tag was completed, or its sibling right
after a subtree was closed. A ``TagStack`` validates open/close pairing.
Every error aborts the whole parse.
"""

import time
from enum import Enum, auto
from typing import Optional

from sdfmaze.shared import (
    DepthLimitError,
    EmptyDocumentError,
    MismatchedCloseTagError,
    ParserConfig,
    PerformanceMetrics,
    UnclosedTagError,
    UnexpectedTokenError,
    UnmatchedCloseTagError,
    get_logger,
)
from sdfmaze.source import SourceBuffer
from sdfmaze.tree import Attribute, Document, Element

from .precheck import check_syntax
from .scanner import (
    ATTRIBUTE_NAME_STOPS,
    ATTRIBUTE_VALUE_STOPS,
    CLOSE_NAME_STOPS,
    CONTENT_STOPS,
    TAG_NAME_STOPS,
    Scanner,
)
from .tagstack import TagStack


class ParserState(Enum):
    """States of the tree-building state machine."""

    START = auto()       # nothing parsed yet
    TAG_OPEN = auto()    # inside "<name attrs", before ">" or "/>"
    TAG_OPENED = auto()  # just consumed ">" of an opening tag
    TAG_CLOSED = auto()  # just finished a subtree ("</name>" or "/>")


class SDFDocumentParser:
    """Single-use parser for one ``SourceBuffer``.

    Attributes:
        state: Current state of the machine
        stack: Open tag names awaiting their close tag
        scanner: Cursor over the source
    """

    def __init__(
        self,
        source: SourceBuffer,
        config: Optional[ParserConfig] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        self.source = source
        self.config = config or ParserConfig()
        self.logger = get_logger(__name__, correlation_id, "sdf_parser")

        self.scanner = Scanner(source)
        self.stack = TagStack()
        self.state = ParserState.START
        self._root: Optional[Element] = None
        self._element: Optional[Element] = None
        self._elements = 0
        self._attributes = 0

    def parse(self) -> Document:
        """Run the state machine over the whole source.

        Returns:
            Document owning the parsed root element

        Raises:
            SDFSyntaxError: Any subclass, on the first problem found
        """
        start_time = time.time()
        self.logger.debug(
            "Starting parse",
            extra={"source": self.source.name, "characters": self.source.length}
        )

        if self.config.run_precheck:
            check_syntax(self.source)

        scanner = self.scanner
        # Text before the first tag carries no structure
        scanner.go_next_tag()

        while not scanner.at_end:
            if scanner.startswith("<!"):
                self._on_comment()
            elif scanner.startswith("</"):
                self._on_close_tag()
            elif scanner.startswith("/>"):
                self._on_self_close()
            elif scanner.startswith(">"):
                self._on_open_tag_end()
            elif scanner.startswith("<"):
                self._on_open_tag()
            else:
                scanner.fail(UnexpectedTokenError,
                             f"unexpected character {scanner.peek()!r} in tag",
                             scanner.peek())

        self._check_end_of_input()

        metrics = PerformanceMetrics(
            processing_time_ms=(time.time() - start_time) * 1000,
            characters_processed=self.source.length,
            elements_built=self._elements,
            attributes_built=self._attributes,
        )
        self.logger.debug(
            "Parse complete",
            extra={
                "source": self.source.name,
                "elements": self._elements,
                "processing_time_ms": metrics.processing_time_ms,
            }
        )
        return Document(root=self._root, source_name=self.source.name, metrics=metrics)

    # Transition handlers

    def _on_comment(self) -> None:
        if self.state is ParserState.TAG_OPEN:
            self.scanner.fail(UnexpectedTokenError, "comment inside a tag", "<!")

        self.scanner.skip_past(">")
        self.scanner.go_next_tag()

    def _on_close_tag(self) -> None:
        scanner = self.scanner
        offset = scanner.position
        if self.state is ParserState.TAG_OPEN:
            scanner.fail(UnexpectedTokenError, "close tag inside a tag", "</")

        scanner.advance(2)
        name = self._read_in_tag(CLOSE_NAME_STOPS, offset).strip()

        if self.stack.is_empty():
            scanner.fail(UnmatchedCloseTagError,
                         f"close tag </{name}> without an open tag", name, offset)

        expected = self.stack.peek()
        if expected != name:
            line, column = self.source.locate(offset)
            raise MismatchedCloseTagError(
                f"close tag </{name}> does not match open tag <{expected}>",
                expected=expected, token=name, offset=offset, line=line, column=column,
            )
        self.stack.pop()

        # After a completed subtree the cursor still points at its last child
        if self.state is ParserState.TAG_CLOSED:
            self._element = self._element.father

        scanner.go_next_tag()
        self.state = ParserState.TAG_CLOSED

    def _on_self_close(self) -> None:
        if self.state is not ParserState.TAG_OPEN:
            self.scanner.fail(UnexpectedTokenError, "'/>' outside an opening tag", "/>")

        self.scanner.go_next_tag()
        self.state = ParserState.TAG_CLOSED

    def _on_open_tag_end(self) -> None:
        scanner = self.scanner
        if self.state is not ParserState.TAG_OPEN:
            scanner.fail(UnexpectedTokenError, "'>' outside an opening tag", ">")

        next_tag = scanner.next_tag_position()
        if next_tag == -1:
            scanner.fail(UnclosedTagError,
                         f"end of input with <{self._element.name}> still open",
                         self._element.name)

        if scanner.text.startswith("</", next_tag):
            self._element.content = scanner.extract(CONTENT_STOPS)
        else:
            scanner.position = next_tag

        self.stack.push(self._element.name)
        self.state = ParserState.TAG_OPENED

    def _on_open_tag(self) -> None:
        scanner = self.scanner
        if self.state is ParserState.TAG_OPEN:
            scanner.fail(UnexpectedTokenError, "'<' inside an opening tag", "<")

        offset = scanner.position
        scanner.advance(1)
        name = self._read_in_tag(TAG_NAME_STOPS, offset)
        if not name:
            scanner.fail(UnexpectedTokenError, "missing tag name", "<", offset)

        element = Element(name=name)
        if self.state is ParserState.START:
            self._root = element
        elif self.state is ParserState.TAG_CLOSED:
            self._element.sibling = element
            element.father = self._element.father
        else:
            # Open ancestors are exactly the names on the stack
            if len(self.stack) >= self.config.max_depth:
                scanner.fail(DepthLimitError,
                             f"nesting deeper than {self.config.max_depth} levels",
                             name, offset)
            self._element.children = element
            element.father = self._element

        self._element = element
        self._elements += 1
        self.state = ParserState.TAG_OPEN

        self._extract_attributes(element)
        scanner.skip_whitespace()

    def _extract_attributes(self, element: Element) -> None:
        """Read ``name=value`` pairs until ``>`` or ``/`` is reached.

        Blanks around ``=`` are skipped. A ``<`` also ends the list; the main
        loop then reports it as a token illegal inside a tag.
        """
        scanner = self.scanner
        while True:
            self._skip_whitespace_in_tag(element)
            if scanner.peek() in "<>/":
                return

            offset = scanner.position
            name = self._read_in_tag(ATTRIBUTE_NAME_STOPS, offset, element.name)
            self._skip_whitespace_in_tag(element)
            if not name or not scanner.startswith("="):
                scanner.fail(UnexpectedTokenError, "malformed attribute name",
                             name or scanner.peek(), offset)

            scanner.advance(1)
            self._skip_whitespace_in_tag(element)
            value = self._read_in_tag(ATTRIBUTE_VALUE_STOPS, offset, element.name)
            element.attributes.append(Attribute(name=name, value=value))
            self._attributes += 1

    def _skip_whitespace_in_tag(self, element: Element) -> None:
        self.scanner.skip_whitespace()
        if self.scanner.at_end:
            self.scanner.fail(UnclosedTagError, f"unterminated tag <{element.name}",
                              element.name)

    def _read_in_tag(self, stops: str, offset: int, tag: Optional[str] = None) -> str:
        """Read up to a stop character that must occur before end of input.

        Args:
            stops: Characters ending the read
            offset: Position reported when the input ends first
            tag: Name of the tag being read, when already known
        """
        scanner = self.scanner
        if scanner.find_any(stops) == -1:
            if tag is None:
                tag = scanner.text[offset:].lstrip("</").strip()
            scanner.fail(UnclosedTagError, f"unterminated tag <{tag}", tag, offset)
        return scanner.read_until(stops)

    def _check_end_of_input(self) -> None:
        if self._root is None:
            self.scanner.fail(EmptyDocumentError, "document contains no element",
                              "<EOF>")
        if not self.stack.is_empty():
            self.scanner.fail(UnclosedTagError,
                              f"end of input with <{self.stack.peek()}> still open",
                              self.stack.peek())


def parse_source(
    source: SourceBuffer,
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None,
) -> Document:
    """Parse one source into a document."""
    return SDFDocumentParser(source, config, correlation_id).parse()
