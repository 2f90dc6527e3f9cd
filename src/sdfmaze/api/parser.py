"""Core parser API with progressive disclosure.

Level 1 is a set of module functions (``parse``, ``parse_string``,
``parse_file``, ``serialize``); level 2 is the configured, reusable
``SDFParser`` class. Errors are raised as ``SDFError`` subclasses and logged
on the way out.
"""

import time
from pathlib import Path
from typing import Any, Dict, Optional, TextIO, Union

from sdfmaze.parsing import parse_source
from sdfmaze.shared import (
    AppConfig,
    ParserConfig,
    SDFError,
    SerializerConfig,
    get_logger,
)
from sdfmaze.source import SourceBuffer, open_source
from sdfmaze.tree import Document, to_string
from sdfmaze.tree.serializer import Destination
from sdfmaze.tree.serializer import serialize as _serialize

InputType = Union[SourceBuffer, str, Path, TextIO]

MS_PER_SECOND = 1000


def parse(
    source: InputType,
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None,
) -> Document:
    """Parse SDF markup from a source buffer, a string, a Path or a text stream.

    Strings are taken as markup text; use ``parse_file`` or pass a ``Path``
    to read a file.

    Args:
        source: Markup to parse
        config: Parser configuration (defaults to ``ParserConfig()``)
        correlation_id: Optional correlation ID for request tracking

    Returns:
        Document owning the parsed tree

    Raises:
        SDFSyntaxError: If the markup is malformed
        SDFIOError: If a file cannot be read

    Examples:
        >>> document = parse("<a x='1'><b>hi</b></a>")
        >>> document.root.children.content
        'hi'
    """
    config = config or ParserConfig()
    logger = get_logger(__name__, correlation_id, "parse")

    if isinstance(source, Path):
        buffer = open_source(source, config.encoding)
    elif isinstance(source, SourceBuffer):
        buffer = source
    elif isinstance(source, str):
        buffer = SourceBuffer.from_string(source)
    elif hasattr(source, "read"):
        buffer = SourceBuffer.from_string(
            source.read(), getattr(source, "name", "<stream>")
        )
    else:
        raise TypeError(f"Unsupported source type: {type(source).__name__}")

    try:
        return parse_source(buffer, config, correlation_id)
    except SDFError as e:
        logger.error(
            "Parse failed",
            extra={"source": buffer.name, "error_kind": e.kind.name}
        )
        raise


def parse_string(
    text: str,
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None,
) -> Document:
    """Parse SDF markup held in a string."""
    return parse(SourceBuffer.from_string(text), config, correlation_id)


def parse_file(
    path: Union[str, Path],
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None,
) -> Document:
    """Read and parse an SDF file."""
    return parse(Path(path), config, correlation_id)


def serialize(
    document: Document,
    destination: Destination = None,
    config: Optional[SerializerConfig] = None,
) -> None:
    """Write a document to a path, a text stream, or stdout when None."""
    _serialize(document, destination, config)


class SDFParser:
    """Configured parser for repeated use.

    Keeps one configuration and usage statistics across parses.

    Examples:
        >>> parser = SDFParser(AppConfig.compact())
        >>> parser.to_string(parser.parse("<a><b/></a>"))
        '<a>\\n  <b/>\\n</a>\\n'
    """

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        self.config = config or AppConfig.default()
        self.correlation_id = correlation_id or self.config.correlation_id
        self.logger = get_logger(__name__, self.correlation_id, "sdf_parser_api")

        self._parse_count = 0
        self._successful_parses = 0
        self._total_processing_time = 0.0

    def parse(self, source: InputType) -> Document:
        """Parse ``source`` with this parser's configuration."""
        start_time = time.time()
        self._parse_count += 1
        try:
            document = parse(source, self.config.parser, self.correlation_id)
        finally:
            self._total_processing_time += (time.time() - start_time) * MS_PER_SECOND

        self._successful_parses += 1
        return document

    def parse_file(self, path: Union[str, Path]) -> Document:
        return self.parse(Path(path))

    def serialize(self, document: Document, destination: Destination = None) -> None:
        _serialize(document, destination, self.config.serializer)

    def to_string(self, document: Document) -> str:
        return to_string(document, self.config.serializer)

    @property
    def statistics(self) -> Dict[str, Any]:
        """Get parser usage statistics."""
        return {
            "total_parses": self._parse_count,
            "successful_parses": self._successful_parses,
            "failed_parses": self._parse_count - self._successful_parses,
            "total_processing_time_ms": self._total_processing_time,
            "average_processing_time_ms": (
                self._total_processing_time / self._parse_count
                if self._parse_count > 0 else 0.0
            ),
            "correlation_id": self.correlation_id,
        }

    def reset_statistics(self) -> None:
        """Reset parser usage statistics."""
        self._parse_count = 0
        self._successful_parses = 0
        self._total_processing_time = 0.0
        self.logger.info("Parser statistics reset")
