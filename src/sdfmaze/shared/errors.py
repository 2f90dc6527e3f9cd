"""Exception taxonomy for SDF parsing, mutation and serialization.

Every failure inside the library is raised as an ``SDFError`` subclass and
propagated unchanged to the nearest caller. There is no partial-document
recovery: a parse either yields a complete tree or raises.
"""

from enum import Enum, auto
from typing import Any, Dict, Optional

from .result import DiagnosticEntry, DiagnosticSeverity


class ErrorKind(Enum):
    """Kinds of failure reported by the engine."""

    IO_ERROR = auto()
    SYNTAX_IMBALANCE = auto()
    UNEXPECTED_TOKEN = auto()
    UNMATCHED_CLOSE_TAG = auto()
    MISMATCHED_CLOSE_TAG = auto()
    TAG_NOT_FOUND = auto()
    ATTRIBUTE_NOT_FOUND = auto()
    DOCUMENT_CLOSED = auto()


class SDFError(Exception):
    """Base exception for all engine errors."""

    kind: ErrorKind = ErrorKind.UNEXPECTED_TOKEN
    severity: DiagnosticSeverity = DiagnosticSeverity.ERROR
    component: str = "sdfmaze"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def _position(self) -> Optional[Dict[str, int]]:
        return None

    def _details(self) -> Dict[str, Any]:
        return {"kind": self.kind.name}

    def to_diagnostic(self, correlation_id: Optional[str] = None) -> DiagnosticEntry:
        """Convert the error into a diagnostic entry for reporting."""
        return DiagnosticEntry(
            severity=self.severity,
            message=self.message,
            component=self.component,
            position=self._position(),
            details=self._details(),
            correlation_id=correlation_id,
        )


class SDFIOError(SDFError):
    """Raised when a source cannot be read or a destination cannot be written."""

    kind = ErrorKind.IO_ERROR
    severity = DiagnosticSeverity.CRITICAL
    component = "source"

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path

    def _details(self) -> Dict[str, Any]:
        details = super()._details()
        if self.path is not None:
            details["path"] = self.path
        return details


class SDFSyntaxError(SDFError):
    """Base class of every error raised while checking or parsing markup.

    Attributes:
        token: Offending token (or a short description of it)
        offset: Character offset in the source where the problem was found
        line: 1-based line number of ``offset`` when the source is known
        column: 1-based column number of ``offset`` when the source is known
    """

    component = "parser"

    def __init__(
        self,
        message: str,
        token: Optional[str] = None,
        offset: Optional[int] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ) -> None:
        location = ""
        if line is not None and column is not None:
            location = f" (line {line}, column {column})"
        elif offset is not None:
            location = f" (offset {offset})"
        super().__init__(f"{message}{location}")
        self.reason = message
        self.token = token
        self.offset = offset
        self.line = line
        self.column = column

    def _position(self) -> Optional[Dict[str, int]]:
        if self.offset is None:
            return None
        position = {"offset": self.offset}
        if self.line is not None and self.column is not None:
            position["line"] = self.line
            position["column"] = self.column
        return position

    def _details(self) -> Dict[str, Any]:
        details = super()._details()
        if self.token is not None:
            details["token"] = self.token
        return details


class SyntaxImbalanceError(SDFSyntaxError):
    """Raised when ``<`` and ``>`` do not alternate."""

    kind = ErrorKind.SYNTAX_IMBALANCE
    component = "precheck"


class UnclosedTagError(SyntaxImbalanceError):
    """Raised when input ends while tags are still open."""

    component = "parser"


class EmptyDocumentError(SyntaxImbalanceError):
    """Raised when the source contains no element at all."""

    component = "parser"


class UnexpectedTokenError(SDFSyntaxError):
    """Raised when a token is illegal in the current parser state."""

    kind = ErrorKind.UNEXPECTED_TOKEN


class DepthLimitError(UnexpectedTokenError):
    """Raised when elements nest deeper than the configured limit."""


class UnmatchedCloseTagError(SDFSyntaxError):
    """Raised when a close tag is found while no tag is open."""

    kind = ErrorKind.UNMATCHED_CLOSE_TAG


class MismatchedCloseTagError(SDFSyntaxError):
    """Raised when a close tag does not match the innermost open tag."""

    kind = ErrorKind.MISMATCHED_CLOSE_TAG

    def __init__(
        self,
        message: str,
        expected: str,
        token: Optional[str] = None,
        offset: Optional[int] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ) -> None:
        super().__init__(message, token, offset, line, column)
        self.expected = expected

    def _details(self) -> Dict[str, Any]:
        details = super()._details()
        details["expected"] = self.expected
        return details


class TagNotFoundError(SDFError):
    """Raised when a search-and-replace cannot find the requested tag."""

    kind = ErrorKind.TAG_NOT_FOUND
    component = "mutation"

    def __init__(self, tag: str) -> None:
        super().__init__(f"Unable to find tag '{tag}'")
        self.tag = tag


class AttributeNotFoundError(SDFError):
    """Raised when a search-and-replace cannot find the requested attribute."""

    kind = ErrorKind.ATTRIBUTE_NOT_FOUND
    component = "mutation"

    def __init__(self, tag: str, attribute: str) -> None:
        super().__init__(f"Unable to find attribute '{attribute}' on tag '{tag}'")
        self.tag = tag
        self.attribute = attribute


class DocumentClosedError(SDFError):
    """Raised when a document is used after it has been freed."""

    kind = ErrorKind.DOCUMENT_CLOSED
    component = "tree"
