"""Tests for the error taxonomy and diagnostics."""

import pytest

from sdfmaze.shared import (
    AttributeNotFoundError,
    DepthLimitError,
    DiagnosticEntry,
    DiagnosticSeverity,
    DocumentClosedError,
    EmptyDocumentError,
    ErrorKind,
    MismatchedCloseTagError,
    PerformanceMetrics,
    SDFError,
    SDFIOError,
    SDFSyntaxError,
    SyntaxImbalanceError,
    TagNotFoundError,
    UnclosedTagError,
    UnexpectedTokenError,
    UnmatchedCloseTagError,
)


class TestErrorTaxonomy:
    """Test error kinds and class hierarchy."""

    @pytest.mark.parametrize("error_type, kind", [
        (SDFIOError, ErrorKind.IO_ERROR),
        (SyntaxImbalanceError, ErrorKind.SYNTAX_IMBALANCE),
        (UnclosedTagError, ErrorKind.SYNTAX_IMBALANCE),
        (EmptyDocumentError, ErrorKind.SYNTAX_IMBALANCE),
        (UnexpectedTokenError, ErrorKind.UNEXPECTED_TOKEN),
        (DepthLimitError, ErrorKind.UNEXPECTED_TOKEN),
        (UnmatchedCloseTagError, ErrorKind.UNMATCHED_CLOSE_TAG),
        (MismatchedCloseTagError, ErrorKind.MISMATCHED_CLOSE_TAG),
        (TagNotFoundError, ErrorKind.TAG_NOT_FOUND),
        (AttributeNotFoundError, ErrorKind.ATTRIBUTE_NOT_FOUND),
        (DocumentClosedError, ErrorKind.DOCUMENT_CLOSED),
    ])
    def test_error_kinds(self, error_type, kind):
        """Test that each error class reports its kind."""
        assert error_type.kind is kind
        assert issubclass(error_type, SDFError)

    def test_syntax_errors_share_a_base(self):
        """Test that parser errors derive from SDFSyntaxError."""
        for error_type in (SyntaxImbalanceError, UnexpectedTokenError,
                           UnmatchedCloseTagError, MismatchedCloseTagError):
            assert issubclass(error_type, SDFSyntaxError)
        assert not issubclass(TagNotFoundError, SDFSyntaxError)


class TestSyntaxErrorLocation:
    """Test position reporting of syntax errors."""

    def test_message_with_line_and_column(self):
        """Test that line and column are appended to the message."""
        error = UnexpectedTokenError("bad token", token="<", offset=3, line=1, column=4)

        assert error.message == "bad token (line 1, column 4)"
        assert error.reason == "bad token"
        assert str(error) == error.message

    def test_message_with_offset_only(self):
        """Test the fallback to a raw offset."""
        error = UnexpectedTokenError("bad token", offset=12)

        assert error.message == "bad token (offset 12)"

    def test_message_without_position(self):
        """Test an error with no position at all."""
        assert UnexpectedTokenError("bad token").message == "bad token"

    def test_to_diagnostic(self):
        """Test conversion of a syntax error into a diagnostic entry."""
        error = MismatchedCloseTagError(
            "close tag </b> does not match open tag <a>",
            expected="a", token="b", offset=5, line=2, column=1,
        )

        diagnostic = error.to_diagnostic("req-1")

        assert diagnostic.severity is DiagnosticSeverity.ERROR
        assert diagnostic.component == "parser"
        assert diagnostic.position == {"offset": 5, "line": 2, "column": 1}
        assert diagnostic.details == {
            "kind": "MISMATCHED_CLOSE_TAG", "token": "b", "expected": "a",
        }
        assert diagnostic.correlation_id == "req-1"


class TestOtherErrors:
    """Test non-syntax errors."""

    def test_io_error(self):
        """Test that IO errors are critical and carry the path."""
        diagnostic = SDFIOError("Unable to read", "world.sdf").to_diagnostic()

        assert diagnostic.severity is DiagnosticSeverity.CRITICAL
        assert diagnostic.details["path"] == "world.sdf"
        assert diagnostic.position is None

    def test_not_found_messages(self):
        """Test search failure messages."""
        assert TagNotFoundError("pose").message == "Unable to find tag 'pose'"
        error = AttributeNotFoundError("model", "name")
        assert error.message == "Unable to find attribute 'name' on tag 'model'"
        assert error.tag == "model"
        assert error.attribute == "name"


class TestResultTypes:
    """Test diagnostic entries and performance metrics."""

    def test_diagnostic_validation(self):
        """Test that message and component are required."""
        with pytest.raises(ValueError, match="message"):
            DiagnosticEntry(DiagnosticSeverity.INFO, "", "parser")
        with pytest.raises(ValueError, match="component"):
            DiagnosticEntry(DiagnosticSeverity.INFO, "note", "")

    def test_diagnostic_to_dict(self):
        """Test dictionary conversion."""
        entry = DiagnosticEntry(DiagnosticSeverity.WARNING, "note", "parser",
                                position={"offset": 1})

        assert entry.to_dict() == {
            "severity": "WARNING",
            "message": "note",
            "component": "parser",
            "position": {"offset": 1},
        }

    def test_metrics_rates(self):
        """Test derived throughput values."""
        metrics = PerformanceMetrics(processing_time_ms=500.0,
                                     characters_processed=1000, elements_built=10)

        assert metrics.characters_per_second == 2000.0
        assert metrics.elements_per_second == 20.0
        assert PerformanceMetrics().characters_per_second == 0.0
