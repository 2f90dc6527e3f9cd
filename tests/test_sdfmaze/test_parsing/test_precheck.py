"""Tests for the bracket alternation pre-check."""

import pytest

from sdfmaze.parsing import check_syntax, is_balanced
from sdfmaze.shared import SyntaxImbalanceError
from sdfmaze.source import SourceBuffer


def _source(text):
    return SourceBuffer.from_string(text)


class TestCheckSyntax:
    """Test bracket alternation."""

    @pytest.mark.parametrize("text", [
        "",
        "plain text",
        "<a/>",
        "<a x='1'><b>hi</b></a>",
        "<!-- comment --><a></a>",
    ])
    def test_balanced(self, text):
        """Test inputs whose brackets alternate."""
        check_syntax(_source(text))
        assert is_balanced(_source(text))

    @pytest.mark.parametrize("text", [
        "<a<b>",
        "<a>>",
        "<a>text>",
    ])
    def test_imbalanced(self, text):
        """Test inputs whose brackets do not alternate."""
        assert not is_balanced(_source(text))
        with pytest.raises(SyntaxImbalanceError):
            check_syntax(_source(text))

    def test_trailing_open_bracket_is_left_to_the_parser(self):
        """Test that an unterminated final tag passes the pre-check."""
        assert is_balanced(_source("<a></a"))

    def test_double_open_reports_position(self):
        """Test the position of a second '<'."""
        with pytest.raises(SyntaxImbalanceError) as exc_info:
            check_syntax(_source("<a>\n<<b>"))

        error = exc_info.value
        assert error.token == "<"
        assert error.offset == 5
        assert (error.line, error.column) == (2, 2)

    def test_double_close(self):
        """Test a '>' without an opening '<'."""
        with pytest.raises(SyntaxImbalanceError, match="without a matching"):
            check_syntax(_source("<a>>"))
