"""Tests for the lxml adapter."""

import pytest

from sdfmaze.api import parse_string
from sdfmaze.api.adapters import ConversionResult, LxmlAdapter
from sdfmaze.tree import Document

etree = pytest.importorskip("lxml.etree")


class TestLxmlAdapter:
    """Test conversion between SDF trees and lxml elements."""

    def test_is_available(self):
        """Test availability detection."""
        assert LxmlAdapter().is_available()

    def test_to_lxml(self):
        """Test converting a parsed document to lxml."""
        document = parse_string("<a x='1'><b>hi</b><c/></a>")

        result = LxmlAdapter().to_lxml(document)

        assert isinstance(result, ConversionResult)
        root = result.converted_data
        assert root.tag == "a"
        assert root.get("x") == "1"
        assert [child.tag for child in root] == ["b", "c"]
        assert root[0].text == "hi"
        assert result.warnings == []

    def test_to_lxml_warns_about_siblings(self):
        """Test that root siblings are reported as not converted."""
        result = LxmlAdapter().to_lxml(parse_string("<a/><b/>"))

        assert result.converted_data.tag == "a"
        assert len(result.warnings) == 1

    def test_from_lxml(self):
        """Test converting an lxml tree to a document."""
        element = etree.fromstring('<a x="1"><!-- note --><b>hi</b><c/></a>')

        result = LxmlAdapter().from_lxml(element)

        document = result.converted_data
        assert isinstance(document, Document)
        root = document.root
        assert root.get_attribute("x") == "'1'"
        assert [child.name for child in root.iter_children()] == ["b", "c"]
        assert root.children.content == "hi"
        assert root.children.father is root
        assert result.warnings == []

    def test_from_lxml_drops_mixed_text(self):
        """Test that text next to child elements is dropped with a warning."""
        result = LxmlAdapter().from_lxml(etree.fromstring("<a>text<b/></a>"))

        assert result.converted_data.root.content is None
        assert len(result.warnings) == 1

    def test_from_lxml_rejects_other_objects(self):
        """Test invalid input."""
        with pytest.raises(TypeError):
            LxmlAdapter().from_lxml("<a/>")

    def test_round_trip(self):
        """Test SDF to lxml and back."""
        text = "<model name='Box'><pose>0 0 0 0 0 0</pose><static>1</static></model>"
        adapter = LxmlAdapter()

        lxml_root = adapter.to_lxml(parse_string(text)).converted_data
        document = adapter.from_lxml(lxml_root).converted_data

        assert document.root.to_dict() == parse_string(text).root.to_dict()
