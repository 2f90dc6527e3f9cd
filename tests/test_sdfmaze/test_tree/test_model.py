"""Tests for the element tree model."""

import pytest

from sdfmaze.api import parse_string
from sdfmaze.shared import DocumentClosedError
from sdfmaze.tree import (
    Attribute,
    Document,
    Element,
    append,
    append_sibling,
    attribute_search,
    deep_search,
    free,
    quote_value,
    search,
    unquote_value,
)


class TestAttribute:
    """Test attribute values and quoting helpers."""

    @pytest.mark.parametrize("value, expected", [
        ("'1'", "1"),
        ('"1"', "1"),
        ("''", ""),
        ("1", "1"),
        ("'1\"", "'1\""),
        ("'", "'"),
    ])
    def test_unquote(self, value, expected):
        """Test stripping one pair of matching quotes."""
        assert unquote_value(value) == expected
        assert Attribute("x", value).unquoted == expected

    def test_quote(self):
        """Test that values are quoted the way sources write them."""
        assert quote_value("Box_Red_3") == "'Box_Red_3'"

    def test_attribute_search(self):
        """Test linear attribute lookup."""
        attributes = [Attribute("name", "'X'"), Attribute("type", "'Y'")]

        assert attribute_search(attributes, "type") is attributes[1]
        assert attribute_search(attributes, "size") is None
        assert attribute_search([], "name") is None


class TestElement:
    """Test element construction and navigation."""

    def test_name_required(self):
        """Test that an element needs a name."""
        with pytest.raises(ValueError, match="name cannot be empty"):
            Element(name="")

    def test_constructor_adopts_children(self):
        """Test that children passed in get their father set."""
        child = Element("b", sibling=Element("c"))
        father = Element("a", children=child)

        assert [e.name for e in father.iter_children()] == ["b", "c"]
        assert all(e.father is father for e in father.iter_children())

    def test_depth(self):
        """Test depth computed through father links."""
        root = parse_string("<a><b><c/></b></a>").root

        assert root.depth == 0
        assert root.children.depth == 1
        assert root.children.children.depth == 2

    def test_walk_document_order(self):
        """Test that walk yields children before later siblings."""
        root = parse_string("<a><b><c/></b><d/></a><e/>").root

        assert [(e.name, level) for e, level in root.walk()] == [
            ("a", 0), ("b", 1), ("c", 2), ("d", 1), ("e", 0),
        ]

    def test_to_dict(self):
        """Test dictionary conversion of an element subtree."""
        root = parse_string("<a x='1'><b>hi</b></a>").root

        assert root.to_dict() == {
            "name": "a",
            "attributes": {"x": "'1'"},
            "children": [{"name": "b", "attributes": {}, "content": "hi"}],
        }

    def test_repr(self):
        """Test the debugging representation."""
        assert repr(Element("a", content="x")) == (
            "Element(name='a', attributes=0, content='x', has_children=False)"
        )


class TestSearch:
    """Test sibling-chain and children-first searches."""

    TEXT = "<r><a><x>child</x></a><x>sibling</x></r>"

    def test_search_walks_siblings_only(self):
        """Test that search does not descend into children."""
        root = parse_string(self.TEXT).root
        first = root.children

        assert first.search("x").content == "sibling"
        assert root.search("x") is None
        assert search(first, "a") is first

    def test_deep_search_prefers_children(self):
        """Test that a match in a child wins over a later sibling."""
        root = parse_string(self.TEXT).root

        assert root.children.deep_search("x").content == "child"
        assert deep_search(root, "x").content == "child"

    def test_deep_search_reaches_later_siblings(self):
        """Test that siblings are searched after children."""
        root = parse_string("<r><a><b/></a><c><d/></c></r>").root

        assert root.children.deep_search("d").name == "d"
        assert root.deep_search("r") is root
        assert root.deep_search("missing") is None

    def test_functional_search_accepts_none(self):
        """Test searches starting from an absent element."""
        assert search(None, "a") is None
        assert deep_search(None, "a") is None

    def test_get_attribute(self):
        """Test attribute access by name."""
        root = parse_string("<model name='X' type='Y'/>").root

        assert root.get_attribute("name") == "'X'"
        assert root.get_attribute("pose") is None
        assert root.get_attribute("pose", "'0'") == "'0'"


class TestAppend:
    """Test splicing subtrees together."""

    def test_append_ordering(self):
        """Test that appended fragments keep their order."""
        world = Element("world")
        for text in ("<light/>", "<gui/>", "<physics/>"):
            append(world, parse_string(text).root)

        assert [e.name for e in world.iter_children()] == ["light", "gui", "physics"]
        assert all(e.father is world for e in world.iter_children())

    def test_append_after_existing_children(self):
        """Test appending below a parsed element."""
        root = parse_string("<world><gravity>0 0 -9.8</gravity></world>").root
        root.append(parse_string("<model name='Box'><pose>0 0 0 0 0 0</pose></model>").root)

        assert [e.name for e in root.iter_children()] == ["gravity", "model"]
        assert root.children.sibling.children.father is root.children.sibling

    def test_append_chain(self):
        """Test that a whole sibling chain is appended."""
        father = Element("a")
        father.append(parse_string("<b/><c/>").root)

        assert [e.name for e in father.iter_children()] == ["b", "c"]
        assert father.children.sibling.father is father

    def test_append_drops_whitespace_content(self):
        """Test appending to an element that only held blanks."""
        father = parse_string("<a>\n</a>").root
        father.append(Element("b"))

        assert father.content is None
        assert father.children.name == "b"

    def test_append_rejects_text_content(self):
        """Test that text content and children do not mix."""
        father = Element("a", content="text")

        with pytest.raises(ValueError, match="has text content"):
            father.append(Element("b"))

    def test_append_to_self(self):
        """Test that an element cannot be its own child."""
        element = Element("a")

        with pytest.raises(ValueError, match="itself"):
            element.append(element)

    def test_append_sibling(self):
        """Test linking at the end of a sibling chain."""
        father = parse_string("<r><a/></r>").root
        father.children.append_sibling(Element("b"))
        father.children.append_sibling(Element("c"))

        assert [e.name for e in father.iter_children()] == ["a", "b", "c"]
        assert father.children.sibling.sibling.father is father

    def test_functional_append_sibling(self):
        """Test the functional form of append_sibling."""
        first = Element("a")
        append_sibling(first, parse_string("<b/><c/>").root)

        assert [e.name for e in first.iter_siblings()] == ["a", "b", "c"]

    def test_long_sibling_chain(self):
        """Test that long sibling chains do not recurse."""
        father = Element("world")
        for index in range(2000):
            father.append(Element(f"box{index}"))

        assert sum(1 for _ in father.walk()) == 2001
        assert father.deep_search("box1999").name == "box1999"
        assert father.free() == 2001


class TestDocument:
    """Test document ownership and conveniences."""

    def test_statistics(self):
        """Test element, attribute and depth counts."""
        document = parse_string("<a x='1'><b y='2'><c/></b></a><d/>")

        assert document.statistics() == {
            "element_count": 4,
            "attribute_count": 2,
            "max_depth": 2,
        }

    def test_iter_elements_and_find(self):
        """Test document-order iteration and deep search from the root."""
        document = parse_string("<a><b><c/></b></a><d/>")

        assert [e.name for e in document.iter_elements()] == ["a", "b", "c", "d"]
        assert document.find("c").father.name == "b"
        assert document.find("missing") is None

    def test_to_dict(self):
        """Test dictionary conversion of a document."""
        result = parse_string("<a/><b/>").to_dict()

        assert result["source"] == "<string>"
        assert [e["name"] for e in result["elements"]] == ["a", "b"]
        assert result["element_count"] == 2

    def test_free_releases_every_element(self):
        """Test that free counts and unlinks the whole tree."""
        document = parse_string("<a x='1'><b>hi</b><c/></a><d/>")
        b = document.find("b")

        assert document.free() == 4
        assert document.closed
        assert document.root is None
        assert b.content is None
        assert b.father is None

    def test_free_twice(self):
        """Test that a document is released exactly once."""
        document = parse_string("<a/>")
        document.free()

        with pytest.raises(DocumentClosedError):
            document.free()
        with pytest.raises(DocumentClosedError):
            document.find("a")

    def test_context_manager(self):
        """Test that leaving a with block frees the document."""
        with parse_string("<a><b/></a>") as document:
            assert document.find("b") is not None

        assert document.closed

    def test_context_manager_after_manual_free(self):
        """Test that an explicit free inside the block is allowed."""
        with parse_string("<a/>") as document:
            document.free()

        assert document.closed

    def test_empty_document(self):
        """Test a document built without a root."""
        document = Document()

        with pytest.raises(ValueError, match="has no root"):
            document.require_root()
        assert document.free() == 0
        with pytest.raises(DocumentClosedError, match="has been freed"):
            document.require_root()

    def test_functional_free(self):
        """Test the functional form of free on documents and elements."""
        assert free(parse_string("<a><b/></a>")) == 2
        assert free(Element("a", children=Element("b"))) == 2
