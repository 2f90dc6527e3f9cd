"""Element, attribute and document model of a parsed SDF tree.

An element links to its first child (``children``) and to its next sibling
(``sibling``). Both links own what they point to: a parent owns its whole
children chain, and each child owns the rest of its sibling chain. The
``father`` link is a weak back-reference used for upward navigation only.

Sibling chains can be thousands of elements long (one box per maze wall), so
every traversal walks sibling chains iteratively and only recurses into
children, keeping recursion depth equal to the nesting depth.
"""

import weakref
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from sdfmaze.shared import DocumentClosedError, PerformanceMetrics
from sdfmaze.source import Label

_QUOTES = ("'", '"')


def unquote_value(value: str) -> str:
    """Strip one pair of matching quotes surrounding an attribute value."""
    if len(value) >= 2 and value[0] in _QUOTES and value[-1] == value[0]:
        return value[1:-1]
    return value


def quote_value(text: str) -> str:
    """Wrap ``text`` in single quotes as attribute values are written in sources."""
    return f"'{text}'"


@dataclass
class Attribute:
    """Name/value pair attached to one element.

    The value is kept verbatim, including its quotes (``'1'``), so that the
    serializer reproduces it exactly.
    """

    name: Label
    value: Label

    @property
    def unquoted(self) -> str:
        """Value without its surrounding quotes."""
        return unquote_value(self.value)


@dataclass(eq=False, repr=False)
class Element:
    """One node of the tree, corresponding to one tag and its subtree."""

    name: Label
    content: Optional[Label] = None
    attributes: List[Attribute] = field(default_factory=list)
    children: Optional["Element"] = None
    sibling: Optional["Element"] = None
    _father: Optional["weakref.ReferenceType[Element]"] = None

    def __post_init__(self) -> None:
        """Validate the name and adopt any children passed in."""
        if not self.name:
            raise ValueError("Element name cannot be empty")
        for child in self.iter_children():
            child.father = self

    def __repr__(self) -> str:
        return (
            f"Element(name={self.name!r}, attributes={len(self.attributes)}, "
            f"content={self.content!r}, has_children={self.children is not None})"
        )

    @property
    def father(self) -> Optional["Element"]:
        """Parent element, or None for a root (or a detached element)."""
        return self._father() if self._father is not None else None

    @father.setter
    def father(self, value: Optional["Element"]) -> None:
        self._father = weakref.ref(value) if value is not None else None

    @property
    def depth(self) -> int:
        """Depth of this element in the tree (root = 0)."""
        depth = 0
        node = self.father
        while node is not None:
            depth += 1
            node = node.father
        return depth

    @property
    def is_self_closing(self) -> bool:
        """True when the element has neither content nor children."""
        return self.content is None and self.children is None

    # Navigation

    def iter_siblings(self) -> Iterator["Element"]:
        """Yield this element followed by every later sibling."""
        node: Optional[Element] = self
        while node is not None:
            yield node
            node = node.sibling

    def iter_children(self) -> Iterator["Element"]:
        """Yield the direct children in order."""
        if self.children is not None:
            yield from self.children.iter_siblings()

    def walk(self) -> Iterator[Tuple["Element", int]]:
        """Yield ``(element, level)`` in document order.

        Covers this element, its descendants and then its later siblings
        together with their descendants; ``level`` is relative to ``self``.
        """
        pending: List[Tuple[Element, int]] = [(self, 0)]
        while pending:
            node, level = pending.pop()
            yield node, level
            if node.sibling is not None:
                pending.append((node.sibling, level))
            if node.children is not None:
                pending.append((node.children, level + 1))

    # Search

    def search(self, name: str) -> Optional["Element"]:
        """Find the first element named ``name`` along the sibling chain.

        Children are not descended into.
        """
        for node in self.iter_siblings():
            if node.name == name:
                return node
        return None

    def deep_search(self, name: str) -> Optional["Element"]:
        """Find the first element named ``name`` in document order.

        Each element's children are searched before its later siblings.
        """
        for node in self.iter_siblings():
            if node.name == name:
                return node
            if node.children is not None:
                found = node.children.deep_search(name)
                if found is not None:
                    return found
        return None

    def find_attribute(self, name: str) -> Optional[Attribute]:
        """Find the first attribute named ``name``."""
        return attribute_search(self.attributes, name)

    def get_attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get the verbatim value of an attribute."""
        attribute = self.find_attribute(name)
        return attribute.value if attribute is not None else default

    # Structure

    def append(self, element: "Element") -> None:
        """Attach ``element`` (and its sibling chain) as the last children.

        A whitespace-only content is dropped since the element now holds
        children; real text content cannot coexist with children.

        Raises:
            ValueError: If this element has text content or ``element`` is self
        """
        if element is self:
            raise ValueError("Cannot append an element to itself")
        if self.content is not None:
            if self.content.strip():
                raise ValueError(
                    f"Cannot append children to <{self.name}>, it has text content"
                )
            self.content = None

        if self.children is None:
            self.children = element
        else:
            _last_sibling(self.children).sibling = element

        for node in element.iter_siblings():
            node.father = self

    def append_sibling(self, element: "Element") -> None:
        """Link ``element`` (and its sibling chain) at the end of this sibling chain."""
        if element is self:
            raise ValueError("Cannot append an element to itself")
        _last_sibling(self).sibling = element
        father = self.father
        for node in element.iter_siblings():
            node.father = father

    def free(self) -> int:
        """Release this element, its children subtree and its sibling chain.

        Returns:
            Number of elements released
        """
        nodes = [node for node, _ in self.walk()]
        for node in nodes:
            node.content = None
            node.attributes = []
            node.children = None
            node.sibling = None
            node._father = None
        return len(nodes)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the element and its children (not its siblings) to a dict."""
        result: Dict[str, Any] = {
            "name": self.name,
            "attributes": {attr.name: attr.value for attr in self.attributes},
        }
        if self.content is not None:
            result["content"] = self.content
        if self.children is not None:
            result["children"] = [child.to_dict() for child in self.iter_children()]
        return result


def _last_sibling(element: Element) -> Element:
    node = element
    while node.sibling is not None:
        node = node.sibling
    return node


# Functional form of the engine API; every function accepts an absent element.

def search(element: Optional[Element], name: str) -> Optional[Element]:
    """Sibling-chain search starting at ``element``."""
    return element.search(name) if element is not None else None


def deep_search(element: Optional[Element], name: str) -> Optional[Element]:
    """Children-first search starting at ``element``."""
    return element.deep_search(name) if element is not None else None


def attribute_search(attributes: List[Attribute], name: str) -> Optional[Attribute]:
    """Linear scan returning the first attribute named ``name``."""
    for attribute in attributes:
        if attribute.name == name:
            return attribute
    return None


def append(father: Element, element: Element) -> None:
    """Attach ``element`` as the last child of ``father``."""
    father.append(element)


@dataclass
class Document:
    """Root container of a parsed (or spliced) tree.

    The document owns its root for its whole lifetime and releases it exactly
    once through ``free`` (or by leaving a ``with`` block).
    """

    root: Optional[Element] = None
    source_name: Optional[str] = None
    metrics: PerformanceMetrics = field(default_factory=PerformanceMetrics)
    closed: bool = False

    def __enter__(self) -> "Document":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        if not self.closed:
            self.free()

    def require_root(self) -> Element:
        """Return the root, failing if the document was freed or has none.

        Raises:
            DocumentClosedError: If the document was freed
            ValueError: If the document was built without a root
        """
        if self.closed:
            raise DocumentClosedError("Document has been freed")
        if self.root is None:
            raise ValueError("Document has no root")
        return self.root

    def free(self) -> int:
        """Release the whole tree.

        Returns:
            Number of elements released

        Raises:
            DocumentClosedError: If the document was already freed
        """
        if self.closed:
            raise DocumentClosedError("Document has been freed")
        released = self.root.free() if self.root is not None else 0
        self.root = None
        self.closed = True
        return released

    def iter_elements(self) -> Iterator[Element]:
        """Iterate over all elements in document order."""
        for element, _ in self.require_root().walk():
            yield element

    def find(self, name: str) -> Optional[Element]:
        """Deep search from the root."""
        return self.require_root().deep_search(name)

    def statistics(self) -> Dict[str, int]:
        """Count elements and attributes and measure nesting depth."""
        elements = attributes = max_depth = 0
        for element, level in self.require_root().walk():
            elements += 1
            attributes += len(element.attributes)
            max_depth = max(max_depth, level)
        return {
            "element_count": elements,
            "attribute_count": attributes,
            "max_depth": max_depth,
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert the document to a dictionary (root plus its siblings)."""
        return {
            "source": self.source_name,
            "elements": [node.to_dict() for node in self.require_root().iter_siblings()],
            **self.statistics(),
        }


def append_sibling(element: Element, new_element: Element) -> None:
    """Link ``new_element`` at the end of the sibling chain of ``element``."""
    element.append_sibling(new_element)


def free(target: Union[Document, Element]) -> int:
    """Release a document (exactly once) or a detached element tree.

    Returns:
        Number of elements released
    """
    return target.free()
