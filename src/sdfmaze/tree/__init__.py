"""Tree (DOM) layer: element model, traversal, mutation and serialization.

Key Components:
    Element: Tree node with first-child, next-sibling and weak father links
    Attribute: Verbatim name/value pair of an element
    Document: Owner of one root element, freed exactly once
    write_element / serialize / to_string: Indented markup rendering
"""

from .model import (
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
from .mutation import (
    replace_attribute_value,
    replace_content,
    search_and_replace_attribute,
    search_and_replace_content,
)
from .serializer import serialize, to_string, write_element

__all__ = [
    "Attribute",
    "Document",
    "Element",
    "append",
    "append_sibling",
    "attribute_search",
    "deep_search",
    "free",
    "quote_value",
    "search",
    "unquote_value",
    "replace_attribute_value",
    "replace_content",
    "search_and_replace_attribute",
    "search_and_replace_content",
    "serialize",
    "to_string",
    "write_element",
]
