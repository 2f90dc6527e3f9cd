"""In-place mutation of leaf text: element content and attribute values."""

from typing import Optional

from sdfmaze.shared import AttributeNotFoundError, TagNotFoundError

from .model import Attribute, Element


def replace_content(element: Element, new_text: str) -> None:
    """Install ``new_text`` as the element's content, discarding the old one.

    Raises:
        ValueError: If the element holds children, which content would hide
    """
    if element.children is not None:
        raise ValueError(f"<{element.name}> has children and cannot hold content")
    element.content = str(new_text)


def replace_attribute_value(attribute: Attribute, new_text: str) -> None:
    """Install ``new_text`` verbatim as the attribute's value."""
    attribute.value = str(new_text)


def search_and_replace_content(
    element: Optional[Element], tag: str, new_text: str
) -> Element:
    """Find ``tag`` along the sibling chain of ``element`` and replace its content.

    Returns:
        The element that was modified

    Raises:
        TagNotFoundError: If no element named ``tag`` is found
    """
    target = element.search(tag) if element is not None else None
    if target is None:
        raise TagNotFoundError(tag)
    replace_content(target, new_text)
    return target


def search_and_replace_attribute(
    element: Optional[Element], tag: str, attribute: str, new_value: str
) -> Attribute:
    """Find ``tag`` along the sibling chain, then replace one attribute's value.

    Returns:
        The attribute that was modified

    Raises:
        TagNotFoundError: If no element named ``tag`` is found
        AttributeNotFoundError: If the element has no such attribute
    """
    target = element.search(tag) if element is not None else None
    if target is None:
        raise TagNotFoundError(tag)
    found = target.find_attribute(attribute)
    if found is None:
        raise AttributeNotFoundError(tag, attribute)
    replace_attribute_value(found, new_value)
    return found
