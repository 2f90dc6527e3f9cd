"""Conversion between SDF trees and ``lxml.etree`` elements.

lxml is an optional dependency (``pip install sdfmaze[adapters]``); the
adapter reports its availability instead of failing at import time.
Attribute values lose their surrounding quotes on the way to lxml and get
single quotes back on the way in.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from sdfmaze.shared import get_logger
from sdfmaze.tree import Attribute, Document, Element, quote_value, unquote_value


@dataclass
class ConversionResult:
    """Result of a conversion operation."""

    converted_data: Any
    conversion_time_ms: float
    warnings: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)


class LxmlAdapter:
    """Adapter for bidirectional conversion with lxml.etree."""

    def __init__(self, correlation_id: Optional[str] = None) -> None:
        self.correlation_id = correlation_id
        self._logger = get_logger(__name__, correlation_id, "lxml_adapter")

    def is_available(self) -> bool:
        """Check if lxml is available."""
        try:
            import lxml.etree  # noqa: F401
        except ImportError:
            return False
        return True

    def to_lxml(self, source: Any) -> ConversionResult:
        """Convert a Document (its root) or an Element to an lxml element.

        Siblings of the converted element cannot be represented by a single
        lxml root and are skipped with a warning.
        """
        import lxml.etree as ET

        start_time = time.time()
        element = source.require_root() if isinstance(source, Document) else source

        warnings = []
        if element.sibling is not None:
            warnings.append(f"Siblings of <{element.name}> were not converted")

        lxml_root = self._convert_element_to_lxml(element, ET)
        processing_time = (time.time() - start_time) * 1000
        self._logger.debug(
            "Converted tree to lxml",
            extra={"root": element.name, "conversion_time_ms": processing_time}
        )
        return ConversionResult(
            converted_data=lxml_root,
            conversion_time_ms=processing_time,
            warnings=warnings,
            metadata={"lxml_version": ET.LXML_VERSION},
        )

    def from_lxml(self, lxml_element: Any) -> ConversionResult:
        """Convert an lxml element (and its subtree) into a Document.

        Comments and processing instructions are dropped. Text that is mixed
        with child elements is dropped as well, since an element holds either
        content or children.
        """
        start_time = time.time()
        if not isinstance(getattr(lxml_element, "tag", None), str):
            raise TypeError("Target data is not a valid lxml element")

        warnings: List[str] = []
        root = self._convert_element_from_lxml(lxml_element, warnings)
        processing_time = (time.time() - start_time) * 1000
        return ConversionResult(
            converted_data=Document(root=root, source_name="<lxml>"),
            conversion_time_ms=processing_time,
            warnings=warnings,
        )

    def _convert_element_to_lxml(self, element: Element, ET: Any) -> Any:
        lxml_element = ET.Element(element.name)
        for attribute in element.attributes:
            lxml_element.set(attribute.name, unquote_value(attribute.value))

        if element.content is not None:
            lxml_element.text = element.content

        for child in element.iter_children():
            lxml_element.append(self._convert_element_to_lxml(child, ET))

        return lxml_element

    def _convert_element_from_lxml(self, lxml_element: Any, warnings: List[str]) -> Element:
        element = Element(
            name=lxml_element.tag,
            attributes=[
                Attribute(name=key, value=quote_value(value))
                for key, value in lxml_element.attrib.items()
            ],
        )

        children = [child for child in lxml_element if isinstance(child.tag, str)]
        if children:
            if lxml_element.text and lxml_element.text.strip():
                warnings.append(f"Mixed text of <{lxml_element.tag}> was dropped")
            for child in children:
                element.append(self._convert_element_from_lxml(child, warnings))
        elif lxml_element.text is not None:
            element.content = lxml_element.text

        return element
