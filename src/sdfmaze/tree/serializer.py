"""Render a tree back to indented markup text.

Layout, per element at indentation level ``n``::

    <name attr=value>content</name>      element with content
    <name attr=value>                    element with children
        ...children at level n + 1...
    </name>
    <name attr=value/>                   empty element

followed by the element's siblings at the same level.
"""

import io
import sys
from pathlib import Path
from typing import Optional, TextIO, Union

from sdfmaze.shared import SDFIOError, SerializerConfig, get_logger

from .model import Document, Element

Destination = Union[None, str, Path, TextIO]


def write_element(
    element: Element,
    indent_level: int,
    sink: TextIO,
    config: Optional[SerializerConfig] = None,
) -> None:
    """Write ``element``, its children and its sibling chain to ``sink``."""
    config = config or SerializerConfig()
    indent = config.indent * indent_level
    newline = config.newline

    for node in element.iter_siblings():
        sink.write(f"{indent}<{node.name}")
        for attribute in node.attributes:
            sink.write(f" {attribute.name}={attribute.value}")

        if node.content is not None:
            sink.write(f">{node.content}</{node.name}>{newline}")
        elif node.children is not None:
            sink.write(f">{newline}")
            write_element(node.children, indent_level + 1, sink, config)
            sink.write(f"{indent}</{node.name}>{newline}")
        else:
            sink.write(f"/>{newline}")


def to_string(
    target: Union[Document, Element],
    config: Optional[SerializerConfig] = None,
) -> str:
    """Render a document or an element (with its siblings) to a string."""
    root = target.require_root() if isinstance(target, Document) else target
    buffer = io.StringIO()
    write_element(root, 0, buffer, config)
    return buffer.getvalue()


def serialize(
    document: Document,
    destination: Destination = None,
    config: Optional[SerializerConfig] = None,
) -> None:
    """Write ``document`` to a path, an open text stream, or stdout (None).

    Raises:
        SDFIOError: If the destination cannot be written
        DocumentClosedError: If the document was freed
    """
    logger = get_logger(__name__, component="serializer")
    root = document.require_root()

    if destination is None:
        write_element(root, 0, sys.stdout, config)
        return

    if isinstance(destination, (str, Path)):
        path = Path(destination)
        try:
            with path.open("w", encoding="utf-8", newline="") as sink:
                write_element(root, 0, sink, config)
        except OSError as e:
            logger.error("Unable to write document", extra={"path": str(path)})
            raise SDFIOError(f"Unable to write '{path}': {e}", str(path)) from e
        logger.info("Document written", extra={"path": str(path)})
        return

    try:
        write_element(root, 0, destination, config)
    except OSError as e:
        raise SDFIOError(f"Unable to write document: {e}") from e
