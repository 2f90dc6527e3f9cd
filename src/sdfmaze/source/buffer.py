"""Immutable source buffer holding the full markup text of one document.

The buffer is loaded in one shot and never modified afterwards. Every name,
attribute value and content string extracted from it is a ``Label``: a plain
Python ``str``, which already is an owned, immutable sequence of known length.
"""

from bisect import bisect_right
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple, Union

from sdfmaze.shared import SDFIOError, get_logger

Label = str

PathLike = Union[str, Path]


@dataclass(frozen=True)
class SourceBuffer:
    """Named, read-only markup source.

    Attributes:
        name: Where the text came from (a file path or ``<string>``)
        content: The complete markup text
    """

    name: str
    content: str
    _line_starts: List[int] = field(default_factory=list, init=False, repr=False,
                                    compare=False)

    def __post_init__(self) -> None:
        """Index line starts so offsets can be reported as line/column."""
        starts = [0]
        index = self.content.find("\n")
        while index != -1:
            starts.append(index + 1)
            index = self.content.find("\n", index + 1)
        object.__setattr__(self, "_line_starts", starts)

    @property
    def length(self) -> int:
        """Number of characters in the buffer."""
        return len(self.content)

    def __len__(self) -> int:
        return len(self.content)

    def locate(self, offset: int) -> Tuple[int, int]:
        """Translate a character offset into a 1-based ``(line, column)`` pair."""
        offset = max(0, min(offset, len(self.content)))
        line_index = bisect_right(self._line_starts, offset) - 1
        return line_index + 1, offset - self._line_starts[line_index] + 1

    @classmethod
    def from_string(cls, text: str, name: str = "<string>") -> "SourceBuffer":
        """Wrap in-memory markup text."""
        return cls(name=name, content=text)


def open_source(path: PathLike, encoding: str = "utf-8") -> SourceBuffer:
    """Read a markup file into a ``SourceBuffer``.

    Args:
        path: File to read
        encoding: Text encoding of the file

    Returns:
        SourceBuffer with the whole file content

    Raises:
        SDFIOError: If the file cannot be read or decoded
    """
    logger = get_logger(__name__, component="source")
    file_path = Path(path)

    try:
        content = file_path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Unable to read source", extra={"path": str(file_path)})
        raise SDFIOError(f"Unable to read '{file_path}': {e}", str(file_path)) from e

    logger.debug(
        "Source loaded",
        extra={"path": str(file_path), "characters": len(content)}
    )
    return SourceBuffer(name=str(file_path), content=content)
