"""LIFO of open tag names used to validate open/close pairing."""

from typing import List


class TagStack:
    """Minimal matching stack of tag names.

    Every opening tag that is not self-closing pushes its name when its ``>``
    is consumed; every closing tag pops it again.
    """

    def __init__(self) -> None:
        self._names: List[str] = []

    def push(self, name: str) -> None:
        """Add ``name`` on top of the stack."""
        self._names.append(name)

    def pop(self) -> None:
        """Remove and discard the top name."""
        if not self._names:
            raise IndexError("pop from empty tag stack")
        self._names.pop()

    def peek(self) -> str:
        """Return the top name without removing it."""
        if not self._names:
            raise IndexError("peek from empty tag stack")
        return self._names[-1]

    def is_empty(self) -> bool:
        """Report whether no names remain."""
        return not self._names

    def __len__(self) -> int:
        return len(self._names)

    def __repr__(self) -> str:
        return f"TagStack({self._names!r})"
