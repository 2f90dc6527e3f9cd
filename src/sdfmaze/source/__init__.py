"""Text buffer layer: loads markup sources in one shot.

Key Components:
    SourceBuffer: Named, immutable markup text with offset-to-line lookup
    open_source: Read a file into a SourceBuffer
    Label: Alias for the immutable strings extracted from a buffer
"""

from .buffer import Label, SourceBuffer, open_source

__all__ = [
    "Label",
    "SourceBuffer",
    "open_source",
]
