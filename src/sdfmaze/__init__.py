"""sdfmaze: SDF markup parser and maze world generator.

A small engine that parses a simplified XML dialect (SDF world fragments) into
an element tree, lets callers search, splice and mutate that tree, and writes
it back as indented markup. On top of it sits a maze generator that turns
maze walls into box models of a simulation world.

Progressive API Disclosure:
- Level 1: Simple functions - parse(), parse_string(), parse_file(), serialize()
- Level 2: Configured parser - SDFParser class
- Level 3: World generation - WorldBuilder and generate_maze()
"""

__version__ = "0.1.0"

from .api import SDFParser, open_source, parse, parse_file, parse_string, serialize
from .maze import Maze, WorldBuilder, generate_maze
from .shared.config import AppConfig
from .shared.errors import SDFError, SDFSyntaxError
from .tree import (
    Attribute,
    Document,
    Element,
    append,
    append_sibling,
    attribute_search,
    deep_search,
    free,
    replace_attribute_value,
    replace_content,
    search,
    to_string,
)

__all__ = [
    "__version__",

    # Level 1: Simple functions
    "open_source",
    "parse",
    "parse_string",
    "parse_file",
    "serialize",
    "to_string",

    # Tree operations
    "search",
    "deep_search",
    "attribute_search",
    "append",
    "append_sibling",
    "free",
    "replace_content",
    "replace_attribute_value",

    # Level 2: Configured parser
    "SDFParser",
    "AppConfig",

    # Level 3: World generation
    "Maze",
    "WorldBuilder",
    "generate_maze",

    # Data structures and errors
    "Attribute",
    "Document",
    "Element",
    "SDFError",
    "SDFSyntaxError",
]
