"""Maze generation and SDF world building."""

from .generator import (
    FREE_GLYPH,
    WALL_GLYPH,
    CellType,
    Maze,
    generate_maze,
)
from .world import WorldBuilder

__all__ = [
    "FREE_GLYPH",
    "WALL_GLYPH",
    "CellType",
    "Maze",
    "WorldBuilder",
    "generate_maze",
]
