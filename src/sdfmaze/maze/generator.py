"""Randomized depth-first maze generation on an odd-sized grid.

Cell ``(row, col)`` starts free when both coordinates are odd and as a wall
otherwise, so free cells form a lattice separated by single wall cells.
Carving walks from ``(1, 1)`` to a random unvisited lattice neighbour two
cells away and removes the wall between them, backtracking through an
explicit stack until every lattice cell has been visited.
"""

import random
from enum import Enum
from typing import Iterator, List, Optional, Tuple

Cell = Tuple[int, int]

WALL_GLYPH = "█"
FREE_GLYPH = " "

_STEPS = ((-2, 0), (2, 0), (0, -2), (0, 2))


class CellType(Enum):
    """Content of one grid cell."""

    FREE = 0
    WALL = 1


class Maze:
    """Grid of free and wall cells, indexed ``cells[row][col]``."""

    def __init__(self, width: int, height: int) -> None:
        _validate_dimension("width", width)
        _validate_dimension("height", height)
        self.width = width
        self.height = height
        self.cells: List[List[CellType]] = [
            [
                CellType.FREE if row % 2 == 1 and col % 2 == 1 else CellType.WALL
                for col in range(width)
            ]
            for row in range(height)
        ]

    def __repr__(self) -> str:
        return f"Maze(width={self.width}, height={self.height}, walls={self.wall_count})"

    def is_wall(self, row: int, col: int) -> bool:
        return self.cells[row][col] is CellType.WALL

    def walls(self) -> Iterator[Cell]:
        """Yield the ``(row, col)`` of every wall cell in row-major order."""
        for row in range(self.height):
            for col in range(self.width):
                if self.cells[row][col] is CellType.WALL:
                    yield row, col

    @property
    def wall_count(self) -> int:
        return sum(1 for _ in self.walls())

    def draw(self) -> str:
        """Render the grid, one text line per row."""
        return "\n".join(
            "".join(WALL_GLYPH if cell is CellType.WALL else FREE_GLYPH for cell in row)
            for row in self.cells
        )

    def _lattice_neighbours(self, row: int, col: int) -> List[Cell]:
        neighbours = []
        for d_row, d_col in _STEPS:
            n_row, n_col = row + d_row, col + d_col
            if 0 < n_row < self.height and 0 < n_col < self.width:
                neighbours.append((n_row, n_col))
        return neighbours


def _validate_dimension(label: str, value: int) -> None:
    if value <= 0:
        raise ValueError(f"Maze {label} must be positive, got {value}")
    if value % 2 == 0:
        raise ValueError(f"Maze {label} must be odd, got {value}")
    if value < 3:
        raise ValueError(f"Maze {label} must be at least 3, got {value}")


def generate_maze(
    width: int,
    height: int,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> Maze:
    """Carve a perfect maze with a randomized depth-first backtracker.

    Args:
        width: Number of columns (odd, >= 3)
        height: Number of rows (odd, >= 3)
        seed: Seed for a private random generator, for reproducible mazes
        rng: Random generator to use instead of seeding a new one

    Returns:
        Maze in which every free cell is reachable from ``(1, 1)``

    Raises:
        ValueError: If a dimension is not a positive odd number >= 3
    """
    maze = Maze(width, height)
    rng = rng or random.Random(seed)

    start = (1, 1)
    visited = {start}
    pending = [start]
    while pending:
        row, col = pending[-1]
        candidates = [
            cell for cell in maze._lattice_neighbours(row, col) if cell not in visited
        ]
        if not candidates:
            pending.pop()
            continue

        n_row, n_col = rng.choice(candidates)
        maze.cells[(row + n_row) // 2][(col + n_col) // 2] = CellType.FREE
        visited.add((n_row, n_col))
        pending.append((n_row, n_col))

    return maze
