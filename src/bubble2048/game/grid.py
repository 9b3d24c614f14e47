from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

import numpy as np

from .tiles import Position, Tile, TileIdGenerator


GRID_SIZE = 4

Row = Tuple[Optional[Tile], ...]
Grid = Tuple[Row, ...]


def create_empty_grid(size: int = GRID_SIZE) -> Grid:
    return tuple(tuple(None for _ in range(size)) for _ in range(size))


def in_bounds(grid: Grid, position: Position) -> bool:
    r, c = position
    size = len(grid)
    return 0 <= r < size and 0 <= c < size


def list_empty_cells(grid: Grid) -> List[Position]:
    """Empty cells in row-major order."""
    return [(r, c) for r, row in enumerate(grid) for c, cell in enumerate(row) if cell is None]


def flatten_tiles(grid: Grid) -> List[Tile]:
    """Occupied cells in row-major order."""
    return [cell for row in grid for cell in row if cell is not None]


def clone_grid(grid: Grid) -> Grid:
    """Copy of the board with every tile reset to a neutral baseline.

    Ids, values and positions survive; annotations left by the previous move
    or spawn do not.
    """
    return tuple(tuple(cell.cleared() if cell is not None else None for cell in row) for row in grid)


def clear_annotations(grid: Grid) -> Grid:
    return clone_grid(grid)


def to_rows(grid: Grid) -> List[List[Optional[Tile]]]:
    return [list(row) for row in grid]


def from_rows(rows: Sequence[Sequence[Optional[Tile]]]) -> Grid:
    return tuple(tuple(row) for row in rows)


def grid_values(grid: Grid) -> np.ndarray:
    """Tile values as an int64 array, 0 for empty cells."""
    size = len(grid)
    values = np.zeros((size, size), dtype=np.int64)
    for r, row in enumerate(grid):
        for c, cell in enumerate(row):
            if cell is not None:
                values[r, c] = cell.value
    return values


def grid_from_values(values, ids: Optional[TileIdGenerator] = None) -> Grid:
    """Build a board from a square nested list or array of ints (0 = empty)."""
    arr = np.asarray(values, dtype=np.int64)
    if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
        raise ValueError(f"Expected a square 2D grid, got shape {arr.shape}")
    if np.any(arr < 0):
        raise ValueError("Tile values must be non-negative")
    tiles = arr[arr > 0]
    if np.any((tiles < 2) | ((tiles & (tiles - 1)) != 0)):
        raise ValueError("Tile values must be powers of two >= 2")
    ids = ids or TileIdGenerator()
    size = arr.shape[0]
    rows: List[List[Optional[Tile]]] = [[None] * size for _ in range(size)]
    for r in range(size):
        for c in range(size):
            v = int(arr[r, c])
            if v:
                rows[r][c] = Tile(ids.next_id(), v, (r, c))
    return from_rows(rows)


def format_grid(grid: Grid) -> str:
    width = max([len(str(t.value)) for t in flatten_tiles(grid)] + [1])
    lines = []
    for row in grid:
        lines.append(" ".join(str(cell.value).rjust(width) if cell else "·".rjust(width) for cell in row))
    return "\n".join(lines)
