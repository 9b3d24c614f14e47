from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Set, Tuple

from .grid import Grid, clone_grid, flatten_tiles, from_rows, in_bounds, to_rows
from .tiles import Position, Tile, TileIdGenerator


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def vector(self) -> Position:
        return VECTORS[self]

    @classmethod
    def parse(cls, value: "Direction | str") -> "Direction":
        if isinstance(value, Direction):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"Unknown direction: {value!r}") from None


VECTORS = {
    Direction.UP: (-1, 0),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
    Direction.RIGHT: (0, 1),
}


@dataclass(frozen=True)
class MoveResult:
    grid: Grid
    tiles: Tuple[Tile, ...]
    score: int
    moved: bool


def traversal_order(direction: Direction, size: int) -> Tuple[List[int], List[int]]:
    """Row and column visiting order; the wall the tiles move towards comes first."""
    rows = list(range(size))
    cols = list(range(size))
    if direction is Direction.DOWN:
        rows.reverse()
    if direction is Direction.RIGHT:
        cols.reverse()
    return rows, cols


def find_farthest_position(grid: Grid, position: Position, vector: Position) -> Tuple[Position, Optional[Position]]:
    """Slide from `position` along `vector` over empty cells.

    Returns the last empty cell reached (or `position` itself) and the first
    occupied cell in the way, or None when the slide ends at the edge.
    """
    dr, dc = vector
    previous = position
    current = (position[0] + dr, position[1] + dc)
    while in_bounds(grid, current) and grid[current[0]][current[1]] is None:
        previous = current
        current = (current[0] + dr, current[1] + dc)
    return previous, (current if in_bounds(grid, current) else None)


def move_tiles(grid: Grid, direction: Direction, ids: TileIdGenerator) -> MoveResult:
    direction = Direction.parse(direction)
    rows, cols = traversal_order(direction, len(grid))
    vector = direction.vector
    # Work on a mutable copy; the caller's grid is left untouched.
    cells = to_rows(clone_grid(grid))
    merged: Set[Position] = set()
    score = 0
    moved = False

    for r in rows:
        for c in cols:
            tile = cells[r][c]
            if tile is None:
                continue
            farthest, nxt = find_farthest_position(cells, (r, c), vector)
            target = cells[nxt[0]][nxt[1]] if nxt is not None else None

            if target is not None and target.value == tile.value and nxt not in merged:
                value = tile.value * 2
                cells[r][c] = None
                cells[nxt[0]][nxt[1]] = Tile(
                    ids.next_id(),
                    value,
                    nxt,
                    merged_from=(tile.ref(), target.ref()),
                    previous_position=(r, c),
                )
                merged.add(nxt)
                score += value
                moved = True
            elif farthest != (r, c):
                cells[r][c] = None
                cells[farthest[0]][farthest[1]] = tile.moved_to(farthest)
                moved = True
            else:
                cells[r][c] = tile.cleared()

    new_grid = from_rows(cells)
    return MoveResult(new_grid, tuple(flatten_tiles(new_grid)), score, moved)


def shift_up(grid: Grid, ids: TileIdGenerator) -> MoveResult:
    """Bubble phase: resolve the whole board upward."""
    return move_tiles(grid, Direction.UP, ids)
