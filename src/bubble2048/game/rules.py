from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional, Tuple

from .grid import Grid, from_rows, in_bounds, list_empty_cells, to_rows
from .tiles import Tile, TileIdGenerator


@dataclass
class GameRules:
    win_value: int = 2048
    four_probability: float = 0.1

    def spawn_value(self, rng: random.Random) -> int:
        return 2 if rng.random() < 1.0 - self.four_probability else 4


def add_random_tile(
    grid: Grid,
    rng: random.Random,
    ids: TileIdGenerator,
    rules: Optional[GameRules] = None,
) -> Tuple[Grid, Optional[Tile]]:
    """Spawn a 2 (or, rarely, a 4) on a uniformly chosen empty cell.

    A full board is returned unchanged together with None.
    """
    rules = rules or GameRules()
    empty = list_empty_cells(grid)
    if not empty:
        return grid, None
    position = empty[rng.randrange(len(empty))]
    tile = Tile(ids.next_id(), rules.spawn_value(rng), position, is_new=True)
    rows = to_rows(grid)
    rows[position[0]][position[1]] = tile
    return from_rows(rows), tile


def can_move(grid: Grid) -> bool:
    if list_empty_cells(grid):
        return True
    for r, row in enumerate(grid):
        for c, tile in enumerate(row):
            for nr, nc in ((r - 1, c), (r + 1, c), (r, c - 1), (r, c + 1)):
                if not in_bounds(grid, (nr, nc)):
                    continue
                neighbor = grid[nr][nc]
                if neighbor is not None and tile is not None and neighbor.value == tile.value:
                    return True
    return False


def has_won(grid: Grid, win_value: int = 2048) -> bool:
    return any(cell is not None and cell.value >= win_value for row in grid for cell in row)
