from __future__ import annotations

from typing import Tuple


Color = Tuple[int, int, int]

EMPTY_CELL: Color = (20, 60, 90)

# (value, background, text), ordered by value
TILE_PALETTE: Tuple[Tuple[int, Color, Color], ...] = (
    (2, (232, 244, 248), (26, 82, 118)),
    (4, (212, 239, 252), (26, 82, 118)),
    (8, (129, 212, 250), (255, 255, 255)),
    (16, (79, 195, 247), (255, 255, 255)),
    (32, (41, 182, 246), (255, 255, 255)),
    (64, (3, 169, 244), (255, 255, 255)),
    (128, (0, 188, 212), (255, 255, 255)),
    (256, (0, 150, 136), (255, 255, 255)),
    (512, (38, 166, 154), (255, 255, 255)),
    (1024, (77, 182, 172), (255, 255, 255)),
    (2048, (255, 215, 0), (26, 82, 118)),
)

# Anything past the end of the table
FALLBACK: Tuple[Color, Color] = ((156, 39, 176), (255, 255, 255))


def tile_colors(value: int) -> Tuple[Color, Color]:
    """(background, text) for a tile value; 0 gives the empty-cell colour."""
    if value <= 0:
        return EMPTY_CELL, EMPTY_CELL
    for v, background, text in TILE_PALETTE:
        if v == value:
            return background, text
    return FALLBACK


def font_size_for(value: int, cell_size: int) -> int:
    if value < 100:
        return int(cell_size * 0.55)
    if value < 1000:
        return int(cell_size * 0.45)
    return int(cell_size * 0.35)
