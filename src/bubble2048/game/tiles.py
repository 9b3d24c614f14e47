from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


Position = Tuple[int, int]


@dataclass(frozen=True)
class TileRef:
    """Snapshot of a tile consumed by a merge."""

    id: str
    value: int
    position: Position


@dataclass(frozen=True)
class Tile:
    """A numbered tile on the board.

    The annotations (`is_new`, `merged_from`, `previous_position`) describe the
    move that produced this tile and are only meaningful for the turn that
    created them.
    """

    id: str
    value: int
    position: Position
    is_new: bool = False
    merged_from: Optional[Tuple[TileRef, TileRef]] = None
    previous_position: Optional[Position] = None

    def ref(self) -> TileRef:
        return TileRef(self.id, self.value, self.position)

    def cleared(self) -> "Tile":
        return Tile(self.id, self.value, self.position)

    def moved_to(self, position: Position) -> "Tile":
        return Tile(self.id, self.value, position, previous_position=self.position)


class TileIdGenerator:
    """Hands out tile ids for one game; reset when a new game starts."""

    def __init__(self, prefix: str = "tile") -> None:
        self.prefix = prefix
        self._counter = 0

    def next_id(self) -> str:
        self._counter += 1
        return f"{self.prefix}-{self._counter}"

    def reset(self) -> None:
        self._counter = 0

    @property
    def issued(self) -> int:
        return self._counter
