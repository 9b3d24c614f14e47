"""Game module for Bubble 2048.

Exports the rule engine and the turn orchestrator:
- Tile, TileRef, TileIdGenerator: tile identity and merge provenance
- grid helpers: creation, cloning, flattening and annotation clearing
- Direction, MoveResult, move_tiles, shift_up: the slide-and-merge engine
- GameRules, add_random_tile, can_move, has_won: spawning and end conditions
- BubbleGame: full turn pipeline and game state
- BestScoreStore: best score persistence
"""

from .tiles import Position, Tile, TileRef, TileIdGenerator
from .grid import (
    GRID_SIZE,
    Grid,
    create_empty_grid,
    list_empty_cells,
    clone_grid,
    flatten_tiles,
    clear_annotations,
    grid_values,
    grid_from_values,
    format_grid,
)
from .moves import Direction, MoveResult, move_tiles, shift_up
from .rules import GameRules, add_random_tile, can_move, has_won
from .core import BubbleGame, GameConfig, GameState, GameStatus, TurnResult
from .storage import BestScoreStore, MemoryScoreStore

__all__ = [
    "Position",
    "Tile",
    "TileRef",
    "TileIdGenerator",
    "GRID_SIZE",
    "Grid",
    "create_empty_grid",
    "list_empty_cells",
    "clone_grid",
    "flatten_tiles",
    "clear_annotations",
    "grid_values",
    "grid_from_values",
    "format_grid",
    "Direction",
    "MoveResult",
    "move_tiles",
    "shift_up",
    "GameRules",
    "add_random_tile",
    "can_move",
    "has_won",
    "BubbleGame",
    "GameConfig",
    "GameState",
    "GameStatus",
    "TurnResult",
    "BestScoreStore",
    "MemoryScoreStore",
]
