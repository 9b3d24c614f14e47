from __future__ import annotations

import logging
import random
from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Optional, Tuple

import numpy as np

from .grid import Grid, clear_annotations, create_empty_grid, flatten_tiles, grid_from_values, grid_values
from .moves import Direction, MoveResult, move_tiles, shift_up
from .rules import GameRules, add_random_tile, can_move, has_won
from .storage import BestScoreStore, MemoryScoreStore
from .tiles import Tile, TileIdGenerator


logger = logging.getLogger(__name__)


class GameStatus(Enum):
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


@dataclass
class GameConfig:
    size: int = 4
    start_tiles: int = 2
    random_seed: Optional[int] = None
    best_score_path: Optional[str] = None


@dataclass(frozen=True)
class GameState:
    grid: Grid
    tiles: Tuple[Tile, ...]
    score: int
    best_score: int
    status: GameStatus
    has_won_once: bool


@dataclass(frozen=True)
class TurnResult:
    """Outcome of one player input.

    `player_move` and `bubble_move` are the two phases in presentation order;
    `state` is the committed state after the spawn. `bubble_move` is None when
    the upward pass changed nothing.
    """

    direction: Direction
    accepted: bool
    moved: bool
    state: GameState
    player_move: Optional[MoveResult] = None
    bubble_move: Optional[MoveResult] = None
    spawned: Optional[Tile] = None
    score_delta: int = 0

    @property
    def status(self) -> GameStatus:
        return self.state.status


class BubbleGame:
    """Turn orchestrator: directional move, bubble pass, spawn, then status."""

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[GameRules] = None,
        store=None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or GameRules()
        if store is None:
            store = BestScoreStore(self.config.best_score_path) if self.config.best_score_path else MemoryScoreStore()
        self.store = store
        self.rng = random.Random(self.config.random_seed)
        self.ids = TileIdGenerator()
        self.moves_made = 0
        self.state = GameState(
            grid=create_empty_grid(self.config.size),
            tiles=(),
            score=0,
            best_score=self.store.load(),
            status=GameStatus.PLAYING,
            has_won_once=False,
        )
        self.new_game()

    @property
    def grid(self) -> Grid:
        return self.state.grid

    @property
    def score(self) -> int:
        return self.state.score

    @property
    def status(self) -> GameStatus:
        return self.state.status

    @property
    def accepts_input(self) -> bool:
        if self.state.status is GameStatus.LOST:
            return False
        if self.state.status is GameStatus.WON and not self.state.has_won_once:
            return False
        return True

    def new_game(self) -> None:
        self.ids.reset()
        grid = create_empty_grid(self.config.size)
        for _ in range(self.config.start_tiles):
            grid, _ = add_random_tile(grid, self.rng, self.ids, self.rules)
        self.moves_made = 0
        self.state = GameState(
            grid=grid,
            tiles=tuple(flatten_tiles(grid)),
            score=0,
            best_score=self.state.best_score,
            status=GameStatus.PLAYING,
            has_won_once=False,
        )

    def reset(self, seed: Optional[int] = None) -> None:
        if seed is not None:
            self.rng.seed(seed)
        self.new_game()

    def load_grid(self, values, score: int = 0, has_won_once: bool = False) -> None:
        """Install a board given as tile values (0 = empty)."""
        self.ids.reset()
        grid = grid_from_values(values, self.ids)
        self.moves_made = 0
        self.state = replace(
            self.state,
            grid=grid,
            tiles=tuple(flatten_tiles(grid)),
            score=int(score),
            status=GameStatus.PLAYING,
            has_won_once=has_won_once,
        )
        self._update_best()

    def continue_after_win(self) -> None:
        if self.state.status is not GameStatus.WON:
            return
        # A winning turn can also fill the board
        status = GameStatus.PLAYING if can_move(self.state.grid) else GameStatus.LOST
        self.state = replace(self.state, status=status, has_won_once=True)

    def move(self, direction: Direction | str) -> TurnResult:
        direction = Direction.parse(direction)
        if not self.accepts_input:
            return TurnResult(direction, accepted=False, moved=False, state=self.state)

        player_move = move_tiles(self.state.grid, direction, self.ids)
        if not player_move.moved:
            return TurnResult(direction, accepted=True, moved=False, state=self.state, player_move=player_move)

        bubble_move = shift_up(player_move.grid, self.ids)
        score_delta = player_move.score + bubble_move.score
        grid, spawned = add_random_tile(clear_annotations(bubble_move.grid), self.rng, self.ids, self.rules)

        self.moves_made += 1
        self.state = replace(
            self.state,
            grid=grid,
            tiles=tuple(flatten_tiles(grid)),
            score=self.state.score + score_delta,
            status=self._status_for(grid),
        )
        self._update_best()
        logger.debug(
            "turn %d: %s scored %d (bubble %d), status=%s",
            self.moves_made, direction.value, score_delta, bubble_move.score, self.state.status.value,
        )
        return TurnResult(
            direction,
            accepted=True,
            moved=True,
            state=self.state,
            player_move=player_move,
            bubble_move=bubble_move if bubble_move.moved else None,
            spawned=spawned,
            score_delta=score_delta,
        )

    def available_moves(self) -> List[Direction]:
        probe = TileIdGenerator()
        return [d for d in Direction if move_tiles(self.state.grid, d, probe).moved]

    def max_tile(self) -> int:
        return max((t.value for t in self.state.tiles), default=0)

    def get_state(self) -> dict:
        return {
            "grid": grid_values(self.state.grid),
            "score": self.state.score,
            "best_score": self.state.best_score,
            "status": self.state.status.value,
            "has_won_once": self.state.has_won_once,
            "max_tile": self.max_tile(),
            "moves_made": self.moves_made,
            "empty_cells": int(np.count_nonzero(grid_values(self.state.grid) == 0)),
        }

    def _status_for(self, grid: Grid) -> GameStatus:
        if has_won(grid, self.rules.win_value) and not self.state.has_won_once:
            return GameStatus.WON
        if not can_move(grid):
            return GameStatus.LOST
        return GameStatus.PLAYING

    def _update_best(self) -> None:
        if self.state.score > self.state.best_score:
            self.state = replace(self.state, best_score=self.state.score)
            self.store.save(self.state.score)
