from __future__ import annotations

import argparse
from collections import deque
from typing import Deque, Optional, Tuple

import pygame

from bubble2048.game import BubbleGame, Direction, GameConfig, GameStatus, Grid, TurnResult
from bubble2048.game.storage import DEFAULT_BEST_SCORE_PATH
from .input import DragTracker, direction_from_key, pointer_direction
from .renderer import Renderer


ANIMATION_MS = 150
BUBBLE_DELAY_MS = 100


class TurnPresenter:
    """Plays a turn back as timed frames and gates input until it finishes."""

    def __init__(self) -> None:
        self._frames: Deque[Tuple[int, Grid]] = deque()
        self.current: Optional[Grid] = None

    @property
    def animating(self) -> bool:
        return bool(self._frames)

    def start(self, turn: TurnResult, now: int) -> None:
        assert turn.player_move is not None
        self.current = turn.player_move.grid
        at = now + ANIMATION_MS + BUBBLE_DELAY_MS
        if turn.bubble_move is not None:
            self._frames.append((at, turn.bubble_move.grid))
            at += ANIMATION_MS
        self._frames.append((at, turn.state.grid))

    def update(self, now: int) -> None:
        while self._frames and self._frames[0][0] <= now:
            _, self.current = self._frames.popleft()

    def clear(self) -> None:
        self._frames.clear()
        self.current = None


def run(best_score_path: Optional[str] = None, seed: Optional[int] = None) -> None:
    game = BubbleGame(GameConfig(random_seed=seed, best_score_path=best_score_path or DEFAULT_BEST_SCORE_PATH))
    presenter = TurnPresenter()
    drag = DragTracker()
    renderer = Renderer()

    pygame.init()
    try:
        clock = pygame.time.Clock()
        screen = pygame.display.set_mode(renderer.window_size(game.config.size))
        pygame.display.set_caption("Bubble 2048")

        running = True
        while running:
            direction: Optional[Direction] = None
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_n:
                        presenter.clear()
                        drag.cancel()
                        game.new_game()
                    elif event.key == pygame.K_c:
                        game.continue_after_win()
                    else:
                        direction = direction_from_key(event.key) or direction
                else:
                    direction = pointer_direction(event, drag, screen.get_size()) or direction

            now = pygame.time.get_ticks()
            presenter.update(now)
            # One turn at a time: input arriving mid-animation is dropped
            if direction is not None and not presenter.animating:
                turn = game.move(direction)
                if turn.moved:
                    presenter.start(turn, now)

            shown = presenter.current if presenter.animating else game.grid
            status = GameStatus.PLAYING if presenter.animating else game.status
            renderer.draw(screen, shown, game.score, game.state.best_score, status, game.rules.win_value)
            clock.tick(60)
    finally:
        pygame.quit()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Bubble 2048")
    p.add_argument("--best-score-path", type=str, default=None)
    p.add_argument("--seed", type=int, default=None)
    return p


def main() -> None:
    args = build_parser().parse_args()
    run(args.best_score_path, args.seed)


if __name__ == "__main__":  # pragma: no cover
    main()
