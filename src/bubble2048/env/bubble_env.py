from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from bubble2048.game import BubbleGame, Direction, GameConfig, GameStatus, grid_values
from bubble2048.visualization.palette import tile_colors


ACTIONS = (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)
MAX_EXPONENT = 17


def _compute_action_mask(game: BubbleGame) -> np.ndarray:
    valid = set(game.available_moves())
    return np.array([d in valid for d in ACTIONS], dtype=np.bool_)


def _log2_grid(game: BubbleGame) -> np.ndarray:
    values = grid_values(game.grid)
    obs = np.zeros(values.shape, dtype=np.int8)
    nz = values > 0
    obs[nz] = np.log2(values[nz]).astype(np.int8)
    return obs


class Bubble2048Env(gym.Env):
    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 invalid_action_penalty: float = -1.0,
                 stop_on_win: bool = False,
                 max_episode_steps: int = 10000) -> None:
        super().__init__()
        self.game = BubbleGame(config)
        self.render_mode = render_mode
        self.invalid_action_penalty = float(invalid_action_penalty)
        self.stop_on_win = bool(stop_on_win)
        self.max_episode_steps = int(max_episode_steps)

        size = self.game.config.size
        # Observation: log2 of each tile value, 0 for empty cells
        self.observation_space = spaces.Box(low=0, high=MAX_EXPONENT, shape=(size, size), dtype=np.int8)
        self.action_space = spaces.Discrete(len(ACTIONS))

        self._steps = 0

    def _get_obs(self) -> np.ndarray:
        return _log2_grid(self.game)

    def _get_info(self) -> Dict[str, Any]:
        return {
            "action_mask": _compute_action_mask(self.game),
            "score": self.game.score,
            "max_tile": self.game.max_tile(),
            "status": self.game.status.value,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        self.game.reset(seed)
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action):
        turn = self.game.move(ACTIONS[int(action)])
        self._steps += 1

        reward = float(turn.score_delta)
        if not turn.moved:
            reward += self.invalid_action_penalty

        terminated = False
        if turn.status is GameStatus.LOST:
            terminated = True
        elif turn.status is GameStatus.WON:
            if self.stop_on_win:
                terminated = True
            else:
                self.game.continue_after_win()
                terminated = self.game.status is GameStatus.LOST
        truncated = (not terminated) and self._steps >= self.max_episode_steps

        info = self._get_info()
        info["moved"] = turn.moved
        info["bubble_score"] = turn.bubble_move.score if turn.bubble_move is not None else 0
        return self._get_obs(), reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            values = grid_values(self.game.grid)
            cell = 24
            h, w = values.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for y in range(h):
                for x in range(w):
                    color = tile_colors(int(values[y, x]))[0]
                    img[y * cell : (y + 1) * cell - 1, x * cell : (x + 1) * cell - 1, :] = color
            return img
        return None

    def close(self) -> None:
        pass
