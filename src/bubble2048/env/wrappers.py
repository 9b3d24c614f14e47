from __future__ import annotations

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .bubble_env import _compute_action_mask


class ResampleInvalidActionWrapper(gym.Wrapper):
    """If a sampled direction would not move the board, resample among ones that do.

    Useful when training agents without action masking.
    """

    def __init__(self, env: gym.Env):
        super().__init__(env)
        assert isinstance(env.action_space, spaces.Discrete)

    def get_action_mask(self) -> np.ndarray:
        return _compute_action_mask(self.env.unwrapped.game)

    def step(self, action):  # type: ignore[override]
        mask = self.get_action_mask()
        if 0 <= int(action) < mask.shape[0] and not bool(mask[int(action)]):
            valid_idxs = np.flatnonzero(mask)
            if valid_idxs.size > 0:
                action = int(self.np_random.choice(valid_idxs))
        return self.env.step(action)
