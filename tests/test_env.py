import unittest

import numpy as np
import gymnasium as gym

import bubble2048.env  # noqa: F401
from bubble2048.env.bubble_env import ACTIONS, Bubble2048Env
from bubble2048.env.wrappers import ResampleInvalidActionWrapper
from bubble2048.game import Direction, GameRules, GameStatus


UP, DOWN, LEFT, RIGHT = (ACTIONS.index(d) for d in (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT))


class TestBubble2048Env(unittest.TestCase):
    def test_given_reset_when_observing_then_log2_board_and_mask(self):
        env = Bubble2048Env()
        obs, info = env.reset(seed=3)
        self.assertEqual(obs.shape, (4, 4))
        self.assertEqual(obs.dtype, np.int8)
        self.assertTrue(env.observation_space.contains(obs))
        self.assertEqual(int(np.count_nonzero(obs)), 2)
        self.assertTrue(set(np.unique(obs)) <= {0, 1, 2})
        self.assertEqual(info["action_mask"].shape, (4,))
        self.assertTrue(info["action_mask"].any())

    def test_given_merge_when_stepping_then_reward_is_turn_score(self):
        env = Bubble2048Env()
        env.reset(seed=0)
        env.game.load_grid([
            [0, 0, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 8, 8],
        ])
        obs, reward, terminated, truncated, info = env.step(LEFT)
        self.assertEqual(reward, 16.0)
        self.assertFalse(terminated)
        self.assertFalse(truncated)
        self.assertTrue(info["moved"])
        self.assertEqual(obs[0, 0], 4)  # 16 == 2**4, lifted by the bubble pass
        self.assertEqual(info["score"], 16)

    def test_given_ineffective_action_when_stepping_then_penalty(self):
        env = Bubble2048Env(invalid_action_penalty=-2.5)
        env.reset(seed=0)
        env.game.load_grid([
            [2, 0, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
        ])
        _, reward, _, _, info = env.step(UP)
        self.assertEqual(reward, -2.5)
        self.assertFalse(info["moved"])
        self.assertEqual(info["action_mask"].tolist(), [False, True, False, True])

    def test_given_losing_move_when_stepping_then_terminated(self):
        env = Bubble2048Env()
        env.reset(seed=0)
        env.game.rules = GameRules(four_probability=0.0)
        env.game.load_grid([
            [2, 4, 2, 4],
            [4, 2, 4, 2],
            [2, 4, 2, 4],
            [0, 8, 16, 32],
        ])
        _, _, terminated, truncated, info = env.step(LEFT)
        self.assertTrue(terminated)
        self.assertFalse(truncated)
        self.assertEqual(info["status"], "lost")

    def test_given_win_when_not_stopping_then_acknowledged_and_continues(self):
        env = Bubble2048Env()
        env.reset(seed=0)
        env.game.load_grid([
            [1024, 1024, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
        ])
        _, _, terminated, _, info = env.step(LEFT)
        self.assertFalse(terminated)
        self.assertEqual(info["status"], "playing")
        self.assertTrue(env.game.state.has_won_once)

    def test_given_win_that_fills_board_when_not_stopping_then_terminated_as_lost(self):
        env = Bubble2048Env()
        env.reset(seed=0)
        env.game.rules = GameRules(four_probability=0.0)
        env.game.load_grid([
            [1024, 1024, 4, 8],
            [32, 64, 128, 16],
            [16, 8, 4, 256],
            [64, 128, 256, 32],
        ])
        _, _, terminated, truncated, info = env.step(LEFT)
        self.assertTrue(terminated)
        self.assertFalse(truncated)
        self.assertEqual(info["status"], "lost")
        self.assertFalse(info["action_mask"].any())
        self.assertTrue(env.game.state.has_won_once)

    def test_given_win_when_stopping_on_win_then_terminated(self):
        env = Bubble2048Env(stop_on_win=True)
        env.reset(seed=0)
        env.game.load_grid([
            [1024, 1024, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
        ])
        _, _, terminated, _, _ = env.step(LEFT)
        self.assertTrue(terminated)
        self.assertIs(env.game.status, GameStatus.WON)

    def test_given_step_limit_when_reached_then_truncated(self):
        env = Bubble2048Env(max_episode_steps=1)
        env.reset(seed=0)
        env.game.load_grid([
            [2, 0, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
        ])
        _, _, terminated, truncated, _ = env.step(RIGHT)
        self.assertFalse(terminated)
        self.assertTrue(truncated)

    def test_given_rgb_render_mode_when_rendering_then_image(self):
        env = Bubble2048Env(render_mode="rgb_array")
        env.reset(seed=1)
        img = env.render()
        self.assertEqual(img.shape, (96, 96, 3))
        self.assertEqual(img.dtype, np.uint8)
        self.assertIsNone(Bubble2048Env().render())

    def test_given_registered_id_when_making_then_env_runs(self):
        env = gym.make("Bubble2048-v0")
        obs, info = env.reset(seed=5)
        for _ in range(10):
            valid = np.flatnonzero(info["action_mask"])
            if valid.size == 0:
                break
            obs, _, terminated, truncated, info = env.step(int(valid[0]))
            if terminated or truncated:
                break
        env.close()


class TestResampleWrapper(unittest.TestCase):
    def test_given_invalid_action_when_stepping_then_valid_one_taken(self):
        env = ResampleInvalidActionWrapper(Bubble2048Env())
        env.reset(seed=0)
        env.unwrapped.game.load_grid([
            [2, 0, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
        ])
        self.assertEqual(env.get_action_mask().tolist(), [False, True, False, True])
        _, reward, _, _, info = env.step(UP)
        self.assertTrue(info["moved"])
        self.assertEqual(reward, 0.0)


if __name__ == "__main__":
    unittest.main(verbosity=2)
