from __future__ import annotations

import argparse
import random

import numpy as np
import gymnasium as gym

import bubble2048.env  # noqa: F401


def run_random(episodes: int = 5, seed: int = 0, max_steps: int = 5000) -> float:
    env = gym.make("Bubble2048-v0", max_episode_steps=max_steps)
    rng = random.Random(seed)
    total_reward = 0.0
    best_tile = 0
    for ep in range(episodes):
        obs, info = env.reset(seed=seed + ep)
        done = False
        ep_return = 0.0
        while not done:
            # Prefer directions that actually move the board
            valid = np.flatnonzero(info["action_mask"])
            action = int(rng.choice(list(valid))) if valid.size else env.action_space.sample()
            obs, reward, terminated, truncated, info = env.step(action)
            ep_return += float(reward)
            done = terminated or truncated
        best_tile = max(best_tile, int(info["max_tile"]))
        total_reward += ep_return
        print(f"Episode {ep + 1}/{episodes} return={ep_return:.1f} score={info['score']} max_tile={info['max_tile']}")
    env.close()
    print(f"Random agent total reward: {total_reward:.2f}  best tile: {best_tile}")
    return total_reward


def main() -> None:
    p = argparse.ArgumentParser()
    p.add_argument("--episodes", type=int, default=5)
    p.add_argument("--seed", type=int, default=0)
    p.add_argument("--max-steps", type=int, default=5000)
    args = p.parse_args()
    run_random(args.episodes, args.seed, args.max_steps)


if __name__ == "__main__":  # pragma: no cover
    main()
