"""Gymnasium environments for Bubble 2048."""

from __future__ import annotations

from gymnasium.envs.registration import register

register(
    id="Bubble2048-v0",
    entry_point="bubble2048.env.bubble_env:Bubble2048Env",
)

# Stops the episode at the first 2048 tile
register(
    id="Bubble2048-StopOnWin-v0",
    entry_point="bubble2048.env.bubble_env:Bubble2048Env",
    kwargs={"stop_on_win": True},
)

__all__ = ["Bubble2048-v0", "Bubble2048-StopOnWin-v0"]
