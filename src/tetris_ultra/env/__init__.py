"""Gymnasium environment for Tetris Ultra."""

from __future__ import annotations

from gymnasium.envs.registration import register

register(
    id="TetrisUltra-v0",
    entry_point="tetris_ultra.env.tetris_env:TetrisUltraEnv",
)

__all__ = ["TetrisUltra-v0"]
