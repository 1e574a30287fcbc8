from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from tetris_ultra.game import (
    GHOST_CELL,
    Action,
    ActivatePowerUp,
    Advance,
    GameConfig,
    PowerUpType,
    ScoringRules,
    Snapshot,
    TetrisUltraGame,
    TetrominoType,
    color_rgb,
)

# Discrete action index -> engine event. 0 is a no-op (let gravity work).
ACTIONS = (
    None,
    Action.LEFT,
    Action.RIGHT,
    Action.SOFT_DROP,
    Action.ROTATE,
    Action.HARD_DROP,
    ActivatePowerUp(0),
    ActivatePowerUp(1),
    ActivatePowerUp(2),
    ActivatePowerUp(3),
)

POWER_UP_CODES = {kind: i + 1 for i, kind in enumerate(PowerUpType)}
MAX_SLOTS = 4


def _color_for_value(v: int) -> Tuple[int, int, int]:
    if v == 0:
        return (30, 30, 36)
    if v == GHOST_CELL:
        return (70, 70, 84)
    return color_rgb(TetrominoType(v))


class TetrisUltraEnv(gym.Env):
    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None,
                 render_mode: Optional[str] = None, step_ms: int = 100,
                 max_episode_steps: int = 10_000) -> None:
        super().__init__()
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.game = TetrisUltraGame(self.config, self.rules)
        self.render_mode = render_mode
        self.step_ms = int(step_ms)
        self.max_episode_steps = int(max_episode_steps)

        h, w = self.config.height, self.config.width
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=GHOST_CELL, high=len(TetrominoType), shape=(h, w), dtype=np.int8),
                "next_piece": spaces.Discrete(len(TetrominoType) + 1),
                "counters": spaces.Box(low=0.0, high=np.inf, shape=(4,), dtype=np.float32),
                "active_power_up": spaces.Discrete(len(PowerUpType) + 1),
                "power_up_slots": spaces.Box(low=0, high=len(PowerUpType), shape=(MAX_SLOTS,), dtype=np.int8),
            }
        )
        self.action_space = spaces.Discrete(len(ACTIONS))

        self._last_snapshot: Optional[Snapshot] = None
        self._steps = 0

    def _get_obs(self, snap: Snapshot) -> Dict[str, Any]:
        slots = np.zeros((MAX_SLOTS,), dtype=np.int8)
        for i, token in enumerate(snap.available_power_ups()[:MAX_SLOTS]):
            slots[i] = POWER_UP_CODES[token.type]
        return {
            "board": snap.render_grid().astype(np.int8),
            "next_piece": int(snap.next_kind) if snap.next_kind is not None else 0,
            "counters": np.array([snap.score, snap.level, snap.lines, snap.combo], dtype=np.float32),
            "active_power_up": POWER_UP_CODES[snap.active_power_up] if snap.active_power_up is not None else 0,
            "power_up_slots": slots,
        }

    def _get_info(self, snap: Snapshot) -> Dict[str, Any]:
        return {
            "score": snap.score,
            "lines": snap.lines,
            "level": snap.level,
            "high_score": snap.high_score,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        if seed is not None:
            self.config = replace(self.config, random_seed=seed)
            high_score = self.game.state.scores.high_score
            self.game = TetrisUltraGame(self.config, self.rules)
            self.game.state.scores.high_score = high_score
        self._steps = 0
        snap = self.game.start()
        self._last_snapshot = snap
        return self._get_obs(snap), self._get_info(snap)

    def step(self, action: int):
        event = ACTIONS[int(action)]
        before = self.game.score
        if event is not None:
            self.game.dispatch(event)
        snap = self.game.dispatch(Advance(self.step_ms))
        self._steps += 1

        reward = float(snap.score - before)
        terminated = snap.game_over
        truncated = self._steps >= self.max_episode_steps
        self._last_snapshot = snap
        return self._get_obs(snap), reward, terminated, truncated, self._get_info(snap)

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        snap = self._last_snapshot or self.game.snapshot()
        grid = snap.render_grid()
        cell = 12
        h, w = grid.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = _color_for_value(int(grid[y, x]))
        return img

    def close(self) -> None:
        pass
