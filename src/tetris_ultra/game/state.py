from __future__ import annotations

import copy
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .grid import GameGrid
from .pieces import Piece, TetrominoType
from .powerups import PowerUpManager
from .scoring import ScoreBoard


class GameStatus(Enum):
    NOT_STARTED = "not_started"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    random_seed: Optional[int] = None
    spawn_y: int = 0

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Board dimensions must be positive, got {self.width}x{self.height}")


@dataclass
class GameState:
    grid: GameGrid
    rng: random.Random
    status: GameStatus = GameStatus.NOT_STARTED
    piece: Optional[Piece] = None
    next_kind: Optional[TetrominoType] = None
    scores: ScoreBoard = field(default_factory=ScoreBoard)
    power_ups: PowerUpManager = field(default_factory=PowerUpManager)
    clock_ms: int = 0
    drop_interval_ms: int = 0
    next_drop_ms: Optional[int] = None

    @classmethod
    def initial(cls, config: GameConfig) -> "GameState":
        return cls(grid=GameGrid(config.width, config.height), rng=random.Random(config.random_seed))

    def copy(self) -> "GameState":
        # Pieces are immutable, so sharing them between copies is safe.
        return GameState(
            grid=self.grid.copy(),
            rng=copy.deepcopy(self.rng),
            status=self.status,
            piece=self.piece,
            next_kind=self.next_kind,
            scores=copy.copy(self.scores),
            power_ups=self.power_ups.copy(),
            clock_ms=self.clock_ms,
            drop_interval_ms=self.drop_interval_ms,
            next_drop_ms=self.next_drop_ms,
        )
