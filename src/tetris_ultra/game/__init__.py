"""Game module for Tetris Ultra.

Exports the core engine and supporting classes:
- GameGrid: Board cells and row clearing
- Piece / TetrominoType: Shape catalog and clockwise rotation
- collides: Placement test against walls, floor and settled cells
- ScoringRules: Scoring, speed and power-up constants
- ScoreBoard: Score, lines, level, combo and high score counters
- PowerUpManager: Power-up tokens, effects and expiry timers
- TetrisUltraGame / apply: Event-driven game loop and state transitions
"""

from .grid import GameGrid
from .pieces import BASE_SHAPES, COLORS, Piece, TetrominoType, color_rgb, rotate_cw
from .collision import collides, piece_collides
from .rules import ScoringRules
from .scoring import LineClearResult, ScoreBoard, clear_lines, sync_level
from .powerups import PowerUp, PowerUpManager, PowerUpType
from .state import GameConfig, GameState, GameStatus
from .core import (
    GHOST_CELL,
    Action,
    ActivatePowerUp,
    Advance,
    Snapshot,
    TetrisUltraGame,
    apply,
)

__all__ = [
    "GameGrid",
    "BASE_SHAPES",
    "COLORS",
    "color_rgb",
    "Piece",
    "TetrominoType",
    "rotate_cw",
    "collides",
    "piece_collides",
    "ScoringRules",
    "LineClearResult",
    "ScoreBoard",
    "clear_lines",
    "sync_level",
    "PowerUp",
    "PowerUpManager",
    "PowerUpType",
    "GameConfig",
    "GameState",
    "GameStatus",
    "GHOST_CELL",
    "Action",
    "ActivatePowerUp",
    "Advance",
    "Snapshot",
    "TetrisUltraGame",
    "apply",
]
