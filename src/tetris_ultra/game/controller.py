"""Active piece handling: movement, rotation, drops, locking and spawning.

Every function here mutates the ``GameState`` it is given. The game loop is
responsible for only calling them on a private copy while a game is running.
"""

from __future__ import annotations

import logging
import random
from typing import Optional

from .collision import piece_collides
from .pieces import Piece, TetrominoType
from .rules import ScoringRules
from .scoring import LineClearResult, clear_lines, sync_level
from .state import GameConfig, GameState, GameStatus

logger = logging.getLogger(__name__)


def random_kind(rng: random.Random) -> TetrominoType:
    return rng.choice(list(TetrominoType))


def spawn_piece(state: GameState, config: GameConfig) -> bool:
    """Promote the queued piece. Returns False (and ends the game) if it cannot fit."""
    kind = state.next_kind if state.next_kind is not None else random_kind(state.rng)
    piece = Piece.spawn(kind, config.width, config.spawn_y)
    if piece_collides(state.grid, piece):
        state.piece = None
        state.status = GameStatus.GAME_OVER
        high = state.scores.record_high_score()
        logger.info("Game over: %s blocked at spawn; score %d, high score %d",
                    kind.name, state.scores.score, high)
        return False
    state.piece = piece
    state.next_kind = random_kind(state.rng)
    return True


def move(state: GameState, dx: int) -> bool:
    assert state.piece is not None
    if piece_collides(state.grid, state.piece, dx=dx):
        return False
    state.piece = state.piece.moved(dx, 0)
    return True


def rotate(state: GameState) -> bool:
    assert state.piece is not None
    rotated = state.piece.rotated()
    if piece_collides(state.grid, rotated):
        return False
    state.piece = rotated
    return True


def drop_distance(state: GameState) -> int:
    """How many rows the active piece can fall before it is blocked."""
    assert state.piece is not None
    distance = 0
    while not piece_collides(state.grid, state.piece, dy=distance + 1):
        distance += 1
    return distance


def ghost_row(state: GameState) -> Optional[int]:
    if state.piece is None:
        return None
    return state.piece.y + drop_distance(state)


def lock_piece(state: GameState, config: GameConfig, rules: ScoringRules) -> LineClearResult:
    """Merge the active piece, score the clear, then bring in the next piece."""
    assert state.piece is not None
    piece = state.piece
    for x, y in piece.cells():
        # Cells still above the board are lost.
        if y >= 0:
            state.grid.set_cell(x, y, int(piece.kind))
    logger.debug("Locked %s at (%d, %d)", piece.kind.name, piece.x, piece.y)

    result = clear_lines(state.grid, state.scores, rules)
    state.power_ups.maybe_spawn(result.lines_cleared, state.rng, config.width, rules)
    sync_level(state.scores, rules)
    spawn_piece(state, config)
    return result


def soft_drop(state: GameState, config: GameConfig, rules: ScoringRules) -> bool:
    """Move down one row, or lock in place. Returns True if the piece moved."""
    assert state.piece is not None
    if not piece_collides(state.grid, state.piece, dy=1):
        state.piece = state.piece.moved(0, 1)
        return True
    lock_piece(state, config, rules)
    return False


def hard_drop(state: GameState, config: GameConfig, rules: ScoringRules) -> int:
    distance = drop_distance(state)
    assert state.piece is not None
    state.piece = state.piece.moved(0, distance)
    state.scores.add(distance * rules.hard_drop_points)
    soft_drop(state, config, rules)
    return distance
