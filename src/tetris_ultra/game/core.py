from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import IntEnum
from typing import List, Optional, Tuple, Union

import numpy as np

from . import controller
from .grid import GameGrid
from .pieces import Piece, TetrominoType
from .powerups import PowerUp, PowerUpType
from .rules import ScoringRules
from .scoring import ScoreBoard
from .state import GameConfig, GameState, GameStatus

logger = logging.getLogger(__name__)

GHOST_CELL = -1


class Action(IntEnum):
    START = 0
    TOGGLE_PAUSE = 1
    LEFT = 2
    RIGHT = 3
    SOFT_DROP = 4
    ROTATE = 5
    HARD_DROP = 6


@dataclass(frozen=True)
class ActivatePowerUp:
    slot: int


@dataclass(frozen=True)
class Advance:
    elapsed_ms: int


Event = Union[Action, ActivatePowerUp, Advance]

_MOVEMENT = (Action.LEFT, Action.RIGHT, Action.SOFT_DROP, Action.ROTATE, Action.HARD_DROP)


def apply(state: GameState, event: Event, config: GameConfig, rules: ScoringRules) -> GameState:
    """Return the state that follows ``event``. ``state`` itself is left untouched."""
    new = state.copy()
    if isinstance(event, Action):
        if event is Action.START:
            new = _restart(new, config, rules)
        elif event is Action.TOGGLE_PAUSE:
            _toggle_pause(new)
        elif new.status is GameStatus.PLAYING:
            _move(new, event, config, rules)
    elif isinstance(event, ActivatePowerUp):
        if new.status in (GameStatus.PLAYING, GameStatus.PAUSED):
            new.power_ups.activate(event.slot, new.grid, new.scores, rules, new.clock_ms)
    elif isinstance(event, Advance):
        _advance(new, event.elapsed_ms, config, rules)
    else:
        raise TypeError(f"Unknown event: {event!r}")
    _sync_gravity(new, rules)
    return new


def _restart(old: GameState, config: GameConfig, rules: ScoringRules) -> GameState:
    state = GameState(
        grid=GameGrid(config.width, config.height),
        rng=old.rng,
        status=GameStatus.PLAYING,
        scores=ScoreBoard(high_score=old.scores.high_score),
    )
    controller.spawn_piece(state, config)
    logger.info("Game started (high score %d)", state.scores.high_score)
    return state


def _toggle_pause(state: GameState) -> None:
    if state.status is GameStatus.PLAYING:
        state.status = GameStatus.PAUSED
    elif state.status is GameStatus.PAUSED:
        state.status = GameStatus.PLAYING


def _move(state: GameState, action: Action, config: GameConfig, rules: ScoringRules) -> None:
    if action is Action.LEFT:
        controller.move(state, -1)
    elif action is Action.RIGHT:
        controller.move(state, 1)
    elif action is Action.ROTATE:
        controller.rotate(state)
    elif action is Action.SOFT_DROP:
        controller.soft_drop(state, config, rules)
    elif action is Action.HARD_DROP:
        controller.hard_drop(state, config, rules)


def _sync_gravity(state: GameState, rules: ScoringRules) -> None:
    """Keep the next gravity tick in line with status, level and slow-down."""
    if state.status is not GameStatus.PLAYING:
        state.next_drop_ms = None
        return
    interval = rules.drop_interval(state.scores.level, state.power_ups.slowed)
    if interval != state.drop_interval_ms or state.next_drop_ms is None:
        state.drop_interval_ms = interval
        state.next_drop_ms = state.clock_ms + interval


def _advance(state: GameState, elapsed_ms: int, config: GameConfig, rules: ScoringRules) -> None:
    if elapsed_ms < 0:
        raise ValueError(f"Cannot move the clock backwards ({elapsed_ms} ms)")
    target = state.clock_ms + elapsed_ms
    while True:
        timer_due = state.power_ups.next_due()
        drop_due = state.next_drop_ms
        if timer_due is not None and timer_due <= target and (drop_due is None or timer_due <= drop_due):
            state.clock_ms = max(state.clock_ms, timer_due)
            state.power_ups.fire_next(state.clock_ms)
        elif drop_due is not None and drop_due <= target:
            state.clock_ms = drop_due
            state.next_drop_ms = drop_due + state.drop_interval_ms
            controller.soft_drop(state, config, rules)
        else:
            break
        _sync_gravity(state, rules)
    state.clock_ms = target


@dataclass(frozen=True, eq=False)
class Snapshot:
    """Read-only view of a game for renderers and agents."""

    board: np.ndarray
    piece: Optional[Piece]
    next_kind: Optional[TetrominoType]
    score: int
    level: int
    lines: int
    combo: int
    high_score: int
    status: GameStatus
    power_ups: Tuple[PowerUp, ...]
    active_power_up: Optional[PowerUpType]
    ghost_mode: bool
    ghost_row: Optional[int]
    drop_interval_ms: int
    clock_ms: int

    @classmethod
    def of(cls, state: GameState) -> "Snapshot":
        board = state.grid.clone_state()
        board.setflags(write=False)
        return cls(
            board=board,
            piece=state.piece,
            next_kind=state.next_kind,
            score=state.scores.score,
            level=state.scores.level,
            lines=state.scores.lines,
            combo=state.scores.combo,
            high_score=state.scores.high_score,
            status=state.status,
            power_ups=tuple(replace(t) for t in state.power_ups.tokens),
            active_power_up=state.power_ups.active,
            ghost_mode=state.power_ups.ghost_mode,
            ghost_row=controller.ghost_row(state),
            drop_interval_ms=state.drop_interval_ms,
            clock_ms=state.clock_ms,
        )

    @property
    def game_over(self) -> bool:
        return self.status is GameStatus.GAME_OVER

    @property
    def paused(self) -> bool:
        return self.status is GameStatus.PAUSED

    def available_power_ups(self) -> List[PowerUp]:
        return [t for t in self.power_ups if t.active]

    def render_grid(self) -> np.ndarray:
        """Board with the falling piece and its landing preview drawn in."""
        grid = self.board.copy()
        if self.piece is None:
            return grid
        h, w = grid.shape
        if self.ghost_row is not None and self.ghost_row > self.piece.y:
            ghost = replace(self.piece, y=self.ghost_row)
            for x, y in ghost.cells():
                if 0 <= y < h and 0 <= x < w and grid[y, x] == 0:
                    grid[y, x] = GHOST_CELL
        for x, y in self.piece.cells():
            if 0 <= y < h:
                grid[y, x] = int(self.piece.kind)
        return grid


class TetrisUltraGame:
    """Holds the current state and feeds it events one at a time."""

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.state = GameState.initial(self.config)

    def dispatch(self, event: Event) -> Snapshot:
        self.state = apply(self.state, event, self.config, self.rules)
        return self.snapshot()

    def snapshot(self) -> Snapshot:
        return Snapshot.of(self.state)

    def start(self) -> Snapshot:
        return self.dispatch(Action.START)

    def toggle_pause(self) -> Snapshot:
        return self.dispatch(Action.TOGGLE_PAUSE)

    def move_left(self) -> Snapshot:
        return self.dispatch(Action.LEFT)

    def move_right(self) -> Snapshot:
        return self.dispatch(Action.RIGHT)

    def soft_drop(self) -> Snapshot:
        return self.dispatch(Action.SOFT_DROP)

    def rotate(self) -> Snapshot:
        return self.dispatch(Action.ROTATE)

    def hard_drop(self) -> Snapshot:
        return self.dispatch(Action.HARD_DROP)

    def activate_power_up(self, slot: int) -> Snapshot:
        return self.dispatch(ActivatePowerUp(slot))

    def advance(self, elapsed_ms: int) -> Snapshot:
        return self.dispatch(Advance(int(elapsed_ms)))

    @property
    def score(self) -> int:
        return self.state.scores.score

    @property
    def game_over(self) -> bool:
        return self.state.status is GameStatus.GAME_OVER
