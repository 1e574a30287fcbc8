"""Power-up tokens and their effects.

Tokens spawn after line clears and sit in an inventory until the player spends
them. Only one effect may be running at a time: activating a token takes an
"active" lock that is released by a timer on the game clock (15 s for slow,
1 s for everything else). Ghost mode has its own 10 s timer.

Timers are plain ``(due_ms, kind)`` records owned by the manager; the game
loop decides when the clock reaches them, so restarting a game (which builds
a fresh manager) drops every pending expiration with it.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional

from .grid import GameGrid
from .rules import ScoringRules
from .scoring import ScoreBoard

logger = logging.getLogger(__name__)


class PowerUpType(str, Enum):
    BOMB = "bomb"
    SLOW = "slow"
    CLEAR = "clear"
    GHOST = "ghost"


class TimerKind(Enum):
    GHOST_END = "ghost_end"
    RELEASE = "release"


@dataclass
class PowerUp:
    type: PowerUpType
    x: int
    y: int = 0
    active: bool = True


@dataclass(frozen=True)
class Timer:
    due_ms: int
    kind: TimerKind


@dataclass
class PowerUpManager:
    tokens: List[PowerUp] = field(default_factory=list)
    active: Optional[PowerUpType] = None
    ghost_mode: bool = False
    timers: List[Timer] = field(default_factory=list)

    def copy(self) -> "PowerUpManager":
        return PowerUpManager(
            tokens=[replace(t) for t in self.tokens],
            active=self.active,
            ghost_mode=self.ghost_mode,
            timers=list(self.timers),
        )

    @property
    def slowed(self) -> bool:
        return self.active is PowerUpType.SLOW

    def available_slots(self) -> List[int]:
        """Token indices that can still be spent, in spawn order."""
        return [i for i, token in enumerate(self.tokens) if token.active]

    def maybe_spawn(self, lines_cleared: int, rng: random.Random, width: int,
                    rules: ScoringRules) -> Optional[PowerUp]:
        if lines_cleared <= 0:
            return None
        if rng.random() >= rules.power_up_chance:
            return None
        kind = rng.choice(list(PowerUpType))
        token = PowerUp(type=kind, x=rng.randrange(width), y=0, active=True)
        self.tokens.append(token)
        logger.debug("Spawned %s power-up at column %d", kind.value, token.x)
        return token

    def activate(self, slot: int, grid: GameGrid, board: ScoreBoard,
                 rules: ScoringRules, now_ms: int) -> Optional[PowerUpType]:
        """Spend the ``slot``-th available token. Returns its type, or None if rejected."""
        if self.active is not None:
            return None
        slots = self.available_slots()
        if not 0 <= slot < len(slots):
            return None

        token = self.tokens[slots[slot]]
        token.active = False
        self.active = token.type

        if token.type is PowerUpType.BOMB:
            grid.clear_rows(grid.height - rules.bomb_rows, grid.height)
            board.add(rules.bomb_score)
        elif token.type is PowerUpType.CLEAR:
            grid.reset()
            board.add(rules.clear_score)
        elif token.type is PowerUpType.GHOST:
            self.ghost_mode = True
            # The latest activation decides when ghost mode ends.
            self.timers = [t for t in self.timers if t.kind is not TimerKind.GHOST_END]
            self._schedule(now_ms + rules.ghost_duration_ms, TimerKind.GHOST_END)

        hold = rules.slow_duration_ms if token.type is PowerUpType.SLOW else rules.power_up_lock_ms
        self._schedule(now_ms + hold, TimerKind.RELEASE)
        logger.debug("Activated %s power-up (slot %d)", token.type.value, slot)
        return token.type

    def _schedule(self, due_ms: int, kind: TimerKind) -> None:
        self.timers.append(Timer(due_ms=due_ms, kind=kind))

    def next_due(self) -> Optional[int]:
        if not self.timers:
            return None
        return min(t.due_ms for t in self.timers)

    def fire_next(self, now_ms: int) -> Optional[Timer]:
        """Fire the earliest timer due at or before ``now_ms``."""
        due = [t for t in self.timers if t.due_ms <= now_ms]
        if not due:
            return None
        timer = min(due, key=lambda t: t.due_ms)
        self.timers.remove(timer)
        if timer.kind is TimerKind.GHOST_END:
            self.ghost_mode = False
        else:
            logger.debug("Power-up %s expired", self.active.value if self.active else None)
            self.active = None
        return timer
