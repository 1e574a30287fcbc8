"""Line clearing and score bookkeeping run once per locked piece."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .grid import GameGrid
from .rules import ScoringRules

logger = logging.getLogger(__name__)


@dataclass
class ScoreBoard:
    score: int = 0
    lines: int = 0
    level: int = 1
    combo: int = 0
    high_score: int = 0

    def add(self, points: int) -> None:
        self.score += points

    def record_high_score(self) -> int:
        self.high_score = max(self.high_score, self.score)
        return self.high_score


@dataclass
class LineClearResult:
    lines_cleared: int
    points: int
    combo: int


def clear_lines(grid: GameGrid, board: ScoreBoard, rules: ScoringRules) -> LineClearResult:
    """Remove complete rows and score them.

    The level bonus uses the level in effect before this lock; raising the
    level is left to :func:`sync_level`.
    """
    n = grid.filter_completed_rows()
    board.lines += n
    if n == 0:
        board.combo = 0
        return LineClearResult(lines_cleared=0, points=0, combo=0)

    board.combo += 1
    points = (
        rules.score_for_lines(n)
        + board.combo * rules.combo_bonus
        + board.level * rules.level_bonus
    )
    board.add(points)
    logger.debug("Cleared %d row(s): +%d (combo %d, level %d)", n, points, board.combo, board.level)
    return LineClearResult(lines_cleared=n, points=points, combo=board.combo)


def sync_level(board: ScoreBoard, rules: ScoringRules) -> int:
    """Raise the level to match the line total; return the bonus awarded."""
    new_level = rules.level_for_lines(board.lines)
    if new_level <= board.level:
        return 0
    board.level = new_level
    bonus = new_level * rules.level_up_bonus
    board.add(bonus)
    logger.debug("Level up to %d: +%d", new_level, bonus)
    return bonus
