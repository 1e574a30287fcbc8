from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    # Index = rows cleared in one lock; anything past the end scores the last entry.
    line_clear_scores: tuple[int, ...] = (0, 100, 300, 500, 800)
    combo_bonus: int = 50
    level_bonus: int = 10
    hard_drop_points: int = 2
    level_up_bonus: int = 100
    lines_per_level: int = 10

    power_up_chance: float = 0.3
    bomb_rows: int = 3
    bomb_score: int = 200
    clear_score: int = 500
    ghost_duration_ms: int = 10_000
    slow_duration_ms: int = 15_000
    power_up_lock_ms: int = 1_000

    base_interval_ms: int = 800
    interval_step_ms: int = 50
    min_interval_ms: int = 100
    slow_interval_ms: int = 1_000

    def __post_init__(self) -> None:
        if not self.line_clear_scores:
            raise ValueError("line_clear_scores must not be empty")
        if not 0.0 <= self.power_up_chance <= 1.0:
            raise ValueError(f"power_up_chance must be within [0, 1], got {self.power_up_chance}")
        if self.lines_per_level <= 0:
            raise ValueError("lines_per_level must be positive")

    def score_for_lines(self, lines: int) -> int:
        if lines <= 0:
            return 0
        if lines < len(self.line_clear_scores):
            return self.line_clear_scores[lines]
        return self.line_clear_scores[-1]

    def level_for_lines(self, lines: int) -> int:
        return lines // self.lines_per_level + 1

    def drop_interval(self, level: int, slowed: bool = False) -> int:
        if slowed:
            return self.slow_interval_ms
        return max(self.min_interval_ms, self.base_interval_ms - (level - 1) * self.interval_step_ms)
