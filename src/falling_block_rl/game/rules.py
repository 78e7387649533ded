from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    points_per_row: int = 10
    initial_drop_time: int = 1000
    minimum_drop_time: int = 100
    # Drop time shrinks by this factor per point scored
    speed_increase_factor: float = 0.995

    def __post_init__(self) -> None:
        if self.minimum_drop_time > self.initial_drop_time:
            raise ValueError("minimum_drop_time must not exceed initial_drop_time")
        if not 0.0 < self.speed_increase_factor <= 1.0:
            raise ValueError("speed_increase_factor must be in (0, 1]")

    def score_for_lines(self, lines: int) -> int:
        # Linear in rows; no multi-line bonus
        if lines <= 0:
            return 0
        return lines * self.points_per_row

    def drop_time_for_score(self, score: int) -> float:
        return max(self.initial_drop_time * self.speed_increase_factor ** score, float(self.minimum_drop_time))


class ScoreController:
    """Sole writer of score and drop interval."""

    def __init__(self, rules: ScoringRules) -> None:
        self.rules = rules
        self.score = 0
        self.lines_cleared_total = 0
        self.drop_interval = float(rules.initial_drop_time)

    def reset(self) -> None:
        self.score = 0
        self.lines_cleared_total = 0
        self.drop_interval = float(self.rules.initial_drop_time)

    def record_sweep(self, lines: int) -> int:
        """Credit a sweep of `lines` rows and return the points gained."""
        gained = self.rules.score_for_lines(lines)
        if gained == 0:
            return 0
        self.score += gained
        self.lines_cleared_total += lines
        self.drop_interval = self.rules.drop_time_for_score(self.score)
        return gained
