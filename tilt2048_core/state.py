from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class GameState:
    """Score bookkeeping for one session. Replaced, never mutated, after every operation.

    An ended game always has max_score >= score.
    """
    score: int = 0
    max_score: int = 0  # updated only when a game ends
    game_over: bool = False

    def __post_init__(self) -> None:
        if self.score < 0 or self.max_score < 0:
            raise ValueError(f'Scores must be non-negative, got score={self.score} max_score={self.max_score}')
        if self.game_over and self.max_score < self.score:
            raise ValueError(f'An ended game needs max_score >= score, got score={self.score} max_score={self.max_score}')

    def with_score(self, delta: int) -> 'GameState':
        if delta < 0:
            raise ValueError(f'Score cannot decrease within a game (delta={delta})')
        score = self.score + delta
        best = max(score, self.max_score) if self.game_over else self.max_score
        return replace(self, score=score, max_score=best)

    def cleared(self) -> 'GameState':
        """State for a fresh game: score reset, max score kept."""
        return GameState(score=0, max_score=self.max_score, game_over=False)
