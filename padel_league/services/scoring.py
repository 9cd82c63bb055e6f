"""Turn a set-by-set score into set and game totals."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from ..schemas import MatchScore


@dataclass(frozen=True)
class ScoreOutcome:
    sets_a: int = 0
    sets_b: int = 0
    games_a: int = 0
    games_b: int = 0

    @property
    def winner(self) -> Optional[Literal["A", "B"]]:
        """Side with more sets won, or ``None`` when the sets are level."""
        if self.sets_a > self.sets_b:
            return "A"
        if self.sets_b > self.sets_a:
            return "B"
        return None

    def for_side(self, side: str) -> tuple[int, int, int, int]:
        """Return ``(sets_won, sets_lost, games_won, games_lost)`` for ``side``."""
        if side == "A":
            return self.sets_a, self.sets_b, self.games_a, self.games_b
        return self.sets_b, self.sets_a, self.games_b, self.games_a


def resolve_score(score: MatchScore) -> ScoreOutcome:
    """Count sets and games for both sides.

    A set goes to the side with the strictly greater value; level sets
    (including an uncontested ``0-0`` third set) award nothing.
    """

    sets_a = sets_b = games_a = games_b = 0
    for set_score in score.sets():
        games_a += set_score.a
        games_b += set_score.b
        if set_score.a > set_score.b:
            sets_a += 1
        elif set_score.b > set_score.a:
            sets_b += 1
    return ScoreOutcome(sets_a=sets_a, sets_b=sets_b, games_a=games_a, games_b=games_b)
