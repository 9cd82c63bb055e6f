from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Sequence

from ..schemas import Match, PairStats, Streak, Team
from ..time_utils import parse_timestamp
from .lineups import index_teams, lineup_names, roster_names, side_players
from .scoring import resolve_score

logger = logging.getLogger(__name__)

RECENT_FORM_SPAN = 5


@dataclass
class _StreakState:
    """Running streak for one player while matches are replayed."""

    name: str
    current: int = 0
    max_win: int = 0
    max_loss: int = 0
    recent: deque = field(default_factory=lambda: deque(maxlen=RECENT_FORM_SPAN))

    def record(self, won: bool) -> None:
        self.recent.append("W" if won else "L")
        if won:
            self.current = self.current + 1 if self.current > 0 else 1
            self.max_win = max(self.max_win, self.current)
        else:
            self.current = self.current - 1 if self.current < 0 else -1
            self.max_loss = max(self.max_loss, -self.current)

    def to_schema(self) -> Streak:
        return Streak(
            name=self.name,
            current=self.current,
            maxWin=self.max_win,
            maxLoss=self.max_loss,
            recent=list(self.recent),
        )


def _chronological(matches: Sequence[Match]) -> list[Match]:
    played = [m for m in matches if m.is_complete]
    return sorted(played, key=lambda m: (parse_timestamp(m.date), m.round))


def calculate_streaks(teams: Sequence[Team], matches: Sequence[Match]) -> list[Streak]:
    """Replay played matches in date/round order and track win-loss runs.

    ``current`` is positive for a winning run and negative for a losing
    one; ``recent`` keeps the last five results, oldest first. Matches
    whose sets are level leave every streak untouched.
    """

    teams_by_id = index_teams(teams)
    streaks: dict[str, _StreakState] = {}
    for team in teams:
        for name in roster_names(team):
            streaks.setdefault(name, _StreakState(name=name))

    for match in _chronological(matches):
        winner = resolve_score(match.score).winner
        if winner is None:
            logger.debug("match %s has no winner; streaks unchanged", match.id)
            continue
        for side in ("A", "B"):
            for name in side_players(match, side, teams_by_id) or []:
                state = streaks.setdefault(name, _StreakState(name=name))
                state.record(won=winner == side)

    result = [state.to_schema() for state in streaks.values()]
    return sorted(result, key=lambda s: s.current, reverse=True)


def pair_key(first: str, second: str) -> tuple[str, str, str]:
    """Canonical ``(key, p1, p2)`` for an unordered pair of names."""
    p1, p2 = sorted((first, second))
    return f"{p1} & {p2}", p1, p2


def _pair_side(match: Match, side: str, teams_by_id) -> list[str] | None:
    lineup = match.playersAIds if side == "A" else match.playersBIds
    if lineup and len(lineup) == 2:
        return lineup_names(lineup, teams_by_id)
    team = teams_by_id.get(match.teamAId if side == "A" else match.teamBId)
    if team is not None and len(team.players) == 2:
        return list(team.players)
    return None


def calculate_pair_stats(teams: Sequence[Team], matches: Sequence[Match]) -> list[PairStats]:
    """Win rate of every two-player partnership that took the court together."""

    teams_by_id = index_teams(teams)
    pairs: dict[str, PairStats] = {}

    for match in matches:
        if not match.is_complete:
            continue
        winner = resolve_score(match.score).winner
        for side in ("A", "B"):
            names = _pair_side(match, side, teams_by_id)
            if names is None:
                continue
            key, p1, p2 = pair_key(*names)
            row = pairs.setdefault(key, PairStats(key=key, p1=p1, p2=p2))
            row.played += 1
            if winner == side:
                row.won += 1
            elif winner is not None:
                row.lost += 1

    for row in pairs.values():
        row.winRate = row.won / row.played * 100

    return sorted(pairs.values(), key=lambda p: p.winRate, reverse=True)
