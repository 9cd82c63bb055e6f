"""Individual player rankings with per-match proportional metrics."""

from __future__ import annotations

import logging
from functools import cmp_to_key
from typing import Sequence

from ..schemas import Match, PlayerStats, Team
from .lineups import index_teams, roster_names, side_players
from .scoring import resolve_score

logger = logging.getLogger(__name__)

WIN_RATE_TOLERANCE = 0.1
SET_DIFF_TOLERANCE = 0.01


def _compare(a: PlayerStats, b: PlayerStats) -> int:
    if abs(b.winRate - a.winRate) > WIN_RATE_TOLERANCE:
        return -1 if a.winRate > b.winRate else 1
    if abs(b.avgSetDiff - a.avgSetDiff) > SET_DIFF_TOLERANCE:
        return -1 if a.avgSetDiff > b.avgSetDiff else 1
    if a.avgGameDiff != b.avgGameDiff:
        return -1 if a.avgGameDiff > b.avgGameDiff else 1
    return 0


def calculate_player_rankings(
    teams: Sequence[Team], matches: Sequence[Match]
) -> list[PlayerStats]:
    """Credit every fielded player with the result of their side.

    Players come from the explicit lineup when present, otherwise from the
    team's members (or its name when it has none). Names first seen in a
    lineup are added on the fly.
    """

    teams_by_id = index_teams(teams)
    stats: dict[str, PlayerStats] = {}

    for team in teams:
        for name in roster_names(team):
            stats.setdefault(name, PlayerStats(name=name))

    for match in matches:
        if not match.is_complete:
            continue

        players_a = side_players(match, "A", teams_by_id)
        players_b = side_players(match, "B", teams_by_id)
        if not players_a or not players_b:
            logger.debug("skipping match %s: players not resolvable", match.id)
            continue

        outcome = resolve_score(match.score)
        winner = outcome.winner
        for side, names in (("A", players_a), ("B", players_b)):
            sets_won, sets_lost, games_won, games_lost = outcome.for_side(side)
            for name in names:
                row = stats.setdefault(name, PlayerStats(name=name))
                row.played += 1
                row.setsWon += sets_won
                row.setsLost += sets_lost
                row.gamesWon += games_won
                row.gamesLost += games_lost
                if winner == side:
                    row.won += 1
                elif winner is not None:
                    row.lost += 1

    for row in stats.values():
        if row.played > 0:
            row.winRate = row.won / row.played * 100
            row.avgSetDiff = (row.setsWon - row.setsLost) / row.played
            row.avgGameDiff = (row.gamesWon - row.gamesLost) / row.played

    return sorted(stats.values(), key=cmp_to_key(_compare))
