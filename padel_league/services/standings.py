"""Team standings rebuilt from the full match list."""

from __future__ import annotations

import logging
from functools import cmp_to_key
from typing import Sequence

from ..schemas import Match, Mode, Team, TeamStats
from .lineups import BYE
from .scoring import resolve_score

logger = logging.getLogger(__name__)

POINTS_PER_WIN = 3
# Points-per-match gap above which Americano standings rank by the ratio.
RATIO_TOLERANCE = 0.01


def _default_stats() -> dict[str, int]:
    return {
        "played": 0,
        "won": 0,
        "lost": 0,
        "points": 0,
        "setsWon": 0,
        "setsLost": 0,
        "gamesWon": 0,
        "gamesLost": 0,
    }


def _side_ids(match: Match, mode: Mode) -> tuple[list[str], list[str]] | None:
    if mode == "AMERICANO":
        if not match.playersAIds or not match.playersBIds:
            return None
        return list(match.playersAIds), list(match.playersBIds)
    if match.teamAId == BYE or match.teamBId == BYE:
        return None
    return [match.teamAId], [match.teamBId]


def _points_ratio(row: TeamStats) -> float:
    return row.points / row.played if row.played else 0.0


def _compare(mode: Mode):
    def compare(a: TeamStats, b: TeamStats) -> int:
        if mode == "AMERICANO":
            ratio_a, ratio_b = _points_ratio(a), _points_ratio(b)
            if abs(ratio_a - ratio_b) > RATIO_TOLERANCE:
                return -1 if ratio_a > ratio_b else 1
        if a.points != b.points:
            return b.points - a.points
        return b.game_diff - a.game_diff

    return compare


def calculate_standings(
    teams: Sequence[Team], matches: Sequence[Match], mode: Mode = "DOUBLES"
) -> list[TeamStats]:
    """Aggregate played matches into ranked standings.

    In Americano mode each roster entry is an individual and the explicit
    lineups decide who is credited. A match is skipped when it is unplayed,
    has no score, involves a bye or references an id missing from the roster.
    Level sets count as played for both sides with no win, loss or points.
    """

    stats: dict[str, dict[str, int]] = {t.id: _default_stats() for t in teams}

    for match in matches:
        if not match.is_complete:
            continue

        sides = _side_ids(match, mode)
        if sides is None:
            logger.debug("skipping match %s: sides not resolvable", match.id)
            continue
        ids_a, ids_b = sides
        if any(pid not in stats for pid in (*ids_a, *ids_b)):
            logger.debug("skipping match %s: unknown participant", match.id)
            continue

        outcome = resolve_score(match.score)
        winner = outcome.winner
        for side, ids in (("A", ids_a), ("B", ids_b)):
            sets_won, sets_lost, games_won, games_lost = outcome.for_side(side)
            for pid in ids:
                row = stats[pid]
                row["played"] += 1
                row["setsWon"] += sets_won
                row["setsLost"] += sets_lost
                row["gamesWon"] += games_won
                row["gamesLost"] += games_lost
                if winner == side:
                    row["won"] += 1
                    row["points"] += POINTS_PER_WIN
                elif winner is not None:
                    row["lost"] += 1

    standings = [
        TeamStats(
            teamId=tid,
            winRate=(values["won"] / values["played"] * 100) if values["played"] else 0.0,
            **values,
        )
        for tid, values in stats.items()
    ]
    return sorted(standings, key=cmp_to_key(_compare(mode)))
