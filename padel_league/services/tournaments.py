"""Helpers for tournament orchestration: results, playoffs and snapshots."""

from __future__ import annotations

import logging
from typing import Sequence

from ..schemas import Match, Mode, Team, TournamentConfig, TournamentSnapshot
from .playoffs import advance_winner, build_playoffs, should_generate_playoffs
from .rankings import calculate_player_rankings
from .scoring import resolve_score
from .standings import calculate_standings
from .stats import calculate_pair_stats, calculate_streaks

logger = logging.getLogger(__name__)


def regular_matches(matches: Sequence[Match]) -> list[Match]:
    return [m for m in matches if not m.isPlayoff]


def resolve_winner(match: Match, mode: Mode) -> Match:
    """Return ``match`` with ``winnerId`` derived from its score.

    Americano sides are ad-hoc pairs with no team id, so no winner is set.
    """

    winner_id = None
    if match.is_complete and mode != "AMERICANO":
        side = resolve_score(match.score).winner
        if side == "A":
            winner_id = match.teamAId
        elif side == "B":
            winner_id = match.teamBId
    return match.model_copy(update={"winnerId": winner_id})


def record_result(
    teams: Sequence[Team],
    matches: Sequence[Match],
    updated: Match,
    config: TournamentConfig,
) -> list[Match]:
    """Merge ``updated`` into ``matches`` and apply its knock-on effects.

    The winner is resolved, a playoff winner moves into its next match and,
    once the last regular match is played, the playoff bracket is appended.
    Returns a new list; an unknown match id leaves it unchanged.
    """

    if not any(m.id == updated.id for m in matches):
        logger.info("ignoring result for unknown match %s", updated.id)
        return list(matches)

    updated = resolve_winner(updated, config.mode)
    result = [updated if m.id == updated.id else m for m in matches]
    result = advance_winner(result, updated)

    if should_generate_playoffs(config, result):
        standings = calculate_standings(teams, regular_matches(result), config.mode)
        bracket = build_playoffs(standings, config.playoffSize)
        if bracket:
            logger.info("regular season complete; adding %d playoff matches", len(bracket))
        result.extend(bracket)

    return result


def build_snapshot(
    teams: Sequence[Team], matches: Sequence[Match], mode: Mode = "DOUBLES"
) -> TournamentSnapshot:
    """Every analytics view, recomputed from the regular-season matches."""

    regular = regular_matches(matches)
    return TournamentSnapshot(
        standings=calculate_standings(teams, regular, mode),
        rankings=calculate_player_rankings(teams, regular),
        streaks=calculate_streaks(teams, regular),
        pairs=calculate_pair_stats(teams, regular),
    )
