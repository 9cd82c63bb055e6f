"""Single-elimination playoffs seeded from the regular-season standings."""

from __future__ import annotations

import logging
from typing import Sequence

from ..schemas import Match, TeamStats, TournamentConfig

logger = logging.getLogger(__name__)

ALL_TEAMS = -1
MAX_PLAYOFF_SIZE = 16
SEMIFINAL_ROUND = 98
FINAL_ROUND = 99
FINAL_ID = "final"


def resolve_playoff_size(requested: int, standings_count: int) -> int:
    """Bracket size for ``requested``; ``-1`` picks the largest power of two
    not exceeding the number of teams, capped at 16 and at least 2."""

    if requested != ALL_TEAMS:
        return requested
    size = 2
    while size * 2 <= min(standings_count, MAX_PLAYOFF_SIZE):
        size *= 2
    return size


def build_playoffs(standings: Sequence[TeamStats], size: int) -> list[Match]:
    """Bracket matches for the top ``size`` teams of ``standings``.

    Only finals (2) and semifinals + final (4) are built; other sizes, or
    fewer ranked teams than requested, yield no matches.
    """

    size = resolve_playoff_size(size, len(standings))
    if size <= 0:
        return []
    if size not in (2, 4):
        logger.info("playoff size %d is not supported; no bracket built", size)
        return []
    if len(standings) < size:
        logger.info(
            "playoff size %d needs %d ranked teams (got %d)", size, size, len(standings)
        )
        return []

    seeds = [row.teamId for row in standings[:size]]
    if size == 2:
        return [
            Match(
                id=FINAL_ID,
                teamAId=seeds[0],
                teamBId=seeds[1],
                round=FINAL_ROUND,
                isPlayoff=True,
                playoffLabel="Final",
            )
        ]

    return [
        Match(
            id="semi-1",
            teamAId=seeds[0],
            teamBId=seeds[3],
            round=SEMIFINAL_ROUND,
            isPlayoff=True,
            playoffLabel="Semifinal A",
            nextMatchId=FINAL_ID,
            nextMatchSlot="A",
        ),
        Match(
            id="semi-2",
            teamAId=seeds[1],
            teamBId=seeds[2],
            round=SEMIFINAL_ROUND,
            isPlayoff=True,
            playoffLabel="Semifinal B",
            nextMatchId=FINAL_ID,
            nextMatchSlot="B",
        ),
        Match(
            id=FINAL_ID,
            teamAId="winner-semi-1",
            teamBId="winner-semi-2",
            round=FINAL_ROUND,
            isPlayoff=True,
            playoffLabel="Final",
        ),
    ]


def should_generate_playoffs(config: TournamentConfig, matches: Sequence[Match]) -> bool:
    """True once every regular match is played and no bracket exists yet."""

    if config.mode == "AMERICANO" or config.playoffSize == 0:
        return False
    regular = [m for m in matches if not m.isPlayoff]
    if not regular or any(m.isPlayoff for m in matches):
        return False
    return all(m.played for m in regular)


def advance_winner(matches: Sequence[Match], match: Match) -> list[Match]:
    """Copy of ``matches`` with ``match``'s winner written into its next slot."""

    if not (match.isPlayoff and match.winnerId and match.nextMatchId):
        return list(matches)
    if match.nextMatchSlot not in ("A", "B"):
        return list(matches)
    field = "teamAId" if match.nextMatchSlot == "A" else "teamBId"

    advanced = []
    for candidate in matches:
        if candidate.id == match.nextMatchId:
            candidate = candidate.model_copy(update={field: match.winnerId})
            logger.debug(
                "advanced %s into %s slot %s",
                match.winnerId,
                candidate.id,
                match.nextMatchSlot,
            )
        advanced.append(candidate)
    return advanced
