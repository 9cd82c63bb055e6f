"""Fixture generation for round-robin and Americano formats."""

from __future__ import annotations

import logging
import random
from typing import Optional, Sequence

from .. import config as settings
from ..schemas import Match, Team, TournamentConfig
from .lineups import AMERICANO_SIDE, GHOST_PREFIX

logger = logging.getLogger(__name__)

# Partitions of a block of four into two pairs, one per round of a pass.
_BLOCK_PARTITIONS = (
    ((0, 1), (2, 3)),
    ((0, 2), (1, 3)),
    ((0, 3), (1, 2)),
)


def schedule_round_robin(teams: Sequence[Team], double_round: bool = False) -> list[Match]:
    """Berger-table round robin.

    Every pair of teams meets once per leg. Odd rosters get a bye slot which
    produces no match. With ``double_round`` a mirrored second leg follows,
    sides swapped and rounds offset by the first leg's length.
    """

    if len(teams) < 2:
        logger.info("round robin needs at least two teams (got %d)", len(teams))
        return []

    roster: list[Optional[str]] = [t.id for t in teams]
    if len(roster) % 2 == 1:
        roster.append(None)

    total_rounds = len(roster) - 1
    half = len(roster) // 2
    matches: list[Match] = []

    for round_index in range(total_rounds):
        for idx in range(half):
            a = roster[idx]
            b = roster[-(idx + 1)]
            if a is None or b is None:
                continue
            matches.append(
                Match(
                    id=f"match-{round_index}-{idx}",
                    teamAId=a,
                    teamBId=b,
                    round=round_index + 1,
                )
            )

        # Rotate roster for next round (except the first element).
        anchor = roster[0]
        middle = roster[1:]
        middle = [middle[-1], *middle[:-1]]
        roster = [anchor, *middle]

    if double_round:
        first_leg = list(matches)
        for index, original in enumerate(first_leg):
            matches.append(
                Match(
                    id=f"match-return-{index}",
                    teamAId=original.teamBId,
                    teamBId=original.teamAId,
                    round=original.round + total_rounds,
                )
            )

    logger.debug(
        "scheduled %d round-robin matches for %d teams", len(matches), len(teams)
    )
    return matches


def schedule_americano(
    participants: Sequence[Team],
    *,
    passes: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> list[Match]:
    """Rotating-partner schedule for individual participants.

    Each pass shuffles the roster, cuts it into blocks of four and plays the
    three ways of splitting every block into two pairs, so within a block
    everyone partners and opposes everyone else once. Rosters are padded with
    ghosts to a multiple of four; any block holding a ghost is skipped.
    Pass ``k`` occupies rounds ``3k+1`` to ``3k+3``.

    ``rng`` defaults to a generator seeded from system entropy.
    """

    if passes is None:
        passes = settings.AMERICANO_MIXING_PASSES
    rng = rng or random.Random()

    player_ids = [p.id for p in participants]
    ghosts: set[str] = set()
    taken = set(player_ids)
    counter = 0
    while len(player_ids) % 4:
        ghost_id = f"{GHOST_PREFIX}{counter}"
        counter += 1
        # Never reuse an id a real participant already holds.
        if ghost_id in taken:
            continue
        ghosts.add(ghost_id)
        player_ids.append(ghost_id)

    matches: list[Match] = []
    for mix in range(passes):
        order = list(player_ids)
        rng.shuffle(order)

        for offset in range(0, len(order), 4):
            block = order[offset : offset + 4]
            if len(block) < 4 or ghosts.intersection(block):
                continue
            for part, (side_a, side_b) in enumerate(_BLOCK_PARTITIONS, start=1):
                matches.append(
                    Match(
                        id=f"am-mix{mix}-g{offset}-r{part}",
                        teamAId=AMERICANO_SIDE,
                        teamBId=AMERICANO_SIDE,
                        playersAIds=[block[i] for i in side_a],
                        playersBIds=[block[i] for i in side_b],
                        round=mix * 3 + part,
                    )
                )

    matches.sort(key=lambda m: m.round)
    logger.debug(
        "scheduled %d americano matches for %d players over %d passes",
        len(matches),
        len(participants),
        passes,
    )
    return matches


def generate_schedule(
    teams: Sequence[Team],
    config: TournamentConfig,
    *,
    rng: Optional[random.Random] = None,
) -> list[Match]:
    """Initial fixture list for ``config.mode``."""

    if config.mode == "AMERICANO":
        return schedule_americano(teams, rng=rng)
    return schedule_round_robin(teams, config.doubleRound)
