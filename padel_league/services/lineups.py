"""Resolve which player names took part on each side of a match."""

from __future__ import annotations

from typing import Mapping, Optional, Sequence

from ..schemas import Match, Team

BYE = "BYE"
GHOST_PREFIX = "GHOST-"
AMERICANO_SIDE = "mix"


def index_teams(teams: Sequence[Team]) -> dict[str, Team]:
    return {t.id: t for t in teams}


def roster_names(team: Team) -> list[str]:
    """Member names of ``team``, falling back to the team's own name."""
    return list(team.players) if team.players else [team.name]


def lineup_names(ids: Sequence[str], teams_by_id: Mapping[str, Team]) -> list[str]:
    """Map lineup entries to player names.

    Americano lineups hold roster ids (one player per entry) and resolve to
    that entry's name; team lineups already hold player names.
    """
    names = []
    for pid in ids:
        team = teams_by_id.get(pid)
        names.append(team.name if team is not None else pid)
    return names


def side_players(
    match: Match, side: str, teams_by_id: Mapping[str, Team]
) -> Optional[list[str]]:
    """Players fielded by ``side`` (``"A"`` or ``"B"``).

    Returns ``None`` when the side cannot be resolved: a bye, or a team id
    missing from the roster with no explicit lineup.
    """
    lineup = match.playersAIds if side == "A" else match.playersBIds
    if lineup:
        return lineup_names(lineup, teams_by_id)

    team_id = match.teamAId if side == "A" else match.teamBId
    if team_id == BYE:
        return None
    team = teams_by_id.get(team_id)
    if team is None:
        return None
    return roster_names(team)
