import random

from fastapi import APIRouter

from .. import config as settings
from ..exceptions import MatchNotFound, RosterTooSmall, http_problem
from ..schemas import (
    Match,
    PairStats,
    PlayerStats,
    PlayoffRequest,
    ResultRequest,
    ScheduleRequest,
    ScheduleResponse,
    StatsRequest,
    Streak,
    TeamStats,
    TournamentSnapshot,
)
from ..services import (
    ValidationError,
    build_playoffs,
    build_snapshot,
    calculate_pair_stats,
    calculate_player_rankings,
    calculate_standings,
    calculate_streaks,
    generate_schedule,
    record_result,
    validate_lineup,
    validate_match_score,
)
from ..services.lineups import index_teams, roster_names
from ..services.tournaments import regular_matches

router = APIRouter(prefix="/tournaments", tags=["tournaments"])

AMERICANO_MIN_PLAYERS = 4
# Players each side fields in the team formats.
LINEUP_SIZES = {"SINGLES": 1, "DOUBLES": 2}


@router.post("/schedule", response_model=ScheduleResponse)
def create_schedule(body: ScheduleRequest):
    if body.config.mode == "AMERICANO" and len(body.teams) < AMERICANO_MIN_PLAYERS:
        raise RosterTooSmall(body.config.mode, AMERICANO_MIN_PLAYERS, len(body.teams))

    rng = random.Random(body.seed) if body.seed is not None else None
    matches = generate_schedule(body.teams, body.config, rng=rng)
    return ScheduleResponse(matches=matches)


@router.post("/standings", response_model=list[TeamStats])
def standings(body: StatsRequest):
    return calculate_standings(body.teams, body.matches, body.mode)


@router.post("/rankings", response_model=list[PlayerStats])
def rankings(body: StatsRequest):
    return calculate_player_rankings(body.teams, body.matches)


@router.post("/streaks", response_model=list[Streak])
def streaks(body: StatsRequest):
    return calculate_streaks(body.teams, body.matches)


@router.post("/pairs", response_model=list[PairStats])
def pairs(body: StatsRequest):
    return calculate_pair_stats(body.teams, body.matches)


@router.post("/snapshot", response_model=TournamentSnapshot)
def snapshot(body: StatsRequest):
    return build_snapshot(body.teams, body.matches, body.mode)


@router.post("/playoffs", response_model=list[Match])
def playoffs(body: PlayoffRequest):
    if body.config.mode == "AMERICANO":
        return []
    table = calculate_standings(
        body.teams, regular_matches(body.matches), body.config.mode
    )
    return build_playoffs(table, body.config.playoffSize)


@router.post("/results", response_model=list[Match])
def submit_result(body: ResultRequest):
    if not any(m.id == body.match.id for m in body.matches):
        raise MatchNotFound(body.match.id)

    if body.match.played:
        if body.match.score is None:
            raise http_problem(
                status_code=400,
                detail="a played match requires a score",
                code="score_required",
            )
        try:
            validate_match_score(
                body.match.score, max_games_per_set=settings.MAX_GAMES_PER_SET
            )
        except ValidationError as exc:
            raise http_problem(
                status_code=400,
                detail=exc.detail,
                code="score_invalid",
            )

    if body.config.mode in LINEUP_SIZES:
        _check_lineups(body)

    return record_result(body.teams, body.matches, body.match, body.config)


def _check_lineups(body: ResultRequest) -> None:
    teams_by_id = index_teams(body.teams)
    size = LINEUP_SIZES[body.config.mode]
    match = body.match
    sides = (
        ("A", match.teamAId, match.playersAIds),
        ("B", match.teamBId, match.playersBIds),
    )
    for side, team_id, lineup in sides:
        team = teams_by_id.get(team_id)
        members = roster_names(team) if team is not None else []
        try:
            validate_lineup(lineup, members, size=size, side=side)
        except ValidationError as exc:
            raise http_problem(
                status_code=400,
                detail=exc.detail,
                code="lineup_invalid",
            )
