from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


Mode = Literal["SINGLES", "DOUBLES", "AMERICANO"]
Slot = Literal["A", "B"]


class Team(BaseModel):
    """A roster entry: a team, or a single player in singles/Americano."""

    id: str = Field(..., min_length=1)
    name: str
    players: List[str] = Field(default_factory=list)
    captain: Optional[str] = None

    @field_validator("players", mode="before")
    @classmethod
    def _strip_players(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [p.strip() if isinstance(p, str) else p for p in value]
        return value

    @model_validator(mode="after")
    def _captain_is_member(self):
        if self.captain is not None and self.captain not in self.players:
            raise ValueError("captain must be one of the team's players")
        return self


class SetScore(BaseModel):
    a: int = Field(..., ge=0)
    b: int = Field(..., ge=0)

    @model_validator(mode="before")
    def _coerce(cls, value: Any) -> Dict[str, int]:
        """Allow incoming set scores to be provided as tuples or objects."""
        if isinstance(value, dict):
            return value
        if isinstance(value, (list, tuple)) and len(value) == 2:
            return {"a": value[0], "b": value[1]}
        if hasattr(value, "a") or hasattr(value, "b"):
            return {"a": getattr(value, "a", None), "b": getattr(value, "b", None)}
        raise TypeError("Set scores must be a mapping or 2-item tuple/list.")


class MatchScore(BaseModel):
    set1: SetScore
    set2: SetScore
    set3: Optional[SetScore] = None

    def sets(self) -> List[SetScore]:
        return [s for s in (self.set1, self.set2, self.set3) if s is not None]


class Match(BaseModel):
    id: str
    teamAId: str
    teamBId: str
    playersAIds: Optional[List[str]] = None
    playersBIds: Optional[List[str]] = None
    round: int
    score: Optional[MatchScore] = None
    played: bool = False
    winnerId: Optional[str] = None
    isPlayoff: bool = False
    playoffLabel: Optional[str] = None
    nextMatchId: Optional[str] = None
    nextMatchSlot: Optional[Slot] = None
    date: Optional[str] = None
    court: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        return self.played and self.score is not None


class TournamentConfig(BaseModel):
    name: str = ""
    mode: Mode = "DOUBLES"
    doubleRound: bool = False
    # 0 = none, 2/4/8/16, or -1 for "everyone, rounded down to a power of two"
    playoffSize: int = Field(default=0, ge=-1)


class TeamStats(BaseModel):
    teamId: str
    played: int = 0
    won: int = 0
    lost: int = 0
    points: int = 0
    setsWon: int = 0
    setsLost: int = 0
    gamesWon: int = 0
    gamesLost: int = 0
    winRate: float = 0.0

    @property
    def game_diff(self) -> int:
        return self.gamesWon - self.gamesLost


class PlayerStats(BaseModel):
    name: str
    played: int = 0
    won: int = 0
    lost: int = 0
    setsWon: int = 0
    setsLost: int = 0
    gamesWon: int = 0
    gamesLost: int = 0
    winRate: float = 0.0
    avgSetDiff: float = 0.0
    avgGameDiff: float = 0.0


class Streak(BaseModel):
    name: str
    current: int = 0
    maxWin: int = 0
    maxLoss: int = 0
    recent: List[Literal["W", "L"]] = Field(default_factory=list)


class PairStats(BaseModel):
    key: str
    p1: str
    p2: str
    played: int = 0
    won: int = 0
    lost: int = 0
    winRate: float = 0.0


class TournamentSnapshot(BaseModel):
    """All analytics views computed from one match list."""

    standings: List[TeamStats] = Field(default_factory=list)
    rankings: List[PlayerStats] = Field(default_factory=list)
    streaks: List[Streak] = Field(default_factory=list)
    pairs: List[PairStats] = Field(default_factory=list)


# -----------------------------------------------------------------------------
# Request / response payloads
# -----------------------------------------------------------------------------
class ScheduleRequest(BaseModel):
    """Payload used to generate the initial fixture list."""

    teams: List[Team]
    config: TournamentConfig = Field(default_factory=TournamentConfig)
    seed: Optional[int] = None

    @model_validator(mode="after")
    def _unique_ids(self):
        ids = [t.id for t in self.teams]
        if len(ids) != len(set(ids)):
            raise ValueError("duplicate team ids provided")
        return self


class ScheduleResponse(BaseModel):
    matches: List[Match] = Field(default_factory=list)


class StatsRequest(BaseModel):
    """Roster and match list an analytics view is projected from."""

    teams: List[Team]
    matches: List[Match] = Field(default_factory=list)
    mode: Mode = "DOUBLES"


class PlayoffRequest(BaseModel):
    teams: List[Team]
    matches: List[Match] = Field(default_factory=list)
    config: TournamentConfig


class ResultRequest(BaseModel):
    """A single updated match to merge into the caller's match list."""

    teams: List[Team]
    matches: List[Match]
    config: TournamentConfig
    match: Match
