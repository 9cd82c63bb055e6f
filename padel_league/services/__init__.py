"""Internal application services (pure helpers, no I/O)."""

from .validation import ValidationError, validate_lineup, validate_match_score
from .scoring import ScoreOutcome, resolve_score
from .scheduling import generate_schedule, schedule_americano, schedule_round_robin
from .playoffs import (
    advance_winner,
    build_playoffs,
    resolve_playoff_size,
    should_generate_playoffs,
)
from .standings import calculate_standings
from .rankings import calculate_player_rankings
from .stats import calculate_pair_stats, calculate_streaks
from .tournaments import build_snapshot, record_result

__all__ = [
    "validate_lineup",
    "validate_match_score",
    "ValidationError",
    "ScoreOutcome",
    "resolve_score",
    "generate_schedule",
    "schedule_americano",
    "schedule_round_robin",
    "advance_winner",
    "build_playoffs",
    "resolve_playoff_size",
    "should_generate_playoffs",
    "calculate_standings",
    "calculate_player_rankings",
    "calculate_pair_stats",
    "calculate_streaks",
    "build_snapshot",
    "record_result",
]
