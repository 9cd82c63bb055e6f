from typing import Optional, Sequence

from ..schemas import MatchScore


class ValidationError(Exception):
    """Raised when submitted set scores are invalid."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


def validate_match_score(
    score: Optional[MatchScore],
    *,
    max_games_per_set: Optional[int] = 99,
) -> None:
    """Validate a best-of-three score before it is recorded.

    Rules:
    - A score is required
    - Each contested set value must be <= ``max_games_per_set`` (if provided)
    - The first two sets cannot be level; the third may be ``0-0`` (not played)
    - A 1-1 split must be decided by a contested third set
    - A third set cannot be contested once one side already won both sets
    """

    if score is None:
        raise ValidationError("A score is required to mark a match as played.")

    for i, s in enumerate(score.sets(), start=1):
        if max_games_per_set is not None and (
            s.a > max_games_per_set or s.b > max_games_per_set
        ):
            raise ValidationError(f"Set #{i} scores must be <= {max_games_per_set}.")

    for i, s in enumerate((score.set1, score.set2), start=1):
        if s.a == s.b:
            raise ValidationError(f"Set #{i} cannot be a tie.")

    set3 = score.set3
    set3_played = set3 is not None and not (set3.a == 0 and set3.b == 0)
    first_two = [s.a > s.b for s in (score.set1, score.set2)]
    split = first_two[0] != first_two[1]

    if not set3_played:
        if split:
            raise ValidationError("Set #3 is required after a 1-1 split.")
        return None

    if not split:
        raise ValidationError("Set #3 cannot be played after a 2-0 result.")
    if set3.a == set3.b:
        raise ValidationError("Set #3 cannot be a tie.")

    return None


def validate_lineup(
    lineup: Optional[Sequence[str]],
    members: Sequence[str],
    *,
    size: int,
    side: str,
) -> None:
    """Check an explicit team-format lineup, if one was given.

    The lineup must field exactly ``size`` distinct players, all of them
    drawn from ``members``.
    """

    if lineup is None:
        return None
    if len(lineup) != size or len(set(lineup)) != size:
        raise ValidationError(f"Side {side} must field exactly {size} player(s).")
    strangers = [name for name in lineup if name not in members]
    if strangers:
        raise ValidationError(
            f"Side {side} lineup includes non-members: {', '.join(strangers)}."
        )
    return None
