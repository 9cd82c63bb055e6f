from padel_league.schemas import Match, MatchScore


def score(*sets):
    """Build a ``MatchScore`` from ``(a, b)`` tuples; a third set is optional."""
    fields = dict(zip(("set1", "set2", "set3"), sets))
    return MatchScore(**fields)


def played(match: Match, *sets) -> Match:
    return match.model_copy(update={"score": score(*sets), "played": True})
