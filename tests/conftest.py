import pytest

from padel_league.schemas import Team


@pytest.fixture
def doubles_teams():
    return [
        Team(id="t1", name="Smash Bros", players=["Ann", "Bob"], captain="Ann"),
        Team(id="t2", name="Net Ninjas", players=["Cid", "Dan"]),
        Team(id="t3", name="Lob Squad", players=["Eve", "Fay"]),
        Team(id="t4", name="Wall Kings", players=["Gus", "Hal"]),
    ]


@pytest.fixture
def americano_players():
    return [Team(id=f"p{i}", name=f"Player {i}", players=[]) for i in range(1, 9)]
