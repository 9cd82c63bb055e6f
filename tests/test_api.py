import logging

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from padel_league.main import app, unhandled_exception_handler

PREFIX = "/api/v0/tournaments"

TEAMS = [
    {"id": "t1", "name": "Smash Bros", "players": ["Ann", "Bob"], "captain": "Ann"},
    {"id": "t2", "name": "Net Ninjas", "players": ["Cid", "Dan"]},
    {"id": "t3", "name": "Lob Squad", "players": ["Eve", "Fay"]},
    {"id": "t4", "name": "Wall Kings", "players": ["Gus", "Hal"]},
]


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


def _schedule(client, teams=TEAMS, **config):
    resp = client.post(f"{PREFIX}/schedule", json={"teams": teams, "config": config})
    assert resp.status_code == 200, resp.text
    return resp.json()["matches"]


def test_healthz(client):
    assert client.get("/healthz").json() == {"status": "ok"}
    assert client.get("/api/healthz").json() == {"status": "ok"}


def test_schedule_round_robin(client):
    matches = _schedule(client, mode="DOUBLES", doubleRound=True)
    assert len(matches) == 12
    assert {m["round"] for m in matches} == set(range(1, 7))


def test_schedule_americano_is_seeded(client):
    players = [{"id": f"p{i}", "name": f"Player {i}"} for i in range(8)]
    body = {"teams": players, "config": {"mode": "AMERICANO"}, "seed": 11}
    first = client.post(f"{PREFIX}/schedule", json=body).json()["matches"]
    second = client.post(f"{PREFIX}/schedule", json=body).json()["matches"]
    assert first == second
    assert len(first) == 12


def test_schedule_americano_needs_four_players(client):
    players = [{"id": f"p{i}", "name": f"Player {i}"} for i in range(3)]
    resp = client.post(
        f"{PREFIX}/schedule", json={"teams": players, "config": {"mode": "AMERICANO"}}
    )
    assert resp.status_code == 400
    assert resp.headers["content-type"].startswith("application/problem+json")
    assert resp.json()["code"] == "americano_roster_too_small"


def test_schedule_rejects_captain_outside_team(client):
    teams = [{"id": "t1", "name": "A", "players": ["Ann"], "captain": "Zed"}, TEAMS[1]]
    resp = client.post(f"{PREFIX}/schedule", json={"teams": teams})
    assert resp.status_code == 422


def test_schedule_rejects_duplicate_team_ids(client):
    resp = client.post(f"{PREFIX}/schedule", json={"teams": [TEAMS[0], TEAMS[0]]})
    assert resp.status_code == 422


def _result_body(matches, match, **config):
    return {
        "teams": TEAMS,
        "matches": matches,
        "config": {"mode": "DOUBLES", **config},
        "match": match,
    }


def test_submit_result_resolves_winner(client):
    matches = _schedule(client)
    match = {
        **matches[0],
        "played": True,
        "score": {"set1": [6, 2], "set2": [6, 3]},
    }
    resp = client.post(f"{PREFIX}/results", json=_result_body(matches, match))
    assert resp.status_code == 200
    recorded = next(m for m in resp.json() if m["id"] == match["id"])
    assert recorded["winnerId"] == match["teamAId"]
    assert recorded["score"]["set1"] == {"a": 6, "b": 2}


def test_submit_result_unknown_match(client):
    matches = _schedule(client)
    stray = {**matches[0], "id": "missing"}
    resp = client.post(f"{PREFIX}/results", json=_result_body(matches, stray))
    assert resp.status_code == 404
    assert resp.json()["code"] == "match_not_found"


def test_submit_result_requires_score(client):
    matches = _schedule(client)
    match = {**matches[0], "played": True, "score": None}
    resp = client.post(f"{PREFIX}/results", json=_result_body(matches, match))
    assert resp.status_code == 400
    assert resp.json()["code"] == "score_required"


def test_submit_result_rejects_tied_set(client):
    matches = _schedule(client)
    match = {**matches[0], "played": True, "score": {"set1": [6, 6], "set2": [6, 3]}}
    resp = client.post(f"{PREFIX}/results", json=_result_body(matches, match))
    assert resp.status_code == 400
    assert resp.json()["code"] == "score_invalid"
    assert "tie" in resp.json()["detail"]


def test_analytics_endpoints(client):
    matches = _schedule(client)
    matches[0] = {**matches[0], "played": True, "score": {"set1": [6, 2], "set2": [6, 3]}}
    body = {"teams": TEAMS, "matches": matches, "mode": "DOUBLES"}
    winner = matches[0]["teamAId"]

    standings = client.post(f"{PREFIX}/standings", json=body).json()
    assert standings[0]["teamId"] == winner
    assert standings[0]["points"] == 3

    rankings = client.post(f"{PREFIX}/rankings", json=body).json()
    assert rankings[0]["winRate"] == 100

    streaks = client.post(f"{PREFIX}/streaks", json=body).json()
    assert streaks[0]["current"] == 1

    pairs = client.post(f"{PREFIX}/pairs", json=body).json()
    assert [p["winRate"] for p in pairs] == [100, 0]

    snapshot = client.post(f"{PREFIX}/snapshot", json=body).json()
    assert snapshot["standings"] == standings
    assert snapshot["pairs"] == pairs


def test_playoffs_endpoint(client):
    matches = [
        {**m, "played": True, "score": {"set1": [6, 1], "set2": [6, 1]}}
        for m in _schedule(client)
    ]
    body = {"teams": TEAMS, "matches": matches, "config": {"mode": "DOUBLES", "playoffSize": 2}}
    resp = client.post(f"{PREFIX}/playoffs", json=body)
    assert resp.status_code == 200
    (final,) = resp.json()
    assert final["isPlayoff"] and final["id"] == "final"

    body["config"]["playoffSize"] = 8
    assert client.post(f"{PREFIX}/playoffs", json=body).json() == []


def test_unhandled_exception_logs_traceback(caplog):
    test_app = FastAPI()
    test_app.add_exception_handler(Exception, unhandled_exception_handler)

    @test_app.get("/boom")
    def boom():
        raise ValueError("boom")

    client = TestClient(test_app, raise_server_exceptions=False)
    with caplog.at_level(logging.ERROR):
        response = client.get("/boom")

    assert response.status_code == 500
    assert response.json()["code"] == "internal_server_error"
    record = next((r for r in caplog.records if r.message == "Unhandled exception"), None)
    assert record is not None
    assert record.exc_info[0] is ValueError


def _record(client, matches, match, **config):
    resp = client.post(f"{PREFIX}/results", json=_result_body(matches, match, **config))
    assert resp.status_code == 200, resp.text
    return resp.json()


def test_semifinal_needs_a_decided_score(client):
    matches = _schedule(client)
    for mid in [m["id"] for m in matches]:
        current = next(m for m in matches if m["id"] == mid)
        done = {**current, "played": True, "score": {"set1": [6, 1], "set2": [6, 1]}}
        matches = _record(client, matches, done, playoffSize=4)

    semi = next(m for m in matches if m["id"] == "semi-1")
    split = {**semi, "played": True, "score": {"set1": [6, 1], "set2": [1, 6]}}
    resp = client.post(f"{PREFIX}/results", json=_result_body(matches, split, playoffSize=4))
    assert resp.status_code == 400
    assert resp.json()["code"] == "score_invalid"
    assert "1-1 split" in resp.json()["detail"]

    decided = {**split, "score": {**split["score"], "set3": [4, 6]}}
    matches = _record(client, matches, decided, playoffSize=4)
    final = next(m for m in matches if m["id"] == "final")
    assert final["teamAId"] == semi["teamBId"]


@pytest.mark.parametrize(
    "lineup",
    [["Ann", "Bob", "Zed"], ["Ann"], ["Ann", "Zed"]],
    ids=["too-many", "too-few", "stranger"],
)
def test_submit_result_rejects_bad_doubles_lineup(client, lineup):
    matches = _schedule(client)
    match = next(m for m in matches if m["teamAId"] == "t1")
    bad = {
        **match,
        "played": True,
        "score": {"set1": [6, 2], "set2": [6, 3]},
        "playersAIds": lineup,
    }
    resp = client.post(f"{PREFIX}/results", json=_result_body(matches, bad))
    assert resp.status_code == 400
    assert resp.json()["code"] == "lineup_invalid"


def test_submit_result_checks_singles_lineup(client):
    teams = [
        {"id": "s1", "name": "Ann"},
        {"id": "s2", "name": "Bob"},
    ]
    matches = _schedule(client, teams=teams, mode="SINGLES")
    base = {**matches[0], "played": True, "score": {"set1": [6, 2], "set2": [6, 3]}}
    body = {"teams": teams, "matches": matches, "config": {"mode": "SINGLES"}}

    ok = {**base, "playersAIds": [next(t["name"] for t in teams if t["id"] == base["teamAId"])]}
    assert client.post(f"{PREFIX}/results", json={**body, "match": ok}).status_code == 200

    pair = {**base, "playersAIds": ["Ann", "Bob"]}
    resp = client.post(f"{PREFIX}/results", json={**body, "match": pair})
    assert resp.status_code == 400
    assert resp.json()["code"] == "lineup_invalid"
