import pytest

from helpers import API, insert, make_group, make_player, make_tournament


@pytest.fixture
def seeded(run):
    run(
        insert(
            make_player("p1"),
            make_player("p2"),
            make_player("p3"),
            make_tournament("t1"),
            make_tournament("t2"),
            make_group("g1", "t1"),
            make_group("g2", "t2"),
        )
    )


def _match(**overrides):
    body = {
        "tournamentId": "t1",
        "player1Id": "p1",
        "player2Id": "p2",
        "score1": 2,
        "score2": 1,
        "location": "Centre Court",
    }
    body.update(overrides)
    return body


def test_create_list_and_delete_match(client, admin_headers, seeded):
    resp = client.post(
        f"{API}/matches",
        json=_match(groupId="g1", playedAt="2024-05-01T10:00:00+02:00"),
        headers=admin_headers,
    )
    assert resp.status_code == 201
    data = resp.json()
    assert data["tournamentId"] == "t1"
    assert data["groupId"] == "g1"
    assert (data["score1"], data["score2"]) == (2, 1)
    assert data["playedAt"].startswith("2024-05-01T08:00:00")
    mid = data["id"]

    resp = client.get(f"{API}/matches")
    assert [m["id"] for m in resp.json()] == [mid]

    resp = client.get(f"{API}/matches/{mid}")
    assert resp.status_code == 200

    resp = client.delete(f"{API}/matches/{mid}", headers=admin_headers)
    assert resp.status_code == 204
    resp = client.get(f"{API}/matches/{mid}")
    assert resp.status_code == 404
    assert resp.json()["code"] == "match_not_found"


def test_match_defaults_played_at(client, admin_headers, seeded):
    resp = client.post(f"{API}/matches", json=_match(), headers=admin_headers)
    assert resp.status_code == 201
    assert resp.json()["playedAt"] is not None
    assert resp.json()["groupId"] is None


def test_list_matches_filters(client, admin_headers, seeded):
    client.post(f"{API}/matches", json=_match(groupId="g1"), headers=admin_headers)
    client.post(f"{API}/matches", json=_match(), headers=admin_headers)
    client.post(
        f"{API}/matches",
        json=_match(tournamentId="t2", groupId="g2"),
        headers=admin_headers,
    )

    assert len(client.get(f"{API}/matches").json()) == 3
    assert len(client.get(f"{API}/matches", params={"tournamentId": "t1"}).json()) == 2
    scoped = client.get(
        f"{API}/matches", params={"tournamentId": "t1", "groupId": "g1"}
    ).json()
    assert [m["groupId"] for m in scoped] == ["g1"]


def test_ties_are_accepted(client, admin_headers, seeded):
    resp = client.post(
        f"{API}/matches", json=_match(score1=1, score2=1), headers=admin_headers
    )
    assert resp.status_code == 201


@pytest.mark.parametrize(
    "overrides, code, status",
    [
        ({"score1": -1}, "match_invalid", 400),
        ({"score2": True}, "match_invalid", 400),
        ({"score1": "two"}, "match_invalid", 400),
        ({"player2Id": "p1"}, "match_invalid", 400),
        ({"tournamentId": "nope"}, "tournament_not_found", 404),
        ({"player2Id": "ghost"}, "player_not_found", 404),
        ({"groupId": "nope"}, "group_not_found", 404),
        ({"groupId": "g2"}, "match_group_mismatch", 400),
    ],
    ids=[
        "negative-score",
        "boolean-score",
        "text-score",
        "same-player",
        "unknown-tournament",
        "unknown-player",
        "unknown-group",
        "foreign-group",
    ],
)
def test_rejects_invalid_matches(client, admin_headers, seeded, overrides, code, status):
    resp = client.post(f"{API}/matches", json=_match(**overrides), headers=admin_headers)
    assert resp.status_code == status
    assert resp.json()["code"] == code


def test_naive_played_at_is_rejected(client, admin_headers, seeded):
    resp = client.post(
        f"{API}/matches",
        json=_match(playedAt="2024-05-01T10:00:00"),
        headers=admin_headers,
    )
    assert resp.status_code == 422


def test_match_writes_require_admin(client, seeded):
    assert client.post(f"{API}/matches", json=_match()).status_code == 401
    assert client.delete(f"{API}/matches/any").status_code == 401
