import logging

import pytest

from helpers import (
    API,
    insert,
    make_group,
    make_match,
    make_player,
    make_tournament,
)


@pytest.fixture
def championship(run):
    run(
        insert(
            make_player("ana", "Ana", "Alves"),
            make_player("ben", "Ben", "Brown"),
            make_player("cam", "Cam", "Costa"),
            make_player("dan", "Dan", "Diaz"),
            make_tournament("t1", group_based=True),
            make_tournament("t2"),
            make_group("g1", "t1", players=["ana", "ben"]),
            make_group("g2", "t1", players=["cam", "dan"]),
            make_match("ana", "ben", 6, 4, tournament_id="t1", group_id="g1"),
            make_match("cam", "dan", 6, 6, tournament_id="t1", group_id="g2"),
            make_match("ben", "cam", 7, 5, tournament_id="t2"),
            make_match("ana", "cam", 6, 2, tournament_id="t2"),
        )
    )


def _ids(payload):
    return [entry["player"]["id"] for entry in payload]


def test_overall_rankings(client, championship):
    resp = client.get(f"{API}/rankings/overall")
    assert resp.status_code == 200
    data = resp.json()

    assert _ids(data) == ["ana", "ben", "dan", "cam"]
    ana = data[0]
    assert ana["player"] == {
        "id": "ana",
        "firstName": "Ana",
        "lastName": "Alves",
        "location": "Lisbon",
        "ranking": 0,
    }
    assert (ana["wins"], ana["losses"]) == (2, 0)
    assert ana["winLossRatio"] == 1.0
    assert (ana["setsWon"], ana["setsLost"]) == (12, 6)
    assert ana["setsRatio"] == pytest.approx(2 / 3)

    cam = data[-1]
    assert (cam["wins"], cam["losses"]) == (0, 2)
    assert (cam["setsWon"], cam["setsLost"]) == (13, 19)
    dan = data[2]
    assert (dan["wins"], dan["losses"], dan["winLossRatio"]) == (0, 0, 0)
    assert dan["setsRatio"] == 0.5


def test_overall_includes_idle_players_and_skips_deleted(client, admin_headers, championship, run):
    run(insert(make_player("eve", "Eve", "Evans")))
    resp = client.delete(f"{API}/players/cam", headers=admin_headers)
    assert resp.status_code == 204

    data = client.get(f"{API}/rankings/overall").json()
    assert len(data) == 4
    by_id = {entry["player"]["id"]: entry for entry in data}
    assert "cam" not in by_id
    assert by_id["eve"]["wins"] == 0 and by_id["eve"]["setsWon"] == 0
    # cam's matches no longer count for anyone.
    assert (by_id["ana"]["wins"], by_id["ana"]["setsWon"]) == (1, 6)
    assert (by_id["dan"]["setsWon"], by_id["dan"]["setsLost"]) == (0, 0)
    assert (by_id["ben"]["wins"], by_id["ben"]["losses"]) == (0, 1)


def test_tournament_rankings_only_list_participants(client, championship):
    resp = client.get(f"{API}/rankings/tournament/t2")
    assert resp.status_code == 200
    data = resp.json()
    assert _ids(data) == ["ana", "ben", "cam"]
    assert [entry["wins"] for entry in data] == [1, 1, 0]


def test_group_rankings(client, championship):
    resp = client.get(f"{API}/rankings/tournament/t1/group/g2")
    assert resp.status_code == 200
    data = resp.json()
    assert _ids(data) == ["cam", "dan"]
    assert all(entry["wins"] == 0 and entry["losses"] == 0 for entry in data)
    assert all(entry["setsRatio"] == 0.5 for entry in data)

    resp = client.get(f"{API}/rankings/tournament/t1")
    assert _ids(resp.json()) == ["ana", "cam", "dan", "ben"]


def test_unknown_tournament_has_empty_rankings(client, championship):
    resp = client.get(f"{API}/rankings/tournament/nope")
    assert resp.status_code == 200
    assert resp.json() == []


def test_tournament_ranking_reports_missing_player(client, admin_headers, championship, caplog):
    resp = client.delete(f"{API}/players/ben", headers=admin_headers)
    assert resp.status_code == 204

    with caplog.at_level(logging.ERROR):
        resp = client.get(f"{API}/rankings/tournament/t1/group/g1")

    assert resp.status_code == 500
    body = resp.json()
    assert body["code"] == "ranking_unknown_player"
    assert "ben" in body["detail"]
    assert "missing player ben" in caplog.text

    # The other group and the overall table are unaffected.
    assert client.get(f"{API}/rankings/tournament/t1/group/g2").status_code == 200
    assert client.get(f"{API}/rankings/overall").status_code == 200
