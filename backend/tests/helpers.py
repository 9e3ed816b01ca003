"""Shared constants and row factories for the test suite."""

import uuid

from app import db
from app.models import Group, Match, Player, Tournament

API = "/api/v0"
# A sufficiently long JWT secret for tests
TEST_JWT_SECRET = "x" * 32
TEST_ADMIN_PASSWORD = "Str0ng!Pass!"


async def insert(*rows) -> None:
    assert db.AsyncSessionLocal is not None
    async with db.AsyncSessionLocal() as session:
        for row in rows:
            session.add(row)
            # Flush one by one so foreign keys see their parents in order.
            await session.flush()
        await session.commit()


def make_player(pid: str, first: str = "", last: str = "", ranking: int = 0) -> Player:
    return Player(
        id=pid,
        first_name=first or pid.title(),
        last_name=last or "Player",
        location="Lisbon",
        ranking=ranking,
    )


def make_match(
    p1: str,
    p2: str,
    score1: int,
    score2: int,
    *,
    tournament_id: str,
    group_id: str | None = None,
) -> Match:
    return Match(
        id=uuid.uuid4().hex,
        tournament_id=tournament_id,
        group_id=group_id,
        player1_id=p1,
        player2_id=p2,
        score1=score1,
        score2=score2,
        location="Court 1",
    )


def make_tournament(tid: str, name: str = "Open", group_based: bool = False) -> Tournament:
    return Tournament(id=tid, name=name, is_group_based=group_based)


def make_group(gid: str, tid: str, name: str = "Group", players=()) -> Group:
    return Group(id=gid, tournament_id=tid, name=name, player_ids=list(players))
