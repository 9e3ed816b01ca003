"""Insert a small demo championship: six players, one group-based tournament."""

import asyncio
import logging

from sqlalchemy import select

from app import db
from app.models import Group, Match, Player, Tournament

logger = logging.getLogger(__name__)

PLAYERS = [
    ("demo-ana-lopez", "Ana", "Lopez", "Madrid", 1),
    ("demo-ben-carter", "Ben", "Carter", "London", 2),
    ("demo-chloe-martin", "Chloe", "Martin", "Paris", 3),
    ("demo-dev-patel", "Dev", "Patel", "Mumbai", 4),
    ("demo-emma-rossi", "Emma", "Rossi", "Rome", 5),
    ("demo-felix-weber", "Felix", "Weber", "Berlin", 6),
]

TOURNAMENT_ID = "demo-spring-open"
GROUPS = [
    ("demo-group-a", "Group A", ["demo-ana-lopez", "demo-ben-carter", "demo-chloe-martin"]),
    ("demo-group-b", "Group B", ["demo-dev-patel", "demo-emma-rossi", "demo-felix-weber"]),
]

# (id, group, player1, player2, score1, score2)
MATCHES = [
    ("demo-m1", "demo-group-a", "demo-ana-lopez", "demo-ben-carter", 2, 0),
    ("demo-m2", "demo-group-a", "demo-ben-carter", "demo-chloe-martin", 2, 1),
    ("demo-m3", "demo-group-a", "demo-ana-lopez", "demo-chloe-martin", 1, 2),
    ("demo-m4", "demo-group-b", "demo-dev-patel", "demo-emma-rossi", 0, 2),
    ("demo-m5", "demo-group-b", "demo-emma-rossi", "demo-felix-weber", 2, 1),
    ("demo-m6", "demo-group-b", "demo-dev-patel", "demo-felix-weber", 1, 1),
]


async def main():
    await db.create_schema()
    assert db.AsyncSessionLocal is not None
    async with db.AsyncSessionLocal() as s:
        existing_players = {
            x for x in (await s.execute(select(Player.id))).scalars().all()
        }
        for pid, first, last, location, ranking in PLAYERS:
            if pid not in existing_players:
                s.add(
                    Player(
                        id=pid,
                        first_name=first,
                        last_name=last,
                        location=location,
                        ranking=ranking,
                    )
                )
        await s.commit()

        if await s.get(Tournament, TOURNAMENT_ID) is None:
            s.add(Tournament(id=TOURNAMENT_ID, name="Spring Open", is_group_based=True))
            await s.flush()
            for gid, name, members in GROUPS:
                s.add(
                    Group(
                        id=gid,
                        tournament_id=TOURNAMENT_ID,
                        name=name,
                        player_ids=members,
                    )
                )
            await s.flush()
            for mid, gid, p1, p2, score1, score2 in MATCHES:
                s.add(
                    Match(
                        id=mid,
                        tournament_id=TOURNAMENT_ID,
                        group_id=gid,
                        player1_id=p1,
                        player2_id=p2,
                        score1=score1,
                        score2=score2,
                        location="Centre Court",
                    )
                )
            await s.commit()
            logger.info("Seeded tournament %s", TOURNAMENT_ID)

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
