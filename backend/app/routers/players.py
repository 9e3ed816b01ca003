import logging
import uuid

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..db import get_session
from ..models import Group, Player
from ..schemas import PlayerCreate, PlayerOut
from ..exceptions import ProblemDetail, PlayerNotFound
from .admin import require_admin

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/players",
    tags=["players"],
    responses={400: {"model": ProblemDetail}, 404: {"model": ProblemDetail}},
)

# Listing order, and therefore the order ranking ties fall back to.
PLAYER_ORDER = (Player.last_name, Player.first_name, Player.id)


def to_player_out(p: Player) -> PlayerOut:
    return PlayerOut(
        id=p.id,
        firstName=p.first_name,
        lastName=p.last_name,
        location=p.location,
        ranking=p.ranking,
    )


async def load_players(session: AsyncSession) -> list[Player]:
    stmt = select(Player).order_by(*PLAYER_ORDER)
    return list((await session.execute(stmt)).scalars().all())


@router.get("", response_model=list[PlayerOut])
async def list_players(session: AsyncSession = Depends(get_session)):
    return [to_player_out(p) for p in await load_players(session)]


@router.post("", response_model=PlayerOut, status_code=status.HTTP_201_CREATED)
async def create_player(
    body: PlayerCreate,
    session: AsyncSession = Depends(get_session),
    admin: dict = Depends(require_admin),
):
    p = Player(
        id=uuid.uuid4().hex,
        first_name=body.firstName,
        last_name=body.lastName,
        location=body.location,
        ranking=body.ranking,
    )
    session.add(p)
    await session.commit()
    return to_player_out(p)


@router.get("/{player_id}", response_model=PlayerOut)
async def get_player(player_id: str, session: AsyncSession = Depends(get_session)):
    p = await session.get(Player, player_id)
    if not p:
        raise PlayerNotFound(player_id)
    return to_player_out(p)


@router.delete("/{player_id}", status_code=204)
async def delete_player(
    player_id: str,
    session: AsyncSession = Depends(get_session),
    admin: dict = Depends(require_admin),
):
    p = await session.get(Player, player_id)
    if not p:
        raise PlayerNotFound(player_id)
    groups = (await session.execute(select(Group))).scalars().all()
    for group in groups:
        if player_id in (group.player_ids or []):
            group.player_ids = [pid for pid in group.player_ids if pid != player_id]
    # Recorded matches are kept; the overall ranking skips them from now on.
    await session.delete(p)
    await session.commit()
    logger.info("Deleted player %s", player_id)
    return Response(status_code=204)
