from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..db import get_session
from ..models import Group, Player
from ..schemas import GroupOut, GroupPlayersUpdate
from ..exceptions import ProblemDetail, GroupNotFound, http_problem
from .admin import require_admin

router = APIRouter(
    prefix="/groups",
    tags=["groups"],
    responses={400: {"model": ProblemDetail}, 404: {"model": ProblemDetail}},
)

GROUP_ORDER = (Group.created_at, Group.name, Group.id)


def to_group_out(g: Group) -> GroupOut:
    return GroupOut(
        id=g.id,
        tournamentId=g.tournament_id,
        name=g.name,
        playerIds=list(g.player_ids or []),
    )


@router.get("", response_model=list[GroupOut])
async def list_groups(session: AsyncSession = Depends(get_session)):
    rows = (await session.execute(select(Group).order_by(*GROUP_ORDER))).scalars().all()
    return [to_group_out(g) for g in rows]


@router.put("/{group_id}/players", response_model=GroupOut)
async def set_group_players(
    group_id: str,
    body: GroupPlayersUpdate,
    session: AsyncSession = Depends(get_session),
    admin: dict = Depends(require_admin),
):
    g = await session.get(Group, group_id)
    if not g:
        raise GroupNotFound(group_id)

    if body.playerIds:
        found = set(
            (
                await session.execute(
                    select(Player.id).where(Player.id.in_(body.playerIds))
                )
            ).scalars().all()
        )
        missing = [pid for pid in body.playerIds if pid not in found]
        if missing:
            raise http_problem(
                status_code=400,
                detail=f"unknown players: {', '.join(missing)}",
                code="group_unknown_players",
            )

    g.player_ids = list(body.playerIds)
    await session.commit()
    return to_group_out(g)
