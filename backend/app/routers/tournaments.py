import logging
import uuid

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import select, delete, func
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import MAX_GROUPS_PER_TOURNAMENT
from ..db import get_session
from ..models import Tournament, Group, Match
from ..schemas import (
    TournamentCreate,
    TournamentOut,
    GroupCreate,
    GroupOut,
)
from ..exceptions import ProblemDetail, TournamentNotFound, http_problem
from .admin import require_admin
from .groups import GROUP_ORDER, to_group_out

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/tournaments",
    tags=["tournaments"],
    responses={404: {"model": ProblemDetail}},
)


def _to_tournament_out(t: Tournament, group_ids: list[str]) -> TournamentOut:
    return TournamentOut(
        id=t.id,
        name=t.name,
        isGroupBased=bool(t.is_group_based),
        groupIds=group_ids,
    )


async def _get_tournament_or_404(
    session: AsyncSession, tournament_id: str
) -> Tournament:
    t = await session.get(Tournament, tournament_id)
    if not t:
        raise TournamentNotFound(tournament_id)
    return t


async def _groups_for(session: AsyncSession, tournament_id: str) -> list[Group]:
    stmt = (
        select(Group)
        .where(Group.tournament_id == tournament_id)
        .order_by(*GROUP_ORDER)
    )
    return list((await session.execute(stmt)).scalars().all())


@router.post("", response_model=TournamentOut, status_code=status.HTTP_201_CREATED)
async def create_tournament(
    body: TournamentCreate,
    session: AsyncSession = Depends(get_session),
    admin: dict = Depends(require_admin),
):
    t = Tournament(
        id=uuid.uuid4().hex,
        name=body.name,
        is_group_based=body.isGroupBased,
    )
    session.add(t)
    await session.commit()
    return _to_tournament_out(t, [])


@router.get("", response_model=list[TournamentOut])
async def list_tournaments(session: AsyncSession = Depends(get_session)):
    rows = (
        await session.execute(select(Tournament).order_by(Tournament.created_at))
    ).scalars().all()
    groups = (await session.execute(select(Group).order_by(*GROUP_ORDER))).scalars().all()
    by_tournament: dict[str, list[str]] = {}
    for g in groups:
        by_tournament.setdefault(g.tournament_id, []).append(g.id)
    return [_to_tournament_out(t, by_tournament.get(t.id, [])) for t in rows]


@router.get("/{tournament_id}", response_model=TournamentOut)
async def get_tournament(
    tournament_id: str, session: AsyncSession = Depends(get_session)
):
    t = await _get_tournament_or_404(session, tournament_id)
    groups = await _groups_for(session, tournament_id)
    return _to_tournament_out(t, [g.id for g in groups])


@router.delete("/{tournament_id}", status_code=204)
async def delete_tournament(
    tournament_id: str,
    session: AsyncSession = Depends(get_session),
    admin: dict = Depends(require_admin),
):
    t = await _get_tournament_or_404(session, tournament_id)
    await session.execute(delete(Match).where(Match.tournament_id == tournament_id))
    await session.execute(delete(Group).where(Group.tournament_id == tournament_id))
    await session.delete(t)
    await session.commit()
    logger.info("Deleted tournament %s with its groups and matches", tournament_id)
    return Response(status_code=204)


@router.get("/{tournament_id}/groups", response_model=list[GroupOut])
async def list_tournament_groups(
    tournament_id: str, session: AsyncSession = Depends(get_session)
):
    await _get_tournament_or_404(session, tournament_id)
    return [to_group_out(g) for g in await _groups_for(session, tournament_id)]


@router.post(
    "/{tournament_id}/groups",
    response_model=GroupOut,
    status_code=status.HTTP_201_CREATED,
)
async def create_tournament_group(
    tournament_id: str,
    body: GroupCreate,
    session: AsyncSession = Depends(get_session),
    admin: dict = Depends(require_admin),
):
    await _get_tournament_or_404(session, tournament_id)
    count = (
        await session.execute(
            select(func.count())
            .select_from(Group)
            .where(Group.tournament_id == tournament_id)
        )
    ).scalar_one()
    if count >= MAX_GROUPS_PER_TOURNAMENT:
        raise http_problem(
            status_code=400,
            detail=f"Maximum of {MAX_GROUPS_PER_TOURNAMENT} groups allowed per tournament",
            code="group_limit_reached",
        )
    g = Group(
        id=uuid.uuid4().hex,
        tournament_id=tournament_id,
        name=body.name,
        player_ids=[],
    )
    session.add(g)
    await session.commit()
    return to_group_out(g)
