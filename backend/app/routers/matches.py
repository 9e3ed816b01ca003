import logging
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..db import get_session
from ..models import Group, Match, Player, Tournament
from ..schemas import MatchCreate, MatchOut
from ..exceptions import (
    ProblemDetail,
    GroupNotFound,
    MatchNotFound,
    PlayerNotFound,
    TournamentNotFound,
    http_problem,
)
from ..services import (
    ValidationError,
    validate_distinct_players,
    validate_match_scores,
)
from ..time_utils import coerce_utc
from .admin import require_admin

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/matches",
    tags=["matches"],
    responses={400: {"model": ProblemDetail}, 404: {"model": ProblemDetail}},
)


def to_match_out(m: Match) -> MatchOut:
    return MatchOut(
        id=m.id,
        tournamentId=m.tournament_id,
        groupId=m.group_id,
        player1Id=m.player1_id,
        player2Id=m.player2_id,
        score1=m.score1,
        score2=m.score2,
        location=m.location,
        playedAt=coerce_utc(m.played_at),
    )


def scoped_matches(tournament_id: Optional[str] = None, group_id: Optional[str] = None):
    """Build the match query for an optional tournament/group scope."""

    stmt = select(Match).order_by(Match.played_at, Match.id)
    if tournament_id is not None:
        stmt = stmt.where(Match.tournament_id == tournament_id)
    if group_id is not None:
        stmt = stmt.where(Match.group_id == group_id)
    return stmt


@router.get("", response_model=list[MatchOut])
async def list_matches(
    tournamentId: Optional[str] = None,
    groupId: Optional[str] = None,
    session: AsyncSession = Depends(get_session),
):
    rows = (await session.execute(scoped_matches(tournamentId, groupId))).scalars().all()
    return [to_match_out(m) for m in rows]


@router.post("", response_model=MatchOut, status_code=status.HTTP_201_CREATED)
async def create_match(
    body: MatchCreate,
    session: AsyncSession = Depends(get_session),
    admin: dict = Depends(require_admin),
):
    try:
        validate_distinct_players(body.player1Id, body.player2Id)
        score1, score2 = validate_match_scores(body.score1, body.score2)
    except ValidationError as exc:
        raise http_problem(
            status_code=400,
            detail=exc.detail,
            code="match_invalid",
        )

    if not await session.get(Tournament, body.tournamentId):
        raise TournamentNotFound(body.tournamentId)
    for pid in (body.player1Id, body.player2Id):
        if not await session.get(Player, pid):
            raise PlayerNotFound(pid)
    if body.groupId is not None:
        group = await session.get(Group, body.groupId)
        if not group:
            raise GroupNotFound(body.groupId)
        if group.tournament_id != body.tournamentId:
            raise http_problem(
                status_code=400,
                detail="group does not belong to tournament",
                code="match_group_mismatch",
            )

    m = Match(
        id=uuid.uuid4().hex,
        tournament_id=body.tournamentId,
        group_id=body.groupId,
        player1_id=body.player1Id,
        player2_id=body.player2Id,
        score1=score1,
        score2=score2,
        location=body.location,
    )
    if body.playedAt is not None:
        m.played_at = body.playedAt
    session.add(m)
    await session.commit()
    await session.refresh(m)
    logger.info(
        "Recorded match %s in tournament %s: %s %d-%d %s",
        m.id,
        m.tournament_id,
        m.player1_id,
        score1,
        score2,
        m.player2_id,
    )
    return to_match_out(m)


@router.get("/{match_id}", response_model=MatchOut)
async def get_match(match_id: str, session: AsyncSession = Depends(get_session)):
    m = await session.get(Match, match_id)
    if not m:
        raise MatchNotFound(match_id)
    return to_match_out(m)


@router.delete("/{match_id}", status_code=204)
async def delete_match(
    match_id: str,
    session: AsyncSession = Depends(get_session),
    admin: dict = Depends(require_admin),
):
    m = await session.get(Match, match_id)
    if not m:
        raise MatchNotFound(match_id)
    await session.delete(m)
    await session.commit()
    return Response(status_code=204)
