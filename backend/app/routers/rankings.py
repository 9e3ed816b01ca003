import logging
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..db import get_session
from ..schemas import PlayerRankingOut
from ..exceptions import http_problem
from ..services.rankings import (
    PlayerRanking,
    UnknownPlayerError,
    rank_filtered,
    rank_overall,
)
from .matches import scoped_matches
from .players import load_players, to_player_out

logger = logging.getLogger(__name__)

# Resource-only prefix; no /api or /api/v0 here
router = APIRouter(prefix="/rankings", tags=["rankings"])


def _to_ranking_out(r: PlayerRanking) -> PlayerRankingOut:
    return PlayerRankingOut(
        player=to_player_out(r.player),
        wins=r.wins,
        losses=r.losses,
        winLossRatio=r.win_loss_ratio,
        setsWon=r.sets_won,
        setsLost=r.sets_lost,
        setsRatio=r.sets_ratio,
    )


async def _tournament_rankings(
    session: AsyncSession, tournament_id: str, group_id: Optional[str] = None
) -> list[PlayerRankingOut]:
    players = await load_players(session)
    matches = (
        await session.execute(scoped_matches(tournament_id, group_id))
    ).scalars().all()
    try:
        rankings = rank_filtered(players, matches, tournament_id, group_id)
    except UnknownPlayerError as exc:
        logger.error(
            "Tournament %s ranking references missing player %s",
            tournament_id,
            exc.player_id,
        )
        raise http_problem(
            status_code=500,
            detail=str(exc),
            code="ranking_unknown_player",
        )
    return [_to_ranking_out(r) for r in rankings]


# GET /api/v0/rankings/overall
@router.get("/overall", response_model=list[PlayerRankingOut])
async def overall_rankings(session: AsyncSession = Depends(get_session)):
    players = await load_players(session)
    matches = (await session.execute(scoped_matches())).scalars().all()
    return [_to_ranking_out(r) for r in rank_overall(players, matches)]


# GET /api/v0/rankings/tournament/{tournament_id}
@router.get("/tournament/{tournament_id}", response_model=list[PlayerRankingOut])
async def tournament_rankings(
    tournament_id: str, session: AsyncSession = Depends(get_session)
):
    return await _tournament_rankings(session, tournament_id)


# GET /api/v0/rankings/tournament/{tournament_id}/group/{group_id}
@router.get(
    "/tournament/{tournament_id}/group/{group_id}",
    response_model=list[PlayerRankingOut],
)
async def group_rankings(
    tournament_id: str,
    group_id: str,
    session: AsyncSession = Depends(get_session),
):
    return await _tournament_rankings(session, tournament_id, group_id)
