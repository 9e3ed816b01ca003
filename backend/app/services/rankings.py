"""Win/loss and set aggregation for player rankings.

Both entry points are pure: they take already-loaded player and match records
(ORM rows or any objects exposing the same attributes) and return freshly
built :class:`PlayerRanking` values without touching storage.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional, Protocol, Sequence


class PlayerRecord(Protocol):
    id: str


class MatchRecord(Protocol):
    player1_id: str
    player2_id: str
    score1: int
    score2: int
    tournament_id: Optional[str]
    group_id: Optional[str]


class UnknownPlayerError(LookupError):
    """Raised when a qualifying match references a player that is not loaded."""

    def __init__(self, player_id: str) -> None:
        super().__init__(f"Player with ID {player_id} not found.")
        self.player_id = player_id


@dataclass
class _Tally:
    wins: int = 0
    losses: int = 0
    sets_won: int = 0
    sets_lost: int = 0


@dataclass(frozen=True)
class PlayerRanking:
    player: Any
    wins: int
    losses: int
    win_loss_ratio: float
    sets_won: int
    sets_lost: int
    sets_ratio: float


def _ratio(part: int, other: int) -> float:
    total = part + other
    return part / total if total else 0.0


def _credit(tallies: dict[str, _Tally], match: MatchRecord) -> None:
    first = tallies[match.player1_id]
    second = tallies[match.player2_id]
    if match.score1 > match.score2:
        first.wins += 1
        second.losses += 1
    elif match.score2 > match.score1:
        second.wins += 1
        first.losses += 1
    first.sets_won += match.score1
    first.sets_lost += match.score2
    second.sets_won += match.score2
    second.sets_lost += match.score1


def _build(player: PlayerRecord, tally: _Tally) -> PlayerRanking:
    return PlayerRanking(
        player=player,
        wins=tally.wins,
        losses=tally.losses,
        win_loss_ratio=_ratio(tally.wins, tally.losses),
        sets_won=tally.sets_won,
        sets_lost=tally.sets_lost,
        sets_ratio=_ratio(tally.sets_won, tally.sets_lost),
    )


def _sorted(rankings: Iterable[PlayerRanking]) -> list[PlayerRanking]:
    # sorted() is stable, so full ties keep the order of the player input.
    return sorted(rankings, key=lambda r: (-r.wins, -r.sets_ratio))


def rank_overall(
    players: Sequence[PlayerRecord], matches: Iterable[MatchRecord]
) -> list[PlayerRanking]:
    """Rank every player over every match.

    Players without matches are included with zeroed statistics. Matches that
    reference a player missing from ``players`` (for example one deleted after
    the match was recorded) are skipped without crediting either side.
    """

    tallies = {player.id: _Tally() for player in players}
    for match in matches:
        if match.player1_id not in tallies or match.player2_id not in tallies:
            continue
        _credit(tallies, match)
    return _sorted(_build(player, tallies[player.id]) for player in players)


def qualifies(
    match: MatchRecord, tournament_id: str, group_id: Optional[str] = None
) -> bool:
    if match.tournament_id != tournament_id:
        return False
    return group_id is None or match.group_id == group_id


def rank_filtered(
    players: Sequence[PlayerRecord],
    matches: Iterable[MatchRecord],
    tournament_id: str,
    group_id: Optional[str] = None,
) -> list[PlayerRanking]:
    """Rank the players of one tournament, optionally narrowed to one group.

    Only players appearing in at least one qualifying match are returned.
    Unlike :func:`rank_overall`, a qualifying match that references an unknown
    player raises :class:`UnknownPlayerError`.
    """

    qualifying = [m for m in matches if qualifies(m, tournament_id, group_id)]
    tallies: dict[str, _Tally] = {}
    for match in qualifying:
        tallies.setdefault(match.player1_id, _Tally())
        tallies.setdefault(match.player2_id, _Tally())

    known = {player.id for player in players}
    for player_id in tallies:
        if player_id not in known:
            raise UnknownPlayerError(player_id)

    for match in qualifying:
        _credit(tallies, match)
    return _sorted(
        _build(player, tallies[player.id])
        for player in players
        if player.id in tallies
    )
