from typing import Any, List, Optional
from datetime import datetime
from pydantic import BaseModel, Field, field_validator, ConfigDict

from .time_utils import require_utc


def _trimmed(value: Any, field: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{field} must be a string")
    trimmed = value.strip()
    if not trimmed:
        raise ValueError(f"{field} must not be empty")
    return trimmed


class PlayerCreate(BaseModel):
    firstName: str = Field(..., min_length=1, max_length=50)
    lastName: str = Field(..., min_length=1, max_length=50)
    location: str = Field(..., min_length=1, max_length=100)
    ranking: int = Field(..., ge=0)

    model_config = ConfigDict(extra="forbid")

    @field_validator("firstName", "lastName", "location", mode="before")
    @classmethod
    def _strip_text(cls, value: Any, info) -> str:
        return _trimmed(value, info.field_name)


class PlayerOut(BaseModel):
    id: str
    firstName: str
    lastName: str
    location: str
    ranking: int


class TournamentCreate(BaseModel):
    """Schema for creating a tournament."""

    name: str = Field(..., min_length=1, max_length=200)
    isGroupBased: bool = False

    @field_validator("name", mode="before")
    @classmethod
    def _validate_name(cls, value: Any) -> str:
        return _trimmed(value, "name")


class TournamentOut(BaseModel):
    """Returned representation of a tournament."""

    id: str
    name: str
    isGroupBased: bool
    groupIds: List[str] = Field(default_factory=list)


class GroupCreate(BaseModel):
    """Schema for adding a group to a tournament."""

    name: str = Field(..., min_length=1, max_length=100)

    @field_validator("name", mode="before")
    @classmethod
    def _validate_name(cls, value: Any) -> str:
        return _trimmed(value, "name")


class GroupPlayersUpdate(BaseModel):
    playerIds: List[str]

    @field_validator("playerIds")
    @classmethod
    def _dedupe(cls, value: List[str]) -> List[str]:
        seen: list[str] = []
        for pid in value:
            pid = pid.strip()
            if pid and pid not in seen:
                seen.append(pid)
        return seen


class GroupOut(BaseModel):
    id: str
    tournamentId: str
    name: str
    playerIds: List[str] = Field(default_factory=list)


class MatchCreate(BaseModel):
    """Schema for recording a two-player match.

    Scores are kept loosely typed here and checked by
    ``services.validation.validate_match_scores`` so that booleans and other
    near-integers get a precise error message.
    """

    tournamentId: str
    player1Id: str
    player2Id: str
    score1: Any
    score2: Any
    location: str = Field(..., min_length=1, max_length=100)
    groupId: Optional[str] = None
    playedAt: Optional[datetime] = None

    @field_validator("location", mode="before")
    @classmethod
    def _validate_location(cls, value: Any) -> str:
        return _trimmed(value, "location")

    @field_validator("groupId", mode="before")
    @classmethod
    def _blank_group(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("playedAt")
    @classmethod
    def _require_timezone(cls, value: Optional[datetime]) -> Optional[datetime]:
        return require_utc(value, field_name="playedAt")


class MatchOut(BaseModel):
    id: str
    tournamentId: str
    groupId: Optional[str] = None
    player1Id: str
    player2Id: str
    score1: int
    score2: int
    location: str
    playedAt: Optional[datetime] = None


class PlayerRankingOut(BaseModel):
    player: PlayerOut
    wins: int
    losses: int
    winLossRatio: float
    setsWon: int
    setsLost: int
    setsRatio: float


class AdminLogin(BaseModel):
    """Schema for admin login requests."""
    username: str
    password: str


class TokenOut(BaseModel):
    """Returned on successful authentication."""
    access_token: str
    token_type: str = "bearer"
