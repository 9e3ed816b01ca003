from sqlalchemy import (
    Column,
    String,
    DateTime,
    ForeignKey,
    JSON,
    Integer,
    Boolean,
    Index,
)
from sqlalchemy.sql import func
from .db import Base


class Player(Base):
    __tablename__ = "player"
    id = Column(String, primary_key=True)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    location = Column(String, nullable=False)
    ranking = Column(Integer, nullable=False)  # seed ranking, informational only
    created_at = Column(DateTime, server_default=func.now(), nullable=False)


class Tournament(Base):
    __tablename__ = "tournament"
    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    is_group_based = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)


class Group(Base):
    __tablename__ = "tournament_group"
    id = Column(String, primary_key=True)
    tournament_id = Column(String, ForeignKey("tournament.id"), nullable=False)
    name = Column(String, nullable=False)
    player_ids = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)


class Match(Base):
    __tablename__ = "match"
    id = Column(String, primary_key=True)
    tournament_id = Column(String, ForeignKey("tournament.id"), nullable=False)
    group_id = Column(String, ForeignKey("tournament_group.id"), nullable=True)
    # No FK on the player columns: matches outlive deleted players.
    player1_id = Column(String, nullable=False)
    player2_id = Column(String, nullable=False)
    score1 = Column(Integer, nullable=False)
    score2 = Column(Integer, nullable=False)
    location = Column(String, nullable=False)
    played_at = Column(DateTime, server_default=func.now(), nullable=False)

    __table_args__ = (
        Index("ix_match_tournament_group", "tournament_id", "group_id"),
    )
