"""Internal application services (pure helpers, no I/O)."""

from .validation import (
    ValidationError,
    validate_distinct_players,
    validate_match_scores,
)
from .rankings import (
    PlayerRanking,
    UnknownPlayerError,
    rank_filtered,
    rank_overall,
)

__all__ = [
    "validate_match_scores",
    "validate_distinct_players",
    "ValidationError",
    "PlayerRanking",
    "UnknownPlayerError",
    "rank_overall",
    "rank_filtered",
]
