from typing import Any, Optional, Tuple

class ValidationError(Exception):
    """Raised when a submitted match result is invalid."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


def _coerce_score(label: str, raw: Any, max_sets: Optional[int]) -> int:
    # Reject booleans explicitly (bool is a subclass of int in Python)
    if isinstance(raw, bool):
        raise ValidationError(f"{label} must be an integer (not a boolean).")
    if isinstance(raw, float) and not raw.is_integer():
        raise ValidationError(f"{label} must be an integer.")
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise ValidationError(f"{label} must be an integer.")

    if value < 0:
        raise ValidationError(f"{label} must be >= 0.")
    if max_sets is not None and value > max_sets:
        raise ValidationError(f"{label} must be <= {max_sets}.")
    return value


def validate_match_scores(
    score1: Any,
    score2: Any,
    *,
    allow_ties: bool = True,
    max_sets: Optional[int] = 1000,
) -> Tuple[int, int]:
    """Validate and normalize the set counts of a two-player match.

    Rules:
    - Both scores must be integers >= 0 (booleans are rejected)
    - Each score must be <= ``max_sets`` (if provided)
    - Equal scores are rejected only when ``allow_ties`` is ``False``
    """

    a = _coerce_score("score1", score1, max_sets)
    b = _coerce_score("score2", score2, max_sets)
    if not allow_ties and a == b:
        raise ValidationError("A match cannot end in a tie.")
    return a, b


def validate_distinct_players(player1_id: str, player2_id: str) -> None:
    if not player1_id or not player2_id:
        raise ValidationError("Both players are required.")
    if player1_id == player2_id:
        raise ValidationError("A player cannot play against themselves.")
