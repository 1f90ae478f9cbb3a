"""Pure score-entry logic: parsing, zero-sum validation and roster matching."""

from .errors import ScoreInputError, ScoreParseError, ScoreSumError
from .roster import Roster
from .scores import (
    ScoreEntry,
    format_score,
    format_scores,
    get_sum,
    looks_like_scores,
    parse_scores,
    validate_sum,
)

__all__ = [
    "Roster",
    "ScoreEntry",
    "ScoreInputError",
    "ScoreParseError",
    "ScoreSumError",
    "format_score",
    "format_scores",
    "get_sum",
    "looks_like_scores",
    "parse_scores",
    "validate_sum",
]
