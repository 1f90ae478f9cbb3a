"""
Score entry parsing and validation.

A score entry is an ordered mapping of player name to a signed integer score.
Every function here is pure: no I/O, no logging.
"""

import re
from collections.abc import Mapping

ScoreEntry = dict[str, int]

# One "Name: score" pair. The lazy name group stops at the last colon that is
# followed only by the numeric token. Scores are ASCII digits only.
_PAIR_PATTERN = re.compile(r"^(.+?):\s*(-?[0-9]+)$")

# Loose check used by the bot to decide whether a message is a score attempt
SCORE_HINT_PATTERN = re.compile(r"[A-Za-z0-9_]+:\s*-?[0-9]+")


def parse_scores(text: str) -> ScoreEntry | None:
    """
    Parse ``"Name1: score1, Name2: score2, ..."`` into a score entry.

    Parsing is all-or-nothing: one malformed pair rejects the whole input and
    None is returned, never a partial mapping. A name given twice keeps the
    score of its last occurrence.

    Example:
        >>> parse_scores("Winz: 5, Luffy: 10, Lucas: -10, Finn: -5")
        {'Winz': 5, 'Luffy': 10, 'Lucas': -10, 'Finn': -5}
        >>> parse_scores("Winz five, Luffy: 10") is None
        True
    """
    if not isinstance(text, str):
        return None

    scores: ScoreEntry = {}
    for raw_pair in text.split(","):
        match = _PAIR_PATTERN.match(raw_pair.strip())
        if not match:
            return None

        name = match.group(1).strip()
        if not name:
            return None
        scores[name] = int(match.group(2))

    return scores or None


def looks_like_scores(text: str | None) -> bool:
    """Return True when ``text`` contains something shaped like ``Name: 5``."""
    return bool(text) and SCORE_HINT_PATTERN.search(text) is not None


def get_sum(scores: Mapping[str, int]) -> int:
    """Sum of all scores in the entry."""
    return sum(scores.values())


def validate_sum(scores: Mapping[str, int]) -> bool:
    """Check the zero-sum rule: every entry must add up to exactly 0."""
    return get_sum(scores) == 0


def format_score(score: int) -> str:
    """Render a score with an explicit sign for positive values (``+5``, ``-3``, ``0``)."""
    return f"+{score}" if score > 0 else str(score)


def format_scores(scores: Mapping[str, int]) -> str:
    """Format an entry for display, keeping insertion order: ``Winz: +5, Finn: -5``."""
    return ", ".join(f"{name}: {format_score(score)}" for name, score in scores.items())
