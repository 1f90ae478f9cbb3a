"""
Fixed list of players and fuzzy matching of free-text names against it.
"""

from collections.abc import Iterable, Mapping

from wildcard.core.logging.logger import get_logger

logger = get_logger(__name__)


class Roster:
    """
    Ordered, read-only set of canonical player names.

    The roster decides the spreadsheet columns and which submitted names can
    be persisted. Matching is deliberately simple:

    1. case-insensitive exact match;
    2. otherwise the first roster name (in roster order) that contains the
       input or is contained in it. This is "first match", not "best match":
       with players "Lu" and "Luffy", the input "luffy" resolves to "Luffy" by
       the exact rule, but "luf" resolves to "Lu".
    """

    def __init__(self, names: Iterable[str]):
        self._names: tuple[str, ...] = tuple(names)

    @property
    def names(self) -> tuple[str, ...]:
        return self._names

    def __iter__(self):
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def match_user(self, input_name: str | None) -> str | None:
        """Return the roster entry for ``input_name``, or None when nothing matches."""
        if not input_name:
            return None

        normalized_input = input_name.strip().lower()
        if not normalized_input:
            return None

        for name in self._names:
            if name.lower() == normalized_input:
                return name

        for name in self._names:
            normalized_name = name.lower()
            if normalized_input in normalized_name or normalized_name in normalized_input:
                return name

        return None

    def match_scores(self, scores: Mapping[str, int]) -> dict[str, int]:
        """
        Re-key an entry by canonical roster names.

        Names that match nobody are dropped with a warning. The entry was
        already checked for zero-sum on the submitted names, so the result
        may no longer add up to zero.
        """
        matched: dict[str, int] = {}
        for input_name, score in scores.items():
            roster_name = self.match_user(input_name)
            if roster_name is None:
                logger.warning(f'Could not match input "{input_name}" to any player')
                continue
            matched[roster_name] = score
        return matched
