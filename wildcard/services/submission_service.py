"""
Submission orchestration: validate an entry, then write it to both sinks.

The two sinks are independent. A failing sheet does not stop the chat
notification and vice versa; nothing is rolled back. Callers get one boolean
per sink and decide how to present partial success.
"""

from collections.abc import Awaitable, Mapping

from pydantic import BaseModel

from wildcard.core.logging.logger import get_logger
from wildcard.domain.errors import ScoreParseError, ScoreSumError
from wildcard.domain.scores import format_scores, get_sum, parse_scores, validate_sum

from .chat_service import GoogleChatService
from .sheets_service import GoogleSheetsService


class SubmissionResult(BaseModel):
    """Outcome of one accepted submission."""

    scores: dict[str, int]
    sheet_success: bool
    chat_success: bool
    submitted_by: str | None = None

    @property
    def fully_saved(self) -> bool:
        return self.sheet_success and self.chat_success


class SubmissionService:
    """Validates score entries and fans them out to the sheet and chat sinks."""

    def __init__(self, sheets: GoogleSheetsService, chat: GoogleChatService):
        self.sheets = sheets
        self.chat = chat
        self.logger = get_logger(__name__)

    @staticmethod
    def validate(scores: Mapping[str, int]) -> None:
        """
        Check an entry before anything is written.

        Raises:
            ScoreParseError: The entry is empty
            ScoreSumError: The scores do not add up to zero
        """
        if not scores:
            raise ScoreParseError("No scores provided")
        if not validate_sum(scores):
            raise ScoreSumError(get_sum(scores))

    async def submit(
        self, scores: Mapping[str, int], submitted_by: str | None = None
    ) -> SubmissionResult:
        """
        Record a game: sheet first, then chat.

        Args:
            scores: Score entry keyed by submitted names
            submitted_by: Optional submitter identity

        Returns:
            SubmissionResult with one success flag per sink

        Raises:
            ScoreInputError: The entry failed validation; no sink was called
        """
        self.validate(scores)
        entry = dict(scores)

        sheet_success = await self._guard(
            self.sheets.append_record(entry, submitted_by), "Google Sheets"
        )
        chat_success = await self._guard(
            self.chat.send_game_notification(entry, submitted_by), "Google Chat"
        )

        if not sheet_success and chat_success:
            await self._guard(
                self.chat.send_error_notification(
                    f"Failed to save game record to Google Sheets: {format_scores(entry)}"
                ),
                "Google Chat alert",
            )

        self.logger.info(
            f"Submission processed - scores: {format_scores(entry)}, "
            f"sheet: {sheet_success}, chat: {chat_success}"
        )
        return SubmissionResult(
            scores=entry,
            sheet_success=sheet_success,
            chat_success=chat_success,
            submitted_by=submitted_by,
        )

    async def submit_text(
        self, text: str, submitted_by: str | None = None
    ) -> SubmissionResult:
        """Parse ``"Name: score, ..."`` text and submit it."""
        scores = parse_scores(text)
        if scores is None:
            raise ScoreParseError()
        return await self.submit(scores, submitted_by)

    async def _guard(self, call: Awaitable[bool], sink_name: str) -> bool:
        """Await a sink call; anything it raises counts as a failed write."""
        try:
            return bool(await call)
        except Exception as e:
            self.logger.error(f"{sink_name} sink raised unexpectedly: {e}", exc_info=True)
            return False
