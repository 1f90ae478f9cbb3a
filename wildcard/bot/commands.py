"""
Telegram command and message handlers.

Messages use Telegram's legacy Markdown; anything echoed back from the user
is escaped first so a stray ``_`` in a name cannot break the reply.
"""

from telegram import Message, Update
from telegram.constants import ParseMode
from telegram.error import TelegramError
from telegram.ext import ContextTypes
from telegram.helpers import escape_markdown

from wildcard.core.logging.context import clear_request_context, set_request_context
from wildcard.core.logging.logger import get_logger
from wildcard.domain.scores import format_scores, get_sum, parse_scores, validate_sum
from wildcard.services.submission_service import SubmissionResult, SubmissionService

WELCOME_MESSAGE = (
    "🎮 *Welcome to Wild Card Score Tracker!*\n\n"
    "This bot helps you track your wild card game scores.\n\n"
    "*Commands:*\n"
    "/start - Show this help message\n"
    "/record - Record a new game\n"
    "/help - Show help\n\n"
    "*Quick Record Format:*\n"
    "Send scores directly in this format:\n"
    "`Name1: score1, Name2: score2, ...`\n\n"
    "*Example:*\n"
    "`Winz: 5, Luffy: 10, Lucas: -10, Finn: -5`\n\n"
    "⚠️ *Important:* All scores must sum to 0!"
)

RECORD_INSTRUCTIONS = (
    "📝 *Record New Game*\n\n"
    "Please send the scores in this format:\n"
    "`Name1: score1, Name2: score2, ...`\n\n"
    "*Example:*\n"
    "`Winz: 5, Luffy: 10, Lucas: -10, Finn: -5`\n\n"
    "⚠️ Remember: All scores must sum to 0!"
)

INVALID_FORMAT_MESSAGE = (
    "❌ Invalid format! Please use:\n"
    "`Name1: score1, Name2: score2, ...`\n\n"
    "Example: `Winz: 5, Luffy: 10, Lucas: -10, Finn: -5`"
)

LOADING_MESSAGE = "⏳ Saving game record..."
SAVE_ERROR_MESSAGE = "❌ Error saving game record. Please try again later."
UNKNOWN_SUBMITTER = "Unknown"


def get_submitter(update: Update) -> str:
    """Telegram username, else first name, else ``Unknown``."""
    user = update.effective_user
    if user is None:
        return UNKNOWN_SUBMITTER
    return user.username or user.first_name or UNKNOWN_SUBMITTER


def build_sum_error_message(scores: dict[str, int]) -> str:
    return (
        "❌ Invalid scores! Sum must equal 0.\n"
        f"Current sum: {get_sum(scores)}\n\n"
        f"Scores: {escape_markdown(format_scores(scores), version=1)}"
    )


def build_status_message(result: SubmissionResult) -> str:
    """Summary shown after a submission, with one line per sink."""
    sheet_line = (
        "📊 Saved to Google Sheets ✓"
        if result.sheet_success
        else "📊 Google Sheets: Failed ✗"
    )
    chat_line = (
        "💬 Google Chat notified ✓" if result.chat_success else "💬 Google Chat: Failed ✗"
    )
    return (
        "✅ *Game recorded successfully!*\n\n"
        f"*Scores:*\n{escape_markdown(format_scores(result.scores), version=1)}\n\n"
        f"{sheet_line}\n"
        f"{chat_line}"
    )


class WildCardCommands:
    """
    Bot handlers bound to one SubmissionService.

    Register the bound methods with a python-telegram-bot ``Application``;
    see ``wildcard.bot.application.build_application``.
    """

    def __init__(self, submission_service: SubmissionService):
        self.submission_service = submission_service
        self.logger = get_logger(__name__)

    async def start(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """/start and /help"""
        await update.effective_message.reply_text(
            WELCOME_MESSAGE, parse_mode=ParseMode.MARKDOWN
        )

    async def record(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """/record"""
        await update.effective_message.reply_text(
            RECORD_INSTRUCTIONS, parse_mode=ParseMode.MARKDOWN
        )

    async def handle_score_input(
        self, update: Update, context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        """
        Validate a score line, record it and report how each sink did.

        Input errors are answered directly and never reach the sinks.
        """
        submitter = get_submitter(update)
        set_request_context(source="bot", submitter=submitter)
        try:
            await self._record(update.effective_message, submitter)
        finally:
            clear_request_context()

    async def _record(self, message: Message, submitter: str) -> None:
        scores = parse_scores(message.text)
        if scores is None:
            self.logger.info("Rejected unparseable score message")
            await message.reply_text(INVALID_FORMAT_MESSAGE, parse_mode=ParseMode.MARKDOWN)
            return

        if not validate_sum(scores):
            self.logger.info(f"Rejected scores with sum {get_sum(scores)}")
            await message.reply_text(
                build_sum_error_message(scores), parse_mode=ParseMode.MARKDOWN
            )
            return

        loading = await message.reply_text(LOADING_MESSAGE)

        try:
            result = await self.submission_service.submit(scores, submitter)
        except Exception as e:
            self.logger.error(f"Error processing game record: {e}", exc_info=True)
            await self._delete(loading)
            await message.reply_text(SAVE_ERROR_MESSAGE)
            return

        await self._delete(loading)
        await message.reply_text(
            build_status_message(result), parse_mode=ParseMode.MARKDOWN
        )

    async def on_error(self, update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Log polling and handler errors raised inside the Application."""
        self.logger.error(f"Bot error: {context.error}", exc_info=context.error)

    async def _delete(self, loading: Message) -> None:
        try:
            await loading.delete()
        except TelegramError as e:
            self.logger.warning(f"Could not delete loading message: {e}")
