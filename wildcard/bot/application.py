"""
python-telegram-bot Application wiring.
"""

from telegram.ext import Application, CommandHandler, MessageHandler, filters

from wildcard.domain.scores import SCORE_HINT_PATTERN
from wildcard.services.submission_service import SubmissionService

from .commands import WildCardCommands

# Plain text (never commands) containing at least one "Name: 5" shaped pair
SCORE_MESSAGE_FILTER = (
    filters.TEXT & ~filters.COMMAND & filters.Regex(SCORE_HINT_PATTERN)
)


def build_application(token: str, submission_service: SubmissionService) -> Application:
    """
    Create the bot Application with every handler registered.

    The caller owns the lifecycle (``initialize``/``start``/``updater.start_polling``
    and the reverse), so the bot can share an event loop with the HTTP API.
    """
    commands = WildCardCommands(submission_service)

    application = Application.builder().token(token).build()
    application.add_handler(CommandHandler(["start", "help"], commands.start))
    application.add_handler(CommandHandler("record", commands.record))
    application.add_handler(
        MessageHandler(SCORE_MESSAGE_FILTER, commands.handle_score_input)
    )
    application.add_error_handler(commands.on_error)
    return application
