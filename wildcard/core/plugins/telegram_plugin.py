"""
Telegram Bot Plugin

Runs the Telegram bot's long polling inside the FastAPI lifespan, so one
process serves both front-ends on the same event loop.
"""

from typing import TYPE_CHECKING

from fastapi import FastAPI
from telegram.ext import Application

from wildcard.bot.application import build_application

from ..config.settings import Settings, settings
from ..logging.logger import get_app_logger

if TYPE_CHECKING:
    from ..factory.builder import WildCardBuilder


class TelegramBotPlugin:
    """
    Starts the bot after the core services exist and stops it before they close.

    Without ``TELEGRAM_BOT_TOKEN`` the plugin logs a warning and the app runs
    HTTP-only.
    """

    def __init__(self, config: Settings | None = None, priority: int = 30):
        self.config = config or settings
        self.priority = priority

    def configure(self, builder: "WildCardBuilder") -> None:
        builder.add_startup_hook(self.startup, priority=self.priority)
        builder.add_shutdown_hook(self.shutdown, priority=self.priority)

    async def startup(self, app: FastAPI) -> None:
        """
        Start polling; a bot that cannot start leaves the HTTP API running.

        A bad token or an unreachable Telegram is logged and the app carries
        on HTTP-only.
        """
        logger = get_app_logger()
        app.state.telegram_application = None

        if not self.config.has_bot:
            logger.warning("⚠️ TELEGRAM_BOT_TOKEN not set - Telegram bot disabled")
            return

        application = build_application(
            self.config.require_bot_token(),
            app.state.submission_service,
        )
        try:
            await application.initialize()
            await application.start()
            await application.updater.start_polling()
        except Exception as e:
            logger.error(f"❌ Telegram bot failed to start - running HTTP-only: {e}")
            try:
                await self._stop(application)
            except Exception as cleanup_error:
                logger.warning(f"Telegram bot cleanup failed: {cleanup_error}")
            return

        app.state.telegram_application = application
        logger.info("🤖 Telegram bot polling started")

    async def shutdown(self, app: FastAPI) -> None:
        application = getattr(app.state, "telegram_application", None)
        if application is None:
            return

        await self._stop(application)
        app.state.telegram_application = None
        get_app_logger().info("🤖 Telegram bot stopped")

    @staticmethod
    async def _stop(application: Application) -> None:
        """Undo whatever part of the startup sequence completed."""
        if application.updater and application.updater.running:
            await application.updater.stop()
        if application.running:
            await application.stop()
        await application.shutdown()
