"""
Wild Card Core Plugin

Foundation of every Wild Card app: logging, the shared HTTP session, the
score services on ``app.state``, the HTTP middleware stack and the routes.
"""

from typing import TYPE_CHECKING

from fastapi import FastAPI

from wildcard.api.middleware.error_handler import ErrorHandlerMiddleware
from wildcard.api.middleware.request_logging import RequestLoggingMiddleware
from wildcard.api.routes.health import router as health_router
from wildcard.api.routes.scores import router as scores_router
from wildcard.services.registry import ServiceRegistry, create_http_session

from ..config.settings import Settings, settings
from ..logging.logger import get_app_logger, setup_app_logging

if TYPE_CHECKING:
    from ..factory.builder import WildCardBuilder


class WildCardCorePlugin:
    """
    Core functionality as a plugin.

    Startup (priority 10) builds the service graph and stores it on
    ``app.state``:

    - ``settings``: the Settings object in use
    - ``http_session``: persistent aiohttp session
    - ``roster``: Roster of known players
    - ``sheets_service`` / ``chat_service``: the two sinks
    - ``submission_service``: the orchestrator used by both front-ends

    A second hook (priority 20) writes the sheet headers when a spreadsheet
    is configured. A failure there is logged and does not stop the app.
    """

    def __init__(self, config: Settings | None = None, initialize_sheet: bool = True):
        """
        Args:
            config: Settings to use (defaults to the global settings)
            initialize_sheet: Write the header row during startup
        """
        self.config = config or settings
        self.initialize_sheet = initialize_sheet

    def configure(self, builder: "WildCardBuilder") -> None:
        """Register core middleware, routes and lifespan hooks."""
        logger = get_app_logger()

        builder.add_middleware(ErrorHandlerMiddleware, priority=80)
        builder.add_middleware(RequestLoggingMiddleware, priority=70)

        builder.add_router(health_router)
        builder.add_router(scores_router)

        builder.add_startup_hook(self._core_startup, priority=10)
        builder.add_startup_hook(self._sheet_startup, priority=20)
        builder.add_shutdown_hook(self._core_shutdown, priority=5)

        logger.debug("✅ WildCardCorePlugin configured - middleware: 2, routes: 2, hooks: 3")

    async def startup(self, app: FastAPI) -> None:
        await self._core_startup(app)
        await self._sheet_startup(app)

    async def shutdown(self, app: FastAPI) -> None:
        await self._core_shutdown(app)

    async def _core_startup(self, app: FastAPI) -> None:
        """Set up logging, the HTTP session and the services."""
        setup_app_logging()
        logger = get_app_logger()
        config = self.config

        logger.info(f"🚀 Starting Wild Card score tracker v{config.version}")
        logger.info(f"📊 Environment: {config.environment}")
        logger.info(f"🕐 Time zone: {config.time_zone}")
        logger.info(f"👥 Roster: {', '.join(config.roster)}")

        session = create_http_session(config)
        services = ServiceRegistry(config, session)

        app.state.settings = config
        app.state.http_session = session
        app.state.roster = services.roster
        app.state.sheets_service = services.sheets_service
        app.state.chat_service = services.chat_service
        app.state.submission_service = services.submission_service

        if not config.has_chat_webhook:
            logger.warning("⚠️ GOOGLE_CHAT_WEBHOOK_URL not set - notifications disabled")

        base_url = f"http://localhost:{config.port}"
        logger.info("=== AVAILABLE ENDPOINTS ===")
        logger.info(f"🏥 Health Check: {base_url}/health")
        logger.info(f"👥 Players: {base_url}/api/users")
        logger.info(f"📝 Submit Score: {base_url}/api/submit-score")
        logger.info(f"📋 Initialize Sheet: {base_url}/api/init")
        logger.info("============================")

    async def _sheet_startup(self, app: FastAPI) -> None:
        """Initialize the spreadsheet headers if a spreadsheet is configured."""
        logger = get_app_logger()

        if not self.config.has_sheets:
            logger.warning(
                "⚠️ Google Sheets not configured - set GOOGLE_SHEETS_ID and credentials"
            )
            return
        if not self.initialize_sheet:
            return

        if await app.state.sheets_service.initialize_sheet():
            logger.info("📋 Google Sheets ready")
        else:
            logger.error("❌ Google Sheets initialization failed - records will not be saved")

    async def _core_shutdown(self, app: FastAPI) -> None:
        """Close the HTTP session."""
        logger = get_app_logger()

        session = getattr(app.state, "http_session", None)
        if session is not None:
            await session.close()
            logger.info("🌐 HTTP session closed")

        logger.info("✅ Wild Card core shutdown completed")
