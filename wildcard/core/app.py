"""
Main Wild Card application class.

Wraps WildCardBuilder with the plugins every deployment needs: the core
plugin, CORS and (when a token is configured) the Telegram bot.
"""

from collections.abc import Callable
from typing import TYPE_CHECKING

import uvicorn
from fastapi import FastAPI

from .config.settings import Settings, settings
from .factory.builder import WildCardBuilder
from .logging.logger import get_app_logger
from .plugins.core_plugin import WildCardCorePlugin
from .plugins.cors_plugin import CORSPlugin
from .plugins.telegram_plugin import TelegramBotPlugin

if TYPE_CHECKING:
    from .factory.plugin import WildCardPlugin


class WildCard:
    """
    The score tracker: HTTP API plus Telegram bot in one process.

    Usage:
        app = WildCard()
        app.run()

    Or point uvicorn at ``app.asgi``.
    """

    def __init__(
        self,
        config: Settings | None = None,
        enable_bot: bool = True,
        enable_cors: bool = True,
    ):
        """
        Args:
            config: Settings to use (defaults to the global settings)
            enable_bot: Run Telegram polling inside the app lifespan
            enable_cors: Allow cross-origin calls to the API
        """
        self.config = config or settings
        self._app: FastAPI | None = None

        self._builder = WildCardBuilder()
        self._builder.add_plugin(WildCardCorePlugin(config=self.config))
        if enable_cors:
            self._builder.add_plugin(CORSPlugin())
        if enable_bot:
            self._builder.add_plugin(TelegramBotPlugin(config=self.config))

        get_app_logger().debug(
            f"🏗️ WildCard initialized with plugins={len(self._builder.plugins)}"
        )

    def add_plugin(self, plugin: "WildCardPlugin") -> "WildCard":
        """Add a plugin; must be called before the app is built."""
        self._builder.add_plugin(plugin)
        return self

    def add_startup_hook(self, hook: Callable, priority: int = 50) -> "WildCard":
        self._builder.add_startup_hook(hook, priority)
        return self

    def add_shutdown_hook(self, hook: Callable, priority: int = 50) -> "WildCard":
        self._builder.add_shutdown_hook(hook, priority)
        return self

    def create_app(self) -> FastAPI:
        """Build the FastAPI application once and return it."""
        if self._app is not None:
            return self._app

        self._builder.configure(
            title="Wild Card Score Tracker",
            description="Record zero-sum Wild Card game results",
            version=self.config.version,
            docs_url="/docs" if self.config.is_development else None,
            redoc_url="/redoc" if self.config.is_development else None,
        )
        self._app = self._builder.build()
        return self._app

    @property
    def asgi(self) -> FastAPI:
        """ASGI application for uvicorn (``module:app.asgi``)."""
        return self.create_app()

    def run(self, host: str = "0.0.0.0", port: int | None = None, **kwargs) -> None:
        """
        Serve the app with uvicorn (no reload; use the ``dev`` CLI command for that).

        Args:
            host: Host to bind to
            port: Port to bind to (defaults to PORT)
            **kwargs: Additional uvicorn configuration
        """
        port = port or self.config.port
        logger = get_app_logger()
        logger.info(f"Starting Wild Card v{self.config.version} server on {host}:{port}")

        uvicorn.run(
            self.asgi,
            host=host,
            port=port,
            log_level=self.config.log_level.lower(),
            **kwargs,
        )
