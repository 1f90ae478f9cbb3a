"""
WildCardBuilder - plugin-based FastAPI application factory.

Plugins register middleware, routers and lifespan hooks; the builder
assembles them into one FastAPI app with a single lifespan.
"""

from collections.abc import Callable
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from fastapi import FastAPI

from ..logging.logger import get_app_logger

if TYPE_CHECKING:
    from .plugin import WildCardPlugin


class WildCardBuilder:
    """
    Fluent builder for the score tracker's FastAPI app.

    Supports:
    - Plugins with configure/startup/shutdown lifecycle
    - Priority-ordered middleware
    - Priority-ordered startup and shutdown hooks run in one lifespan

    Example:
        app = (
            WildCardBuilder()
            .add_plugin(WildCardCorePlugin())
            .add_plugin(CORSPlugin())
            .configure(title="Wild Card")
            .build()
        )
    """

    def __init__(self):
        self.plugins: list[WildCardPlugin] = []
        self.middlewares: list[tuple[type, dict, int]] = []  # (class, kwargs, priority)
        self.routers: list[tuple[Any, dict]] = []  # (router, include_kwargs)
        self.startup_hooks: list[tuple[Callable, int]] = []  # (hook, priority)
        self.shutdown_hooks: list[tuple[Callable, int]] = []  # (hook, priority)
        self.config_overrides: dict[str, Any] = {}

    def add_plugin(self, plugin: "WildCardPlugin") -> "WildCardBuilder":
        """
        Add a plugin. Plugins are configured in the order they were added.

        Returns:
            Self for method chaining
        """
        self.plugins.append(plugin)
        return self

    def add_middleware(
        self, middleware_class: type, priority: int = 50, **kwargs: Any
    ) -> "WildCardBuilder":
        """
        Add middleware with priority ordering.

        Higher numbers wrap the app further out, lower numbers sit closer to
        the routes. Default priority is 50.

        Args:
            middleware_class: Starlette middleware class
            priority: Position in the middleware stack
            **kwargs: Middleware constructor arguments

        Returns:
            Self for method chaining
        """
        self.middlewares.append((middleware_class, kwargs, priority))
        return self

    def add_router(self, router: Any, **kwargs: Any) -> "WildCardBuilder":
        """
        Add a router, included with ``app.include_router(router, **kwargs)``.

        Returns:
            Self for method chaining
        """
        self.routers.append((router, kwargs))
        return self

    def add_startup_hook(self, hook: Callable, priority: int = 50) -> "WildCardBuilder":
        """
        Add an async ``hook(app)`` run at startup, lowest priority first.

        Priority Guidelines:
        - 10: Core (logging, HTTP session, services)
        - 20: External services (spreadsheet initialization)
        - 30: Front-ends (Telegram polling)
        - 50: User hooks (default)

        Returns:
            Self for method chaining
        """
        self.startup_hooks.append((hook, priority))
        return self

    def add_shutdown_hook(self, hook: Callable, priority: int = 50) -> "WildCardBuilder":
        """
        Add an async ``hook(app)`` run at shutdown, highest priority first.

        Core cleanup registers at 5 so the HTTP session closes after every
        plugin that may still post through it (the bot stops at 30).

        Returns:
            Self for method chaining
        """
        self.shutdown_hooks.append((hook, priority))
        return self

    def configure(self, **overrides: Any) -> "WildCardBuilder":
        """
        Override FastAPI constructor arguments (title, docs_url, ...).

        Returns:
            Self for method chaining
        """
        self.config_overrides.update(overrides)
        return self

    def build(self) -> FastAPI:
        """
        Build the FastAPI application.

        1. Configure plugins (sync registration only)
        2. Create the app with the unified lifespan
        3. Add middleware in priority order
        4. Include routers

        Returns:
            Configured FastAPI application
        """
        logger = get_app_logger()
        logger.debug(f"🏗️ Building FastAPI app with {len(self.plugins)} plugins")

        for plugin in self.plugins:
            plugin.configure(self)

        if self.plugins:
            logger.debug(
                f"Plugins configured - {len(self.middlewares)} middlewares, "
                f"{len(self.routers)} routers, {len(self.startup_hooks)} startup hooks, "
                f"{len(self.shutdown_hooks)} shutdown hooks"
            )

        @asynccontextmanager
        async def unified_lifespan(app: FastAPI):
            try:
                await self._execute_all_startup_hooks(app)
                logger.info("✅ All startup hooks completed successfully")
                yield
            finally:
                await self._execute_all_shutdown_hooks(app)
                logger.info("✅ All shutdown hooks completed")

        default_config = {
            "title": "Wild Card Score Tracker",
            "description": "Zero-sum score tracker for Wild Card games",
            "version": "1.0.0",
            "lifespan": unified_lifespan,
        }
        default_config.update(self.config_overrides)

        app = FastAPI(**default_config)

        # add_middleware wraps outward, so the innermost (lowest priority) goes first
        for middleware_class, kwargs, priority in sorted(
            self.middlewares, key=lambda x: x[2]
        ):
            app.add_middleware(middleware_class, **kwargs)
            logger.debug(
                f"Added middleware {middleware_class.__name__} (priority: {priority})"
            )

        for router, kwargs in self.routers:
            app.include_router(router, **kwargs)

        logger.debug(
            f"Built FastAPI app '{default_config['title']}': {len(self.plugins)} plugins, "
            f"{len(self.middlewares)} middlewares, {len(self.routers)} routers"
        )
        return app

    async def _execute_all_startup_hooks(self, app: FastAPI) -> None:
        """Run startup hooks in ascending priority; the first failure aborts startup."""
        logger = get_app_logger()

        for hook, priority in sorted(self.startup_hooks, key=lambda x: x[1]):
            hook_name = getattr(hook, "__name__", "anonymous_hook")
            logger.debug(f"⚡ Executing startup hook: {hook_name} (priority: {priority})")
            try:
                await hook(app)
            except Exception as e:
                logger.error(f"❌ Startup hook {hook_name} failed: {e}", exc_info=True)
                raise

    async def _execute_all_shutdown_hooks(self, app: FastAPI) -> None:
        """Run shutdown hooks in descending priority; failures are logged and skipped."""
        logger = get_app_logger()

        for hook, priority in sorted(
            self.shutdown_hooks, key=lambda x: x[1], reverse=True
        ):
            hook_name = getattr(hook, "__name__", "anonymous_hook")
            try:
                logger.debug(
                    f"🛑 Executing shutdown hook: {hook_name} (priority: {priority})"
                )
                await hook(app)
            except Exception as e:
                logger.error(f"❌ Error in shutdown hook {hook_name}: {e}", exc_info=True)
