"""
Plugin protocol for the application builder.
"""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from fastapi import FastAPI

    from .builder import WildCardBuilder


class WildCardPlugin(Protocol):
    """
    Interface every plugin added to ``WildCardBuilder`` implements.

    Lifecycle:
    1. configure: synchronous, at build time; registers middleware, routers and hooks
    2. startup: async, inside the application lifespan
    3. shutdown: async, inside the application lifespan, after the app stops serving
    """

    def configure(self, builder: "WildCardBuilder") -> None:
        """
        Register middleware, routers and lifespan hooks with the builder.

        Runs before the FastAPI app exists, so nothing here may await.

        Args:
            builder: WildCardBuilder instance to configure
        """
        ...

    async def startup(self, app: "FastAPI") -> None:
        """
        Acquire resources (sessions, clients, background pollers).

        Args:
            app: FastAPI application instance
        """
        ...

    async def shutdown(self, app: "FastAPI") -> None:
        """
        Release whatever startup acquired, in reverse order.

        Args:
            app: FastAPI application instance
        """
        ...
