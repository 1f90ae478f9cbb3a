"""
CORS Plugin

Wraps FastAPI's CORSMiddleware so browser front-ends on other origins can
call the score API.
"""

from typing import TYPE_CHECKING, Any

from fastapi.middleware.cors import CORSMiddleware

from ..logging.logger import get_app_logger

if TYPE_CHECKING:
    from fastapi import FastAPI

    from ..factory.builder import WildCardBuilder


class CORSPlugin:
    """
    Cross-Origin Resource Sharing for the HTTP API.

    Defaults allow every origin, which is what the score form needs.

    Example:
        CORSPlugin(allow_origins=["https://scores.example.com"])
    """

    def __init__(
        self,
        allow_origins: list[str] | None = None,
        allow_methods: list[str] | None = None,
        allow_headers: list[str] | None = None,
        allow_credentials: bool = False,
        max_age: int = 600,
        priority: int = 90,
        **cors_kwargs: Any,
    ):
        """
        Args:
            allow_origins: Allowed origins (defaults to ["*"])
            allow_methods: Allowed HTTP methods (defaults to ["*"])
            allow_headers: Allowed request headers (defaults to ["*"])
            allow_credentials: Whether to allow credentials
            max_age: Maximum age for preflight responses
            priority: Middleware priority (90 keeps CORS outermost)
            **cors_kwargs: Additional CORSMiddleware arguments
        """
        self.allow_origins = allow_origins or ["*"]
        self.allow_methods = allow_methods or ["*"]
        self.allow_headers = allow_headers or ["*"]
        self.allow_credentials = allow_credentials
        self.max_age = max_age
        self.priority = priority
        self.cors_kwargs = cors_kwargs

    def configure(self, builder: "WildCardBuilder") -> None:
        builder.add_middleware(
            CORSMiddleware,
            priority=self.priority,
            allow_origins=self.allow_origins,
            allow_methods=self.allow_methods,
            allow_headers=self.allow_headers,
            allow_credentials=self.allow_credentials,
            max_age=self.max_age,
            **self.cors_kwargs,
        )

        get_app_logger().debug(
            f"CORSPlugin configured - Origins: {self.allow_origins}, "
            f"Methods: {self.allow_methods}"
        )

    async def startup(self, app: "FastAPI") -> None:
        pass

    async def shutdown(self, app: "FastAPI") -> None:
        pass
