"""
Core application components: configuration, logging, the builder and plugins.
"""

from .config.settings import settings
from .logging import get_app_logger, get_logger, setup_app_logging

__all__ = [
    "get_app_logger",
    "get_logger",
    "settings",
    "setup_app_logging",
]
