"""
Wild Card score tracker.

Records zero-sum game results sent through a Telegram bot or an HTTP API
into a Google Sheet and announces them in a Google Chat space.
"""

from .core.app import WildCard
from .core.config.settings import settings

__version__ = settings.version

__all__ = [
    "WildCard",
    "__version__",
]
