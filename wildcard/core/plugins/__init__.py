"""
Built-in plugins for WildCardBuilder.
"""

from .core_plugin import WildCardCorePlugin
from .cors_plugin import CORSPlugin
from .telegram_plugin import TelegramBotPlugin

__all__ = [
    "CORSPlugin",
    "TelegramBotPlugin",
    "WildCardCorePlugin",
]
