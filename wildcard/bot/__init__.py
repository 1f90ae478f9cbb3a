"""Telegram front-end."""

from .application import build_application
from .commands import WildCardCommands, get_submitter

__all__ = [
    "WildCardCommands",
    "build_application",
    "get_submitter",
]
