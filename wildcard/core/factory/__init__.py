"""
Plugin-based factory for the Wild Card FastAPI application.
"""

from .builder import WildCardBuilder
from .plugin import WildCardPlugin

__all__ = [
    "WildCardBuilder",
    "WildCardPlugin",
]
