"""HTTP routes."""

from .health import router as health_router
from .scores import router as scores_router

__all__ = [
    "health_router",
    "scores_router",
]
