"""FastAPI dependencies for the score API."""

from .service_dependencies import get_roster, get_sheets_service, get_submission_service

__all__ = [
    "get_roster",
    "get_sheets_service",
    "get_submission_service",
]
