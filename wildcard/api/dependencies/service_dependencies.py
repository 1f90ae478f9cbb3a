"""
Service dependency injection.

The services are built once per app by the core plugin and stored on
``app.state``; these getters hand them to route handlers via ``Depends``.
"""

from fastapi import Request

from wildcard.domain.roster import Roster
from wildcard.services.sheets_service import GoogleSheetsService
from wildcard.services.submission_service import SubmissionService


async def get_roster(request: Request) -> Roster:
    """Roster of known players."""
    return request.app.state.roster


async def get_sheets_service(request: Request) -> GoogleSheetsService:
    """Google Sheets sink."""
    return request.app.state.sheets_service


async def get_submission_service(request: Request) -> SubmissionService:
    """Orchestrator that validates and records a game."""
    return request.app.state.submission_service
