"""Sinks (Google Sheets, Google Chat), the submission orchestrator and their wiring."""

from .chat_service import GoogleChatService
from .registry import ServiceRegistry, create_http_session
from .sheets_service import GoogleSheetsService
from .submission_service import SubmissionResult, SubmissionService

__all__ = [
    "GoogleChatService",
    "GoogleSheetsService",
    "ServiceRegistry",
    "SubmissionResult",
    "SubmissionService",
    "create_http_session",
]
