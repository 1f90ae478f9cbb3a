"""Construction of the service graph shared by the HTTP app and the standalone bot."""

import aiohttp

from wildcard.core.config.settings import Settings
from wildcard.domain.roster import Roster

from .chat_service import GoogleChatService
from .sheets_service import GoogleSheetsService
from .submission_service import SubmissionService


def create_http_session(config: Settings) -> aiohttp.ClientSession:
    """Persistent session for webhook calls; the caller closes it."""
    connector = aiohttp.TCPConnector(limit=20, enable_cleanup_closed=True)
    return aiohttp.ClientSession(
        connector=connector,
        timeout=aiohttp.ClientTimeout(total=config.sink_timeout_seconds),
    )


class ServiceRegistry:
    """The roster, both sinks and the orchestrator, built from one Settings object."""

    def __init__(self, config: Settings, session: aiohttp.ClientSession):
        self.config = config
        self.session = session
        self.roster = Roster(config.roster)
        self.sheets_service = GoogleSheetsService(config, self.roster)
        self.chat_service = GoogleChatService(session, config)
        self.submission_service = SubmissionService(
            self.sheets_service, self.chat_service
        )
