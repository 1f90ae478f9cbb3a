"""
Pytest configuration and common fixtures for Wild Card tests.

Provides settings built from a controlled environment, an in-memory
spreadsheet standing in for gspread, and a fake aiohttp session for the
chat webhook.
"""

import os
from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

# The module-level settings object is created on first import; keep it quiet
# and free of log files before anything from the package is imported.
os.environ.setdefault("ENVIRONMENT", "PROD")
os.environ.setdefault("LOG_LEVEL", "INFO")

from wildcard.core.config.settings import Settings  # noqa: E402
from wildcard.domain.roster import Roster  # noqa: E402
from wildcard.services.chat_service import GoogleChatService  # noqa: E402
from wildcard.services.sheets_service import GoogleSheetsService  # noqa: E402

ROSTER = "Winz,Luffy,Lucas,Finn"
WEBHOOK_URL = "https://chat.example.com/v1/spaces/AAA/messages?key=k"


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def setup_test_env(monkeypatch):
    """Set up test environment variables."""
    monkeypatch.setenv("ENVIRONMENT", "PROD")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("ROSTER", ROSTER)
    monkeypatch.setenv("TIME_ZONE", "Asia/Bangkok")
    monkeypatch.setenv("SINK_TIMEOUT_SECONDS", "2")
    monkeypatch.setenv("GOOGLE_SHEETS_ID", "test-sheet-id")
    monkeypatch.setenv("GOOGLE_CREDENTIALS_JSON", '{"type": "service_account"}')
    monkeypatch.setenv("GOOGLE_CHAT_WEBHOOK_URL", WEBHOOK_URL)
    monkeypatch.delenv("TELEGRAM_BOT_TOKEN", raising=False)
    monkeypatch.delenv("TZ", raising=False)


@pytest.fixture
def test_settings() -> Settings:
    """Settings read from the test environment."""
    return Settings()


@pytest.fixture
def roster(test_settings: Settings) -> Roster:
    return Roster(test_settings.roster)


# ---------------------------------------------------------------------------
# Google Sheets
# ---------------------------------------------------------------------------


class FakeSpreadsheet:
    """
    In-memory stand-in for ``gspread.Spreadsheet``.

    Implements the handful of calls the sheet sink makes and records each
    write so tests can assert on them.
    """

    def __init__(self, title: str = "Games", rows: list[list[Any]] | None = None):
        self.title = title
        self.rows: list[list[Any]] = [list(r) for r in rows or []]
        self.updates: list[tuple[str, dict, dict]] = []
        self.appends: list[tuple[str, dict, dict]] = []
        self.fail_on: set[str] = set()

    def _maybe_fail(self, operation: str) -> None:
        if operation in self.fail_on:
            raise RuntimeError(f"{operation} failed")

    def worksheets(self):
        self._maybe_fail("worksheets")
        return [SimpleNamespace(title=self.title)]

    def values_get(self, range_name: str, params: dict | None = None) -> dict:
        self._maybe_fail("values_get")
        response: dict[str, Any] = {"range": range_name}
        if self.rows and self.rows[0]:
            response["values"] = [list(self.rows[0])]
        return response

    def values_update(self, range_name: str, params: dict, body: dict) -> dict:
        self._maybe_fail("values_update")
        self.updates.append((range_name, params, body))
        header = body["values"][0]
        if self.rows:
            self.rows[0] = list(header)
        else:
            self.rows.append(list(header))
        return {"updatedRange": range_name}

    def values_append(self, range_name: str, params: dict, body: dict) -> dict:
        self._maybe_fail("values_append")
        self.appends.append((range_name, params, body))
        self.rows.extend(list(r) for r in body["values"])
        return {"updates": {"updatedRange": f"'{self.title}'!A{len(self.rows)}"}}

    @property
    def headers(self) -> list[Any]:
        return self.rows[0] if self.rows else []

    @property
    def records(self) -> list[list[Any]]:
        return self.rows[1:]


@pytest.fixture
def fake_spreadsheet() -> FakeSpreadsheet:
    return FakeSpreadsheet()


@pytest.fixture
def sheets_service(
    test_settings: Settings, roster: Roster, fake_spreadsheet: FakeSpreadsheet
) -> GoogleSheetsService:
    """Sheet sink wired to the in-memory spreadsheet."""
    return GoogleSheetsService(test_settings, roster, opener=lambda: fake_spreadsheet)


@pytest.fixture
def sheet_with_rows(test_settings: Settings, roster: Roster):
    """Factory: ``sheet_with_rows(rows)`` -> (FakeSpreadsheet, GoogleSheetsService)."""

    def factory(rows: list[list[Any]]):
        spreadsheet = FakeSpreadsheet(rows=rows)
        service = GoogleSheetsService(test_settings, roster, opener=lambda: spreadsheet)
        return spreadsheet, service

    return factory


# ---------------------------------------------------------------------------
# Google Chat
# ---------------------------------------------------------------------------


class FakeResponse:
    def __init__(self, status: int = 200, text: str = "{}"):
        self.status = status
        self._text = text

    async def text(self) -> str:
        return self._text

    async def __aenter__(self) -> "FakeResponse":
        return self

    async def __aexit__(self, *exc_info) -> None:
        return None


class FakeSession:
    """
    Minimal aiohttp ``ClientSession`` replacement for webhook calls.

    ``status`` sets the answer; ``error`` makes ``post`` raise instead.
    """

    def __init__(self, status: int = 200, error: BaseException | None = None):
        self.status = status
        self.error = error
        self.posts: list[dict[str, Any]] = []

    def post(self, url: str, json: dict | None = None, timeout: Any = None):
        self.posts.append({"url": url, "json": json, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return FakeResponse(self.status, text="upstream said no")

    async def close(self) -> None:
        return None

    @property
    def texts(self) -> list[str]:
        return [post["json"]["text"] for post in self.posts]


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def chat_service(test_settings: Settings, fake_session: FakeSession) -> GoogleChatService:
    return GoogleChatService(fake_session, test_settings)


@pytest.fixture
def chat_service_with(test_settings: Settings):
    """Factory: ``chat_service_with(status=500)`` or ``chat_service_with(error=exc)``."""

    def factory(status: int = 200, error: BaseException | None = None):
        return GoogleChatService(FakeSession(status=status, error=error), test_settings)

    return factory


@pytest.fixture
def webhook_url() -> str:
    return WEBHOOK_URL


# ---------------------------------------------------------------------------
# Orchestrator doubles
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_sheets():
    """Sheet sink double whose append succeeds."""
    mock = MagicMock(spec=GoogleSheetsService)
    mock.append_record = AsyncMock(return_value=True)
    mock.initialize_sheet = AsyncMock(return_value=True)
    mock.initialized = True
    return mock


@pytest.fixture
def mock_chat():
    """Chat sink double whose notifications succeed."""
    mock = MagicMock(spec=GoogleChatService)
    mock.send_game_notification = AsyncMock(return_value=True)
    mock.send_error_notification = AsyncMock(return_value=True)
    return mock

