"""
Google Sheets record sink.

Key Design Decisions:
- One spreadsheet tab; row 1 holds ``Timestamp`` followed by the roster
- The header row is re-derived and repaired before every append
- Every remote call runs in a worker thread under a fixed timeout
- Failures are logged and reduced to False/None, never raised to callers
"""

import asyncio
import json
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

import gspread

from wildcard.core.config.settings import Settings
from wildcard.core.logging.logger import get_logger
from wildcard.domain.roster import Roster

from .timestamps import format_record_timestamp

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]
FALLBACK_SHEET_NAME = "Sheet1"
TIMESTAMP_HEADER = "Timestamp"
SUBMITTED_BY_HEADER = "Submitted By"


def _describe(exc: BaseException) -> str:
    """Readable error text; timeouts carry no message of their own."""
    return str(exc) or type(exc).__name__


class GoogleSheetsService:
    """
    Appends one row per game to a Google Sheet.

    The service starts uninitialized. Every public operation initializes it
    lazily and fails closed when that is impossible (missing credentials,
    unknown spreadsheet, network down). Initialization is guarded by a lock
    so concurrent first requests open the spreadsheet only once.

    Args:
        config: Application settings (spreadsheet id, credentials, time zone, timeout)
        roster: Players that own a column in the sheet
        opener: Optional blocking callable returning a gspread ``Spreadsheet``;
            defaults to opening ``config.google_sheets_id`` with service
            account credentials
    """

    def __init__(
        self,
        config: Settings,
        roster: Roster,
        opener: Callable[[], Any] | None = None,
    ):
        self.config = config
        self.roster = roster
        self.timeout = config.sink_timeout_seconds
        self.logger = get_logger(__name__)

        self._opener = opener or self._open_spreadsheet
        self._spreadsheet: Any = None
        self._init_lock = asyncio.Lock()

        self.initialized = False
        self.sheet_name: str | None = None

    # ------------------------------------------------------------------
    # Initialization
    # ------------------------------------------------------------------

    def _open_spreadsheet(self) -> gspread.Spreadsheet:
        """Load service account credentials and open the spreadsheet (blocking)."""
        if not self.config.google_sheets_id:
            raise ValueError("GOOGLE_SHEETS_ID is not configured")

        if self.config.google_credentials_json:
            info = json.loads(self.config.google_credentials_json)
            client = gspread.service_account_from_dict(info, scopes=SCOPES)
        else:
            credentials_path = Path(self.config.google_credentials_path)
            if not credentials_path.exists():
                raise FileNotFoundError(
                    f"Google credentials file not found: {credentials_path}"
                )
            client = gspread.service_account(
                filename=str(credentials_path), scopes=SCOPES
            )

        client.set_timeout(self.timeout)
        return client.open_by_key(self.config.google_sheets_id)

    async def _run(self, func: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        """Run a blocking Google API call off the event loop, bounded by the sink timeout."""
        return await asyncio.wait_for(
            asyncio.to_thread(func, *args, **kwargs), timeout=self.timeout
        )

    async def initialize(self, force: bool = False) -> bool:
        """
        Open the spreadsheet and discover the tab to write to.

        Args:
            force: Re-open even if already initialized

        Returns:
            True when the sink is ready
        """
        async with self._init_lock:
            if self.initialized and not force:
                return True

            self.initialized = False
            try:
                self._spreadsheet = await self._run(self._opener)
            except Exception as e:
                self.logger.error(f"Failed to initialize Google Sheets: {_describe(e)}")
                return False

            self.sheet_name = await self._discover_sheet_name()
            self.initialized = True
            self.logger.info("Google Sheets API initialized successfully")
            return True

    async def _discover_sheet_name(self) -> str:
        """Title of the first tab, or ``Sheet1`` when it cannot be read."""
        try:
            worksheets = await self._run(self._spreadsheet.worksheets)
        except Exception as e:
            self.logger.error(f"Failed to get sheet name: {_describe(e)}")
            return FALLBACK_SHEET_NAME

        if not worksheets:
            return FALLBACK_SHEET_NAME

        title = worksheets[0].title
        self.logger.info(f'Using sheet: "{title}"')
        return title

    def _range(self, cells: str) -> str:
        """A1 notation scoped to the active tab, quoted so any title works."""
        quoted = (self.sheet_name or FALLBACK_SHEET_NAME).replace("'", "''")
        return f"'{quoted}'!{cells}"

    # ------------------------------------------------------------------
    # Headers
    # ------------------------------------------------------------------

    def get_standard_headers(self) -> list[str]:
        """``Timestamp`` followed by every player in roster order."""
        return [TIMESTAMP_HEADER, *self.roster]

    async def get_headers(self) -> list[str] | None:
        """
        Read the first row of the sheet.

        Returns:
            The header cells ([] for an empty row), or None on failure
        """
        if not await self.initialize():
            return None

        try:
            response = await self._run(self._spreadsheet.values_get, self._range("1:1"))
        except Exception as e:
            self.logger.error(f"Failed to get headers: {_describe(e)}")
            return None

        rows = response.get("values") or []
        return [str(cell) for cell in rows[0]] if rows else []

    async def ensure_headers(self) -> list[str] | None:
        """
        Make row 1 equal to the standard headers.

        Row 1 is only written when it differs, so repeated calls without a
        roster change write once at most. Manual edits to row 1 are replaced.

        Returns:
            The effective header row, or None on failure
        """
        current = await self.get_headers()
        if current is None:
            return None

        standard = self.get_standard_headers()
        if current == standard:
            return current

        # Blank out trailing cells left over from a longer roster
        values = standard + [""] * max(0, len(current) - len(standard))
        try:
            await self._run(
                self._spreadsheet.values_update,
                self._range("1:1"),
                params={"valueInputOption": "RAW"},
                body={"values": [values]},
            )
        except Exception as e:
            self.logger.error(f"Failed to ensure headers: {_describe(e)}")
            return None

        self.logger.info(f"Headers updated to include all players: {list(self.roster)}")
        return standard

    async def initialize_sheet(self, force: bool = False) -> bool:
        """
        Initialize the sink and write the header row if needed.

        Args:
            force: Re-open the spreadsheet even if already initialized
        """
        if not await self.initialize(force=force):
            return False
        return await self.ensure_headers() is not None

    # ------------------------------------------------------------------
    # Records
    # ------------------------------------------------------------------

    @staticmethod
    def build_row(
        headers: list[str],
        matched_scores: Mapping[str, int],
        timestamp: str,
        submitted_by: str | None = None,
    ) -> list[str | int]:
        """Lay out one game positionally under ``headers``; absent players get ``""``."""
        row: list[str | int] = []
        for header in headers:
            if header == TIMESTAMP_HEADER:
                row.append(timestamp)
            elif header == SUBMITTED_BY_HEADER:
                row.append(submitted_by or "")
            elif header in matched_scores:
                row.append(matched_scores[header])
            else:
                row.append("")
        return row

    async def append_record(
        self, scores: Mapping[str, int], submitted_by: str | None = None
    ) -> bool:
        """
        Append a game to the sheet.

        Submitted names are matched against the roster first; names that
        match nobody are dropped from the row.

        Args:
            scores: Validated score entry keyed by submitted names
            submitted_by: Optional submitter, written only if the sheet has a
                ``Submitted By`` column

        Returns:
            True when the row was appended
        """
        if not await self.initialize():
            return False

        matched_scores = self.roster.match_scores(scores)

        headers = await self.ensure_headers()
        if headers is None:
            return False

        timestamp = format_record_timestamp(self.config.time_zone)
        row = self.build_row(headers, matched_scores, timestamp, submitted_by)

        try:
            response = await self._run(
                self._spreadsheet.values_append,
                self._range("A1"),
                params={"valueInputOption": "RAW", "insertDataOption": "INSERT_ROWS"},
                body={"values": [row]},
            )
        except Exception as e:
            self.logger.error(f"Failed to append to Google Sheets: {_describe(e)}")
            return False

        updated_range = (response or {}).get("updates", {}).get("updatedRange")
        self.logger.info(f"Game record added to Google Sheets: {updated_range}")
        self.logger.debug(f"Matched scores: {matched_scores}")
        return True
