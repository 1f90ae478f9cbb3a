"""Local timestamps for sheet rows and chat notifications."""

from datetime import datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from wildcard.core.logging.logger import get_logger

logger = get_logger(__name__)

RECORD_FORMAT = "%m/%d/%Y, %I:%M:%S %p"
NOTIFICATION_FORMAT = "%m/%d/%Y, %I:%M %p"


def _zone(time_zone: str) -> ZoneInfo:
    try:
        return ZoneInfo(time_zone)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning(f"Unknown time zone '{time_zone}', falling back to UTC")
        return ZoneInfo("UTC")


def local_now(time_zone: str) -> datetime:
    """Current time in the configured zone (UTC when the zone is unknown)."""
    return datetime.now(_zone(time_zone))


def format_record_timestamp(time_zone: str, now: datetime | None = None) -> str:
    """Timestamp for a sheet row, e.g. ``10/16/2026, 03:04:05 PM``."""
    moment = now or local_now(time_zone)
    return moment.astimezone(_zone(time_zone)).strftime(RECORD_FORMAT)


def format_notification_timestamp(time_zone: str, now: datetime | None = None) -> str:
    """Timestamp for a chat notification, e.g. ``10/16/2026, 03:04 PM``."""
    moment = now or local_now(time_zone)
    return moment.astimezone(_zone(time_zone)).strftime(NOTIFICATION_FORMAT)
