"""
Google Chat notification sink.

Posts a short game summary (or an operational alert) to an incoming webhook.
The aiohttp session is injected; this module never creates its own.
"""

import asyncio
from collections.abc import Mapping
from typing import Any

import aiohttp

from wildcard.core.config.settings import Settings
from wildcard.core.logging.logger import get_logger
from wildcard.domain.scores import format_score

from .timestamps import format_notification_timestamp


class GoogleChatService:
    """
    Webhook client for the group chat.

    Both send methods return True only when the webhook answers HTTP 200.
    Network errors, timeouts and other statuses are logged and return False.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        config: Settings,
        logger: Any | None = None,
    ):
        """
        Args:
            session: Persistent aiohttp session (managed by the app lifespan)
            config: Application settings (webhook URL, time zone, timeout)
            logger: Pre-configured logger instance
        """
        self.session = session
        self.config = config
        self.logger = logger or get_logger(__name__)
        self._timeout = aiohttp.ClientTimeout(total=config.sink_timeout_seconds)

    @property
    def webhook_url(self) -> str | None:
        return self.config.google_chat_webhook_url

    @staticmethod
    def build_game_message(
        scores: Mapping[str, int],
        timestamp: str,
        submitted_by: str | None = None,
    ) -> dict[str, str]:
        """Webhook payload announcing one game."""
        scores_text = "\n".join(
            f"  • {player}: {format_score(score)}" for player, score in scores.items()
        )
        submitter_line = f"👤 Submitted by: {submitted_by}\n\n" if submitted_by else ""
        return {
            "text": (
                "🎮 *New Wild Card Game Result*\n\n"
                f"📅 Time: {timestamp}\n\n"
                f"{submitter_line}"
                f"*Scores:*\n{scores_text}\n\n"
            )
        }

    @staticmethod
    def build_error_message(error_message: str) -> dict[str, str]:
        """Webhook payload for an operational alert."""
        return {"text": f"⚠️ *Wild Card Bot Error*\n\n{error_message}"}

    async def send_game_notification(
        self, scores: Mapping[str, int], submitted_by: str | None = None
    ) -> bool:
        """
        Announce a recorded game in the group chat.

        Args:
            scores: Validated score entry, in submission order
            submitted_by: Optional submitter shown under the time line

        Returns:
            True if the webhook answered 200
        """
        if not self.webhook_url:
            self.logger.warning("Google Chat webhook URL not configured")
            return False

        timestamp = format_notification_timestamp(self.config.time_zone)
        message = self.build_game_message(scores, timestamp, submitted_by)

        if await self._post(message):
            self.logger.info("Notification sent to Google Chat successfully")
            return True
        return False

    async def send_error_notification(self, error_message: str) -> bool:
        """
        Send an arbitrary alert text to the group chat.

        Returns:
            True if the webhook answered 200
        """
        if not self.webhook_url:
            return False
        return await self._post(self.build_error_message(error_message))

    async def _post(self, message: dict[str, str]) -> bool:
        """POST ``message`` as JSON to the webhook; any failure becomes False."""
        try:
            async with self.session.post(
                self.webhook_url, json=message, timeout=self._timeout
            ) as response:
                if response.status == 200:
                    return True

                try:
                    error_text = await response.text()
                except Exception:
                    error_text = "Error reading response"
                self.logger.error(
                    f"Failed to send Google Chat notification: {response.status} - "
                    f"{error_text[:200]}"
                )
                return False

        except asyncio.TimeoutError:
            self.logger.error(
                f"Google Chat webhook timed out after {self._timeout.total}s"
            )
            return False
        except aiohttp.ClientError as e:
            self.logger.error(f"Error sending Google Chat notification: {e}")
            return False
        except Exception as e:
            self.logger.error(
                f"Unexpected error sending Google Chat notification: {e}", exc_info=True
            )
            return False
