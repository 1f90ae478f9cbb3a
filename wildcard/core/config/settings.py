"""
Settings for the Wild Card score tracker.

Simple, reliable environment variable configuration for the bot, the HTTP API
and the two sinks (Google Sheets and Google Chat).
"""

import os
import tomllib
from pathlib import Path

from dotenv import load_dotenv

# Load .env file for local development - look in current working directory
load_dotenv(".env")

DEFAULT_ROSTER = ("Winz", "Luffy", "Lucas", "Finn")
DEFAULT_CREDENTIALS_PATH = "./credentials/google-credentials.json"


def _get_version_from_pyproject() -> str:
    """
    Read version from pyproject.toml file.

    Returns:
        Version string from pyproject.toml, or fallback version
    """
    current_path = Path(__file__)
    for parent in [current_path.parent, *current_path.parents]:
        pyproject_path = parent / "pyproject.toml"
        if pyproject_path.exists():
            try:
                with open(pyproject_path, "rb") as f:
                    pyproject_data = tomllib.load(f)
                    version = pyproject_data.get("project", {}).get("version")
                    if version:
                        return version
            except (OSError, tomllib.TOMLDecodeError):
                continue

    return "0.1.0"


def _parse_roster(raw: str | None) -> tuple[str, ...]:
    """Split a comma separated roster, keeping order and dropping blanks and repeats."""
    if not raw:
        return DEFAULT_ROSTER

    names: list[str] = []
    for part in raw.split(","):
        name = part.strip()
        if name and name not in names:
            names.append(name)
    return tuple(names)


def _empty_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


class Settings:
    """Application settings with environment-based configuration."""

    def __init__(self):
        # ================================================================
        # Version & General Configuration
        # ================================================================
        self.version: str = _get_version_from_pyproject()
        self.port: int = int(os.getenv("PORT", "3000"))
        self.time_zone: str = os.getenv("TIME_ZONE") or os.getenv(
            "TZ", "Asia/Bangkok"
        )
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO")
        self.log_dir: str = os.getenv("LOG_DIR", "./logs")
        self.environment: str = os.getenv("ENVIRONMENT", "DEV")

        # ================================================================
        # Players
        # ================================================================
        self.roster: tuple[str, ...] = _parse_roster(os.getenv("ROSTER"))

        # ================================================================
        # Telegram Bot Configuration
        # ================================================================
        self.telegram_bot_token: str | None = _empty_to_none(
            os.getenv("TELEGRAM_BOT_TOKEN")
        )

        # ================================================================
        # Google Sheets Configuration
        # ================================================================
        self.google_sheets_id: str | None = _empty_to_none(
            os.getenv("GOOGLE_SHEETS_ID")
        )
        self.google_credentials_path: str = os.getenv(
            "GOOGLE_CREDENTIALS_PATH", DEFAULT_CREDENTIALS_PATH
        )
        # Inline service account JSON, preferred over the file when set
        self.google_credentials_json: str | None = _empty_to_none(
            os.getenv("GOOGLE_CREDENTIALS_JSON")
        )

        # ================================================================
        # Google Chat Configuration
        # ================================================================
        self.google_chat_webhook_url: str | None = _empty_to_none(
            os.getenv("GOOGLE_CHAT_WEBHOOK_URL")
        )

        # Applies to every call made by the sheet and chat sinks
        self.sink_timeout_seconds: float = float(
            os.getenv("SINK_TIMEOUT_SECONDS", "10")
        )

        self._validate_settings()

    def _validate_settings(self):
        """Validate settings values."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR"]
        if self.log_level.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        self.log_level = self.log_level.upper()

        valid_environments = ["DEV", "PROD"]
        if self.environment.upper() not in valid_environments:
            self.environment = "DEV"  # Default fallback
        self.environment = self.environment.upper()

        if self.sink_timeout_seconds <= 0:
            raise ValueError("SINK_TIMEOUT_SECONDS must be greater than zero")

        if not self.roster:
            raise ValueError("ROSTER must name at least one player")

    def require_bot_token(self) -> str:
        """Return the Telegram bot token or fail loudly when it is missing."""
        if not self.telegram_bot_token:
            raise ValueError("TELEGRAM_BOT_TOKEN is required to run the bot")
        return self.telegram_bot_token

    @property
    def has_bot(self) -> bool:
        """Check if the Telegram bot is configured."""
        return self.telegram_bot_token is not None

    @property
    def has_sheets(self) -> bool:
        """Check if a spreadsheet and some form of credentials are configured."""
        if not self.google_sheets_id:
            return False
        return bool(self.google_credentials_json) or Path(
            self.google_credentials_path
        ).exists()

    @property
    def has_chat_webhook(self) -> bool:
        """Check if the Google Chat webhook is configured."""
        return self.google_chat_webhook_url is not None

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == "DEV"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "PROD"


# Global settings instance
settings = Settings()
