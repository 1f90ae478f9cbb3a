"""
Rich-based logger with request context support for the score tracker.

Messages are prefixed with the front-end that handled the submission and the
person who submitted it, so bot and API traffic can be told apart in one log.
"""

import logging
import os
from datetime import datetime

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

from wildcard.core.config.settings import settings


class CompactFormatter(logging.Formatter):
    """Formatter that shortens long module names for better readability."""

    def format(self, record):
        if record.name.startswith("wildcard."):
            # wildcard.services.sheets_service -> services.sheets_service
            parts = record.name.split(".")
            if len(parts) > 2:
                record.name = ".".join(parts[-2:])

        return super().format(record)


_theme = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "debug": "dim white",
    }
)
_console = Console(theme=_theme)


class ContextLogger:
    """
    Logger wrapper that adds source and submitter context to messages.

    Context is added as a message prefix instead of through the format string,
    so third-party records without context still format cleanly.
    """

    def __init__(
        self,
        logger: logging.Logger,
        source: str | None = None,
        submitter: str | None = None,
    ):
        self.logger = logger
        self.source = source or "---"
        self.submitter = submitter or "---"

    def _format_message(self, message: str) -> str:
        """Add context prefix to message."""
        from .context import get_current_source_context, get_current_submitter_context

        current_source = get_current_source_context() or self.source
        current_submitter = get_current_submitter_context() or self.submitter

        if current_source and current_source != "---":
            if current_submitter and current_submitter != "---":
                return f"[{current_source}][U:{current_submitter}] {message}"
            return f"[{current_source}] {message}"
        elif current_submitter and current_submitter != "---":
            return f"[U:{current_submitter}] {message}"
        return message

    def debug(self, message: str, *args, **kwargs) -> None:
        self.logger.debug(self._format_message(message), *args, **kwargs)

    def info(self, message: str, *args, **kwargs) -> None:
        self.logger.info(self._format_message(message), *args, **kwargs)

    def warning(self, message: str, *args, **kwargs) -> None:
        self.logger.warning(self._format_message(message), *args, **kwargs)

    def error(self, message: str, *args, **kwargs) -> None:
        self.logger.error(self._format_message(message), *args, **kwargs)


def setup_logging(
    *,
    level: str = "INFO",
    mode: str = "PROD",
    log_dir: str | None = None,
    console_fmt: str | None = None,
    file_fmt: str | None = None,
) -> None:
    """
    Initialize the root logger with Rich formatting.

    Parameters
    ----------
    level : str
        Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
    mode : str
        "DEV" creates daily log files + console; anything else → console only
    log_dir : str, optional
        Directory for log files (DEV mode only)
    console_fmt : str, optional
        Console format string
    file_fmt : str, optional
        File format string
    """
    lvl = level.upper()
    lvl = lvl if lvl in ("DEBUG", "INFO", "WARNING", "ERROR") else "INFO"

    # RichHandler already shows level and time
    console_format = console_fmt or "[%(name)s] %(message)s"
    file_format = file_fmt or "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

    rich_handler = RichHandler(
        console=_console,
        rich_tracebacks=True,
        show_time=True,
        show_level=True,
        markup=False,
    )
    rich_handler.setFormatter(CompactFormatter(console_format))

    handlers: list[logging.Handler] = [rich_handler]

    if mode.upper() == "DEV" and log_dir:
        os.makedirs(log_dir, exist_ok=True)
        logfile = os.path.join(log_dir, f"wildcard_{datetime.now():%Y%m%d}.log")
        file_handler = logging.FileHandler(logfile, encoding="utf-8")
        file_handler.setFormatter(CompactFormatter(file_format))
        handlers.append(file_handler)
        _console.print(f"[green]DEV mode:[/] console + file → {logfile}")
    else:
        _console.print(f"Logging configured for mode '{mode}'. Console only.")

    logging.basicConfig(level=lvl, handlers=handlers, force=True)

    # The Google client and the bot library are chatty at INFO
    for noisy in ("httpx", "telegram.ext", "google.auth"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    logging.getLogger("WildCardLoggerSetup").info(f"Logging initialized ({lvl})")


def setup_app_logging() -> None:
    """
    Initialize application logging.

    Called once during application startup (FastAPI lifespan or CLI command).
    """
    setup_logging(
        level=settings.log_level,
        mode="DEV" if settings.is_development else "PROD",
        log_dir=settings.log_dir if settings.is_development else None,
    )


def get_logger(name: str) -> ContextLogger:
    """
    Get a logger that automatically uses request context variables.

    Args:
        name: Logger name (usually __name__)

    Returns:
        ContextLogger instance with automatic context from context variables
    """
    from .context import get_current_source_context, get_current_submitter_context

    base_logger = logging.getLogger(name)
    return ContextLogger(
        base_logger,
        source=get_current_source_context(),
        submitter=get_current_submitter_context(),
    )


def get_app_logger() -> ContextLogger:
    """Get application logger for general app events (startup, shutdown, etc.)."""
    return get_logger("wildcard.app")


def get_api_logger(name: str | None = None) -> ContextLogger:
    """Get API logger for HTTP endpoints."""
    return get_logger(name or "wildcard.api")
