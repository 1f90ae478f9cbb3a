"""
Request context management using contextvars for automatic propagation.

The context is set once by the front-end that received the submission (the
bot handler or the HTTP route) and is then available to every service that
logs while handling it.
"""

from contextvars import ContextVar

# Which front-end is handling the current request ("bot", "api")
_source_context: ContextVar[str | None] = ContextVar("source", default=None)
# Who submitted the scores (Telegram username, etc.)
_submitter_context: ContextVar[str | None] = ContextVar("submitter", default=None)


def set_request_context(
    source: str | None = None,
    submitter: str | None = None,
) -> None:
    """
    Set the request context for the current async context.

    Args:
        source: Front-end identifier ("bot" or "api")
        submitter: Display name of the person submitting scores
    """
    if source is not None:
        _source_context.set(source)
    if submitter is not None:
        _submitter_context.set(submitter)


def get_current_source_context() -> str | None:
    """Get the current front-end identifier, or None if not set."""
    return _source_context.get()


def get_current_submitter_context() -> str | None:
    """Get the current submitter, or None if not set."""
    return _submitter_context.get()


def clear_request_context() -> None:
    """
    Clear the request context.

    The bot handles updates one after another in a single task, so each
    handler clears what it set before the next update is processed.
    """
    _source_context.set(None)
    _submitter_context.set(None)
