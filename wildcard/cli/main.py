"""
Wild Card CLI main module.

Commands for running the server, running the bot on its own, preparing the
spreadsheet and checking a score line before sending it.
"""

import asyncio
import subprocess
import sys

import typer

from wildcard.core.config.settings import settings
from wildcard.core.logging.logger import get_app_logger, setup_app_logging
from wildcard.domain.errors import ScoreSumError
from wildcard.domain.scores import format_scores, get_sum, parse_scores, validate_sum

app = typer.Typer(help="Wild Card score tracker CLI")

ASGI_IMPORT = "wildcard.main:fastapi_app"


def _run_uvicorn(extra_args: list[str], host: str, port: int, label: str) -> None:
    cmd = [
        sys.executable,
        "-m",
        "uvicorn",
        ASGI_IMPORT,
        "--host",
        host,
        "--port",
        str(port),
        *extra_args,
    ]

    typer.echo(f"🚀 Starting Wild Card {label} server...")
    typer.echo(f"🌐 Server: http://{host}:{port}")
    typer.echo("💡 Press CTRL+C to stop")
    typer.echo()

    try:
        subprocess.run(cmd, check=True)
    except subprocess.CalledProcessError as e:
        typer.echo(
            f"❌ {label.capitalize()} server failed to start (exit code: {e.returncode})",
            err=True,
        )
        typer.echo(f"• Port {port} may already be in use (try --port)", err=True)
        raise typer.Exit(1)
    except KeyboardInterrupt:
        typer.echo(f"👋 {label.capitalize()} server stopped")


@app.command()
def dev(
    host: str = typer.Option("0.0.0.0", "--host", "-h", help="Host to bind to"),
    port: int = typer.Option(settings.port, "--port", "-p", help="Port to bind to"),
):
    """
    Run the API and bot with auto-reload.

    Examples:
        wildcard dev
        wildcard dev --port 8080
    """
    _run_uvicorn(["--reload"], host, port, "development")


@app.command()
def prod(
    host: str = typer.Option("0.0.0.0", "--host", "-h", help="Host to bind to"),
    port: int = typer.Option(settings.port, "--port", "-p", help="Port to bind to"),
):
    """
    Run the API and bot without auto-reload.

    A single worker keeps one bot poller per token.
    """
    _run_uvicorn(["--workers", "1"], host, port, "production")


async def _poll_bot() -> None:
    # Imported here so parse/init-sheet do not pay for the bot stack
    from wildcard.bot.application import build_application
    from wildcard.services.registry import ServiceRegistry, create_http_session

    logger = get_app_logger()
    token = settings.require_bot_token()

    async with create_http_session(settings) as session:
        services = ServiceRegistry(settings, session)
        if settings.has_sheets:
            await services.sheets_service.initialize_sheet()
        else:
            logger.warning(
                "⚠️ Google Sheets not configured. Bot will still work but won't save to sheets."
            )

        application = build_application(token, services.submission_service)
        async with application:
            await application.start()
            await application.updater.start_polling()
            logger.info("✅ Bot is running! Send /start to begin.")
            try:
                await asyncio.Event().wait()
            finally:
                await application.updater.stop()
                await application.stop()


@app.command()
def bot():
    """
    Run only the Telegram bot (long polling, no HTTP server).
    """
    setup_app_logging()
    if not settings.has_bot:
        typer.echo("❌ TELEGRAM_BOT_TOKEN is not set in .env file", err=True)
        raise typer.Exit(1)

    typer.echo("🤖 Wild Card Score Tracker Bot starting...")
    try:
        asyncio.run(_poll_bot())
    except KeyboardInterrupt:
        typer.echo("👋 Bot stopped")


async def _init_sheet() -> bool:
    from wildcard.services.registry import ServiceRegistry, create_http_session

    async with create_http_session(settings) as session:
        services = ServiceRegistry(settings, session)
        return await services.sheets_service.initialize_sheet(force=True)


@app.command("init-sheet")
def init_sheet():
    """
    Open the spreadsheet and write the header row.
    """
    setup_app_logging()
    if not settings.google_sheets_id:
        typer.echo("❌ GOOGLE_SHEETS_ID is not set", err=True)
        raise typer.Exit(1)

    if asyncio.run(_init_sheet()):
        typer.echo("✅ Google Sheets initialized")
    else:
        typer.echo("❌ Failed to initialize Google Sheets", err=True)
        raise typer.Exit(1)


@app.command()
def parse(text: str = typer.Argument(..., help='Score line, e.g. "Winz: 5, Finn: -5"')):
    """
    Check a score line without recording it.

    Examples:
        wildcard parse "Winz: 5, Luffy: 10, Lucas: -10, Finn: -5"
    """
    scores = parse_scores(text)
    if scores is None:
        typer.echo("❌ Invalid format! Use: Name1: score1, Name2: score2, ...", err=True)
        raise typer.Exit(1)

    typer.echo(f"Scores: {format_scores(scores)}")
    typer.echo(f"Sum: {get_sum(scores)}")

    if not validate_sum(scores):
        typer.echo(f"❌ {ScoreSumError(get_sum(scores))}", err=True)
        raise typer.Exit(1)

    typer.echo("✅ Valid entry")


if __name__ == "__main__":
    app()
