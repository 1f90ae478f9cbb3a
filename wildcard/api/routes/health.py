"""
Health check endpoint.
"""

import time
from typing import Any

from fastapi import APIRouter, Request

from wildcard.core.logging.logger import get_api_logger

logger = get_api_logger()
router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(request: Request) -> dict[str, Any]:
    """
    Liveness plus a summary of what is configured.

    Configuration flags come from the settings the app was started with;
    nothing here calls Google.
    """
    config = request.app.state.settings
    roster = request.app.state.roster

    health_data = {
        "status": "healthy",
        "timestamp": time.time(),
        "environment": {
            "environment": config.environment,
            "version": config.version,
            "time_zone": config.time_zone,
        },
        "services": {
            "sheets": {
                "configured": config.has_sheets,
                "initialized": request.app.state.sheets_service.initialized,
            },
            "chat": {"configured": config.has_chat_webhook},
            "bot": {
                "configured": config.has_bot,
                "running": getattr(request.app.state, "telegram_application", None)
                is not None,
            },
        },
        "roster_size": len(roster),
    }

    logger.debug(f"Health check completed - Status: {health_data['status']}")
    return health_data
