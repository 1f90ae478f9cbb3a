"""
Request and response logging middleware.
"""

import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from wildcard.core.config.settings import settings
from wildcard.core.logging.logger import get_logger

SKIP_PATHS = ("/health", "/docs", "/redoc", "/openapi.json", "/favicon.ico")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs method, path, status and timing for every API call.

    Bodies are never logged; score payloads are logged by the route itself.
    Health checks and docs are skipped to keep the log readable.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        start_time = time.time()
        logger = get_logger(__name__)
        skip = request.url.path.startswith(SKIP_PATHS)

        if not skip:
            client_host = request.client.host if request.client else "unknown"
            logger.info(f"Incoming {request.method} {request.url.path} from {client_host}")

        response = await call_next(request)
        process_time_ms = round((time.time() - start_time) * 1000, 2)

        if settings.is_development:
            response.headers["X-Process-Time"] = str(process_time_ms)

        if not skip:
            status_code = response.status_code
            if status_code >= 500:
                log = logger.error
            elif status_code >= 400:
                log = logger.warning
            else:
                log = logger.info
            log(
                f"Response {status_code} for {request.method} {request.url.path} "
                f"({process_time_ms}ms)"
            )

        return response
