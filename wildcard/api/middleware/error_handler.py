"""
Global error handling middleware.

Last line of defence for exceptions no route handler caught.
"""

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from wildcard.core.logging.logger import get_logger


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Turns unhandled exceptions into the API's ``{success, message}`` shape.

    The exception and its traceback go to the log only; the client always
    gets the same generic body, whatever the environment.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        try:
            return await call_next(request)

        except HTTPException as http_exc:
            get_logger(__name__).warning(
                f"HTTP {http_exc.status_code} - {request.method} {request.url.path} - "
                f"Detail: {http_exc.detail}"
            )
            raise

        except Exception as exc:
            return self._handle_unexpected_exception(request, exc)

    def _handle_unexpected_exception(
        self, request: Request, exc: Exception
    ) -> JSONResponse:
        get_logger(__name__).error(
            f"Unhandled exception in {request.method} {request.url.path}: "
            f"{type(exc).__name__}: {exc}",
            exc_info=True,
        )

        return JSONResponse(
            status_code=500,
            content={"success": False, "message": "Internal server error"},
        )
