"""Global exception handlers.

Every failure leaves the service as JSON with an ``error`` key and, where
available, a ``detail`` key.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from gramabot.core.errors import GramaBotError

from .models import ErrorResponse

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR = "AI request failed"
INVALID_BODY_ERROR = "Invalid request body"


def _error_body(error: str, detail: str | None = None) -> dict:
    return ErrorResponse(error=error, detail=detail).model_dump(exclude_none=True)


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers on ``app``."""

    @app.exception_handler(GramaBotError)
    async def handle_gramabot_error(request: Request, exc: GramaBotError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.error, exc.detail),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_invalid_body(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = exc.errors()
        detail = errors[0].get("msg") if errors else None
        logger.warning("Rejected body on %s: %s", request.url.path, detail)
        return JSONResponse(
            status_code=400,
            content=_error_body(INVALID_BODY_ERROR, detail),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content=_error_body(UNEXPECTED_ERROR, str(exc) or type(exc).__name__),
        )
