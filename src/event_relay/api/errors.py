"""Exception handlers rendering errors into the standard response envelope."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from ..core.exceptions import RelayError
from ..models.schemas import ErrorDetail, EventResponse

logger = logging.getLogger(__name__)


def error_response(status_code: int, code: str, message: str) -> JSONResponse:
    body = EventResponse(error=ErrorDetail(code=code, message=message))
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
    )


async def relay_error_handler(request: Request, exc: RelayError) -> JSONResponse:
    """Handle client errors raised while parsing or validating an event."""
    logger.warning(
        f"{request.method} {request.url.path} rejected with "
        f"{exc.status_code} {exc.code}: {exc.message}"
    )
    return error_response(exc.status_code, exc.code, exc.message)


async def unknown_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global exception handler for unhandled errors."""
    logger.error(f"Unhandled error: {exc}", exc_info=exc)
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "UNKNOWN_ERROR",
        "An unexpected error occurred",
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RelayError, relay_error_handler)
    app.add_exception_handler(Exception, unknown_error_handler)
