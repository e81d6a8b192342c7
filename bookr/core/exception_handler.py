import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from bookr.core.exceptions import BookrException

logger = logging.getLogger(__name__)


async def bookr_exception_handler(request: Request, exc: BookrException) -> JSONResponse:
    """Render application errors as ``{"error", "detail"}`` JSON."""
    log = logger.error if exc.status_code >= 500 else logger.info
    log(
        f"{type(exc).__name__}: {exc.detail}",
        extra={
            "request_id": getattr(request.state, "request_id", None),
            "path": request.url.path,
            "status_code": exc.status_code,
        },
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": type(exc).__name__, "detail": exc.detail},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.critical(
        "Unhandled exception",
        exc_info=exc,
        extra={
            "request_id": getattr(request.state, "request_id", None),
            "path": request.url.path,
        },
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "InternalServerError", "detail": "Internal server error."},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Registers all exception handlers for the FastAPI application."""
    app.add_exception_handler(BookrException, bookr_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
