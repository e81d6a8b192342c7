# bookr/core/middleware.py
"""
HTTP middleware stack.

Starlette runs middleware in reverse order of registration, so
``register_middlewares`` adds the outermost layer (request logging) last.
"""

import time
import uuid
import logging
from typing import Iterable, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.cors import CORSMiddleware
from starlette.middleware.gzip import GZipMiddleware
from starlette.middleware.trustedhost import TrustedHostMiddleware

from bookr.core.config import settings
from bookr.core.security import SECURITY_HEADERS

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
UNLOGGED_PATHS = frozenset({"/health", "/favicon.ico"})


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Tags each request with an id (taken from ``X-Request-ID`` when the
    client sends one) and logs one line when it arrives and one when it
    completes.
    """

    def __init__(self, app, skip_paths: Iterable[str] = UNLOGGED_PATHS):
        super().__init__(app)
        self.skip_paths = frozenset(skip_paths)

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id
        quiet = request.url.path in self.skip_paths
        started = time.perf_counter()

        if not quiet:
            logger.info(
                f"--> {request.method} {request.url.path}",
                extra={
                    "request_id": request_id,
                    "client_ip": client_ip(request),
                    "query": str(request.query_params) or None,
                },
            )

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id

        if not quiet:
            elapsed_ms = round((time.perf_counter() - started) * 1000, 2)
            logger.info(
                f"<-- {request.method} {request.url.path} {response.status_code} ({elapsed_ms} ms)",
                extra={"request_id": request_id, "status_code": response.status_code},
            )
        return response


def client_ip(request: Request) -> str:
    """First hop of ``X-Forwarded-For``, else the socket peer."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers.update(SECURITY_HEADERS)
        if request.url.scheme == "https":
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response


class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    """
    Rejects bodies whose declared ``Content-Length`` exceeds ``max_size``.
    Chunked bodies carry no length and pass through; the cover upload
    endpoint enforces the same limit on what it reads.
    """

    def __init__(self, app, max_size: int):
        super().__init__(app)
        self.max_size = max_size

    async def dispatch(self, request: Request, call_next):
        declared = request.headers.get("content-length", "")
        if declared.isdigit() and int(declared) > self.max_size:
            logger.warning(
                f"Rejected {declared}-byte body on {request.url.path}",
                extra={"limit": self.max_size},
            )
            return JSONResponse(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                content={
                    "error": "PayloadTooLarge",
                    "detail": f"Request body exceeds {self.max_size} bytes.",
                },
            )
        return await call_next(request)


def register_middlewares(app: FastAPI) -> None:
    app.add_middleware(RequestSizeLimitMiddleware, max_size=settings.MAX_REQUEST_SIZE)
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(SecurityHeadersMiddleware)

    hosts = split_csv(settings.ALLOWED_HOSTS)
    if hosts and "*" not in hosts:
        app.add_middleware(TrustedHostMiddleware, allowed_hosts=hosts)
    else:
        logger.warning("Host header checking is off (ALLOWED_HOSTS is '*' or empty)")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=split_csv(settings.CORS_ORIGINS),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )
    app.add_middleware(RequestLoggingMiddleware)


def split_csv(value: Optional[str]) -> List[str]:
    return [item.strip() for item in (value or "").split(",") if item.strip()]
