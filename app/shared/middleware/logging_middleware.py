# app/shared/middleware/logging_middleware.py (async version)

"""
Middleware for HTTP request logging.

Each request gets an id (taken from `X-Request-ID` or generated) that is
logged with the request line and echoed back in the response headers.
"""

import time
import uuid
import logging
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from app.adapters.configuration.config import settings

# Configure logger
logger = logging.getLogger(__name__)

# Health checks would flood the log
QUIET_PATHS = {"/health"}

# Requests slower than this are logged as warnings (ms)
SLOW_REQUEST_MS = 2000


class AsyncRequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs method, path, status and duration of every request.
    """

    async def dispatch(self, request: Request, call_next):
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:8]
        method, path = request.method, request.url.path

        if settings.ENVIRONMENT == "production":
            logger.info(f"[{request_id}] -> {method} {path}")
        else:
            client = request.client.host if request.client else "N/A"
            logger.info(
                f"[{request_id}] -> {method} {path} | "
                f"Query: {dict(request.query_params) or 'N/A'} | Client: {client}"
            )

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        log = logger.warning if elapsed_ms > SLOW_REQUEST_MS else logger.info
        log(f"[{request_id}] <- {response.status_code} {method} {path} {elapsed_ms:.0f}ms")

        response.headers["X-Request-ID"] = request_id
        return response
